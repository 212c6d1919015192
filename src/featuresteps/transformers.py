"""
featuresteps/transformers.py

Collection of sklearn-compatible feature steps with a fit/transform lifecycle.

Extended Description
--------------------
Each step is declared against a column selection, learns its parameters from a
training DataFrame in `fit`, and applies them to any DataFrame in `transform`.
The steps implemented here cover:
- dummy-variable expansion of factors (treatment or polynomial contrasts)
- holiday indicator features derived from date columns
- random imputation of left-censored values below a lower bound
- Box-Cox power transformation with lambda estimated by likelihood

All steps accept and return pandas DataFrames, preserve row order and index,
never mutate their input, and expose `tidy()` summaries with one row per
affected column.

Main Components
---------------
- DummyEncoder: factor -> k-1 indicator (or orthogonal polynomial) columns.
- HolidayFeatures: date -> `<col>_<holiday>` indicator columns.
- LowerBoundImputer: values at or below the training minimum -> U(0, min).
- BoxCoxTransformer: positive numeric columns -> Box-Cox transformed values.

Usage Example
-------------
>>> from featuresteps.transformers import DummyEncoder, BoxCoxTransformer
>>> enc = DummyEncoder(columns="diet").fit(df_train)
>>> df_new = enc.transform(df_test)
>>> bc = BoxCoxTransformer(columns=all_numeric()).fit(df_train)
>>> bc.tidy()

Notes
-----
Learned parameters (`levels_`, `threshold_`, `lambdas_`) are read-only
mappings; `transform` never changes them. Calling `transform` before `fit`
raises NotTrainedError.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.utils import check_random_state

from .base import BaseStep, ParamMap
from .boxcox import boxcox_transform, estimate_lambda, inverse_boxcox
from .columns import CATEGORICAL, DATE, NUMERIC, Selection
from .config import (
    BOXCOX_EPS,
    BOXCOX_LIMITS,
    BOXCOX_NUNIQUE,
    DEFAULT_HOLIDAYS,
    DEFAULT_ROLE,
)
from .contrasts import NA_ACTIONS, FactorLevels, dummy_names, encode_factor
from .exceptions import (
    MissingVocabularyError,
    NegativeThresholdError,
    NotCategoricalError,
)
from .holiday_calendar import get_holiday_features, validate_holidays

logger = logging.getLogger(__name__)


class DummyEncoder(BaseStep):
    """
    Convert factor columns into numeric dummy-variable columns.

    Extended Description
    --------------------
    For an unordered factor with k levels, k - 1 indicator columns are created;
    the first level is the reference cell and maps to an all-zero row. Ordered
    factors are encoded with k - 1 orthogonal polynomial contrasts instead.
    The original column is removed and the new columns are appended.

    The training levels (and the ordered flag) are stored at fit time. New data
    is re-mapped onto them, so categories never seen in training become missing
    and are encoded according to `na_action`.

    Parameters
    ----------
    columns : str, callable or sequence
        Column selection; selected columns must be pandas categoricals.
    role : str, default "predictor"
        Role of the generated columns, reported in the `role` column of `tidy()`.
    naming : callable, default dummy_names
        ``naming(column, labels, ordered) -> list of names``.
    na_action : {"pass", "zero"}, default "pass"
        "pass" propagates missing/unseen values as a row of NaN; "zero" encodes
        them as a row of zeros.

    Attributes
    ----------
    levels_ : mapping of str -> FactorLevels
        Stored levels and contrast basis per column.
    dummy_columns_ : mapping of str -> tuple of str
        Names of the columns generated from each original column.

    Examples
    --------
    >>> df = pd.DataFrame({"diet": pd.Categorical(["veg", "omni", "vegan"])})
    >>> DummyEncoder(columns="diet").fit_transform(df).columns.tolist()
    ['diet_veg', 'diet_vegan']
    """

    step_kind = "dummy"
    error_class = NotCategoricalError

    def __init__(
        self,
        columns: Selection = None,
        role: str = DEFAULT_ROLE,
        naming: Callable[..., Sequence[str]] = dummy_names,
        na_action: str = "pass",
    ):
        self.columns = columns
        self.role = role
        self.naming = naming
        self.na_action = na_action

    def _validate_columns(self, col_names, schema) -> None:
        if self.na_action not in NA_ACTIONS:
            raise ValueError(f"na_action must be one of {NA_ACTIONS}, got {self.na_action!r}.")
        self._require_types(col_names, schema, [CATEGORICAL], "factors (categorical)")

    def _fit_columns(self, X: pd.DataFrame, col_names: List[str]) -> dict:
        # A caller-supplied schema may disagree with the data itself.
        not_factors = [c for c in col_names if not isinstance(X[c].dtype, pd.CategoricalDtype)]
        if not_factors:
            raise NotCategoricalError(
                f"All columns for `{type(self).__name__}` should be factors (categorical). "
                "Offending columns: "
                + ", ".join(f"`{c}` ({X[c].dtype})" for c in not_factors)
            )

        levels: Dict[str, FactorLevels] = {}
        dummy_columns: Dict[str, tuple] = {}
        for col in col_names:
            fl = FactorLevels.from_series(X[col])
            if fl.n_columns == 0:
                logger.warning(
                    "Column `%s` has a single level; no dummy columns will be created.", col
                )
            names = list(self.naming(col, fl.labels, fl.ordered))
            if len(names) != fl.n_columns:
                raise ValueError(
                    f"naming returned {len(names)} names for {fl.n_columns} "
                    f"dummy columns of `{col}`."
                )
            levels[col] = fl
            dummy_columns[col] = tuple(names)
            logger.debug(
                "Column `%s`: %d levels (ordered=%s) -> %s",
                col,
                len(fl.levels),
                fl.ordered,
                names,
            )
        return {
            "levels_": ParamMap(levels),
            "dummy_columns_": ParamMap(dummy_columns),
        }

    def transform(self, X: pd.DataFrame):
        self._check_trained()
        X = self._as_frame(X)

        for col in self.columns_:
            if col not in self.levels_:
                raise MissingVocabularyError(
                    f"Factor level values not recorded for `{col}`."
                )
            fl = self.levels_[col]
            unseen = ~X[col].isna() & ~X[col].isin(fl.levels)
            if unseen.any():
                logger.warning(
                    "Column `%s` has %d value(s) not seen in training; encoded as missing.",
                    col,
                    int(unseen.sum()),
                )
            indicators = encode_factor(X[col], fl, na_action=self.na_action)
            new_cols = pd.DataFrame(
                indicators, columns=list(self.dummy_columns_[col]), index=X.index
            )
            X = pd.concat([X.drop(columns=[col]), new_cols], axis=1)
        return X

    def get_feature_names_out(self, input_features=None):
        self._check_trained()
        if input_features is None:
            input_features = self.feature_names_in_
        out = [c for c in input_features if c not in self.levels_]
        for col in self.columns_:
            out.extend(self.dummy_columns_[col])
        return np.asarray(out, dtype=object)

    def tidy(self) -> pd.DataFrame:
        terms = list(self.levels_) if self.trained else self._selection_terms()
        return pd.DataFrame({"terms": terms, "role": [self.role] * len(terms)})


class HolidayFeatures(BaseStep):
    """
    Derive holiday indicator columns from date columns.

    Extended Description
    --------------------
    For every selected date column and every configured holiday, a 0/1 column
    named ``<column>_<holiday>`` is appended; it is 1 when the row's date is that
    holiday's observance in the row's year. Unlike encoding steps, the original
    date columns are kept.

    Parameters
    ----------
    columns : str, callable or sequence
        Column selection; selected columns must be datetime64.
    role : str, default "predictor"
        Role of the generated columns, reported in the `role` column of `tidy()`.
    holidays : sequence of str, default ("LaborDay", "NewYearsDay", "ChristmasDay")
        Holiday names from `supported_holidays()`; validated on construction.

    Attributes
    ----------
    columns_ : list of str
        Date columns resolved at fit time.
    """

    step_kind = "holiday"

    def __init__(
        self,
        columns: Selection = None,
        role: str = DEFAULT_ROLE,
        holidays: Sequence[str] = DEFAULT_HOLIDAYS,
    ):
        validate_holidays(holidays)
        self.columns = columns
        self.role = role
        self.holidays = holidays

    def _validate_columns(self, col_names, schema) -> None:
        validate_holidays(self.holidays)
        self._require_types(col_names, schema, [DATE], "dates (datetime64)")

    def _fit_columns(self, X: pd.DataFrame, col_names: List[str]) -> dict:
        return {}

    def _holiday_list(self) -> List[str]:
        return [self.holidays] if isinstance(self.holidays, str) else list(self.holidays)

    def transform(self, X: pd.DataFrame):
        self._check_trained()
        X = self._as_frame(X)
        holidays = self._holiday_list()

        blocks = []
        for col in self.columns_:
            feats = get_holiday_features(X[col], holidays)
            feats.columns = [f"{col}_{h}" for h in feats.columns]
            feats.index = X.index
            blocks.append(feats)
        return pd.concat([X, *blocks], axis=1)

    def get_feature_names_out(self, input_features=None):
        self._check_trained()
        if input_features is None:
            input_features = self.feature_names_in_
        out = list(input_features)
        out.extend(f"{col}_{h}" for col in self.columns_ for h in self._holiday_list())
        return np.asarray(out, dtype=object)

    def tidy(self) -> pd.DataFrame:
        terms = self.columns_ if self.trained else self._selection_terms()
        rows = [(t, h, self.role) for t in terms for h in self._holiday_list()]
        return pd.DataFrame(rows, columns=["terms", "holiday", "role"])


class LowerBoundImputer(BaseStep):
    """
    Impute left-censored numeric values below a measurement floor.

    Extended Description
    --------------------
    For non-negative data that cannot be measured below some value, the floor
    is estimated as the training minimum. At transform time every value at or
    below that threshold is replaced by an independent draw from U(0, threshold).
    Values above the threshold pass through unchanged.

    Transform is randomized: repeated calls give different imputed values
    unless a seeded generator is supplied, either as `random_state` on the step
    or as the `random_state` argument of `transform`.

    Parameters
    ----------
    columns : str, callable or sequence
        Column selection; selected columns must be numeric.
    role : str, optional
        Not used; no new columns are created.
    random_state : int, RandomState or None, default None
        Source of the uniform draws. None uses numpy's global random state.

    Attributes
    ----------
    threshold_ : mapping of str -> float
        Training minimum (ignoring missing values) per column.
    """

    step_kind = "lowerimpute"

    def __init__(
        self,
        columns: Selection = None,
        role: Optional[str] = None,
        random_state=None,
    ):
        self.columns = columns
        self.role = role
        self.random_state = random_state

    def _validate_columns(self, col_names, schema) -> None:
        self._require_types(col_names, schema, [NUMERIC], "numeric")

    def _fit_columns(self, X: pd.DataFrame, col_names: List[str]) -> dict:
        threshold = {col: float(X[col].min(skipna=True)) for col in col_names}
        negative = [c for c, v in threshold.items() if v < 0]
        if negative:
            raise NegativeThresholdError(
                "Some columns have negative values ("
                + ", ".join(f"`{c}`" for c in negative)
                + "). Lower bound imputation is intended for data bounded at zero."
            )
        return {"threshold_": ParamMap(threshold)}

    def transform(self, X: pd.DataFrame, random_state=None):
        self._check_trained()
        X = self._as_frame(X)
        rng = check_random_state(
            random_state if random_state is not None else self.random_state
        )

        for col, threshold in self.threshold_.items():
            values = X[col].astype(float)
            affected = (values <= threshold).to_numpy()
            n_affected = int(affected.sum())
            if n_affected:
                values = values.to_numpy(copy=True)
                values[affected] = rng.uniform(0.0, threshold, size=n_affected)
                X[col] = values
            logger.debug("Column `%s`: imputed %d value(s) below %s", col, n_affected, threshold)
        return X

    def tidy(self) -> pd.DataFrame:
        if self.trained:
            return pd.DataFrame(
                {"terms": list(self.threshold_), "value": list(self.threshold_.values())}
            )
        terms = self._selection_terms()
        return pd.DataFrame({"terms": terms, "value": [np.nan] * len(terms)})


class BoxCoxTransformer(BaseStep):
    """
    Box-Cox transformation of strictly positive numeric columns.

    Extended Description
    --------------------
    For each selected column a transformation exponent lambda is estimated by
    maximizing the profile log-likelihood over `limits`. Columns with too few
    distinct values, with non-positive values, or whose optimum lies on the
    search boundary are left untransformed and do not appear in `lambdas_`.

    Parameters
    ----------
    columns : str, callable or sequence
        Column selection; columns are expected to be numeric.
    role : str, optional
        Not used; no new columns are created.
    limits : tuple of two floats, default (-5, 5)
        Search interval for lambda.
    nunique : int, default 5
        Minimum number of distinct values required to estimate lambda.
    eps : float, default 0.001
        Tolerance for the log branch and the boundary check.

    Attributes
    ----------
    lambdas_ : mapping of str -> float
        Estimated lambda for each qualifying column.

    Examples
    --------
    >>> bc = BoxCoxTransformer(columns=["carbon", "hydrogen"]).fit(df)
    >>> bc.tidy()
    """

    step_kind = "BoxCox"

    def __init__(
        self,
        columns: Selection = None,
        role: Optional[str] = None,
        limits: Sequence[float] = BOXCOX_LIMITS,
        nunique: int = BOXCOX_NUNIQUE,
        eps: float = BOXCOX_EPS,
    ):
        self.columns = columns
        self.role = role
        self.limits = limits
        self.nunique = nunique
        self.eps = eps

    def _search_interval(self):
        limits = sorted(float(v) for v in self.limits)
        if len(limits) != 2 or limits[0] == limits[1]:
            raise ValueError(f"`limits` should be two distinct values, got {self.limits!r}.")
        return limits[0], limits[1]

    def _fit_columns(self, X: pd.DataFrame, col_names: List[str]) -> dict:
        limits = self._search_interval()
        lambdas: Dict[str, float] = {}
        for col in col_names:
            lam = estimate_lambda(X[col], limits=limits, nunique=self.nunique, eps=self.eps)
            if lam is None:
                logger.warning("No Box-Cox transformation could be estimated for `%s`.", col)
                continue
            lambdas[col] = lam
            logger.debug("Column `%s`: lambda=%.4f", col, lam)
        return {"lambdas_": ParamMap(lambdas)}

    def transform(self, X: pd.DataFrame):
        self._check_trained()
        X = self._as_frame(X)
        for col, lam in self.lambdas_.items():
            X[col] = boxcox_transform(X[col], lam, eps=self.eps)
        return X

    def inverse_transform(self, X: pd.DataFrame):
        self._check_trained()
        X = self._as_frame(X)
        for col, lam in self.lambdas_.items():
            X[col] = inverse_boxcox(X[col], lam, eps=self.eps)
        return X

    def tidy(self) -> pd.DataFrame:
        if self.trained:
            return pd.DataFrame(
                {"terms": list(self.lambdas_), "value": list(self.lambdas_.values())}
            )
        terms = self._selection_terms()
        return pd.DataFrame({"terms": terms, "value": [np.nan] * len(terms)})


__all__ = [
    "DummyEncoder",
    "HolidayFeatures",
    "LowerBoundImputer",
    "BoxCoxTransformer",
]
