"""
featuresteps/base.py

Shared fit/transform lifecycle for feature steps.

Extended Description
--------------------
A step is declared against a column selection and hyperparameters, fitted
("trained") on a training DataFrame to learn its parameters, then applied
("baked") to any DataFrame with the same columns. `BaseStep` implements the
parts of that lifecycle that do not depend on the algorithm:
- resolving the selection against a schema at fit time
- validating selected column types
- guarding transform against untrained use
- exposing a tidy one-row-per-column summary

Concrete steps live in transformers.py and follow sklearn's estimator
conventions: constructor arguments are stored verbatim, learned attributes end
with an underscore, `fit` returns `self`.

Notes
-----
Learned parameters are stored as read-only `ParamMap`s of immutable values, so a
trained step cannot be altered by `transform`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, List, Mapping, Optional

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from .columns import ColumnInfo, describe_selection, infer_schema, resolve_columns
from .exceptions import NotTrainedError, TypeMismatchError

logger = logging.getLogger(__name__)


class ParamMap(Mapping):
    """Read-only, picklable mapping holding the parameters a step learned in fit."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = dict(data or {})

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class BaseStep(TransformerMixin, BaseEstimator):
    """
    Base class for feature steps.

    Subclasses set `step_kind` (used for pipeline step names), implement
    `_fit_columns` and `transform`, and define `tidy`.

    Attributes
    ----------
    columns_ : list of str
        Columns resolved from the selection during fit.
    feature_names_in_ : ndarray of str
        Column names of the training DataFrame.
    """

    step_kind: str = "step"
    error_class = TypeMismatchError

    def fit(self, X: pd.DataFrame, y=None, schema: Optional[Mapping[str, ColumnInfo]] = None):
        if not isinstance(X, pd.DataFrame):
            X = pd.DataFrame(X)
        if schema is None:
            schema = infer_schema(X)

        col_names = resolve_columns(self.columns, schema)
        self._validate_columns(col_names, schema)
        learned = self._fit_columns(X, col_names)

        # Learned state is assigned only after every column has been validated.
        self.feature_names_in_ = np.asarray(X.columns, dtype=object)
        self.columns_ = list(col_names)
        for attr, value in learned.items():
            setattr(self, attr, value)

        logger.info(
            "Trained %s on %d column(s): %s",
            type(self).__name__,
            len(col_names),
            ", ".join(map(str, col_names)),
        )
        return self

    # Hooks -------------------------------------------------------------

    def _validate_columns(self, col_names: List[str], schema: Mapping[str, ColumnInfo]) -> None:
        """Check column types; no-op by default."""

    def _fit_columns(self, X: pd.DataFrame, col_names: List[str]) -> dict:
        raise NotImplementedError

    # Helpers -----------------------------------------------------------

    def _require_types(
        self,
        col_names: Iterable[str],
        schema: Mapping[str, ColumnInfo],
        allowed: Iterable[str],
        what: str,
    ) -> None:
        allowed = set(allowed)
        bad = [c for c in col_names if schema[c].type not in allowed]
        if bad:
            raise self.error_class(
                f"All columns for `{type(self).__name__}` should be {what}. "
                "Offending columns: "
                + ", ".join(f"`{c}` ({schema[c].type})" for c in bad)
            )

    @property
    def trained(self) -> bool:
        return hasattr(self, "columns_")

    def _check_trained(self) -> None:
        if not self.trained:
            raise NotTrainedError(
                f"{type(self).__name__} has not been trained. Call fit before transform."
            )

    @staticmethod
    def _as_frame(X) -> pd.DataFrame:
        if not isinstance(X, pd.DataFrame):
            X = pd.DataFrame(X)
        return X.copy()

    def _selection_terms(self) -> List[str]:
        return describe_selection(self.columns)

    def get_feature_names_out(self, input_features=None):
        self._check_trained()
        if input_features is None:
            input_features = self.feature_names_in_
        return np.asarray(list(input_features), dtype=object)

    def tidy(self) -> pd.DataFrame:
        raise NotImplementedError


__all__ = ["ParamMap", "BaseStep"]
