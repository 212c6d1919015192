"""
featuresteps/contrasts.py

Contrast bases and indicator-matrix construction for factor encoding.

Extended Description
--------------------
A factor with k levels is encoded with k - 1 numeric columns so the result is
full rank. Two bases are supported:
- treatment contrasts for unordered factors: one 0/1 indicator per level,
  except the first level, which acts as the reference cell
- orthogonal polynomial contrasts for ordered factors: linear, quadratic, ...
  trends over equally spaced level scores

The levels and the contrast basis are captured at fit time in a frozen
`FactorLevels` record so that new data is always encoded against the training
vocabulary, never against levels re-derived from the new data.

Main Components
---------------
- contr_treatment: k x (k-1) indicator basis.
- contr_poly: k x (k-1) orthonormal polynomial basis.
- FactorLevels: immutable levels + ordered flag + contrast matrix.
- encode_factor: re-map raw values onto stored levels and build the matrix.
- dummy_names: default naming convention for the generated columns.

Usage Example
-------------
>>> fl = FactorLevels.from_levels(["a", "b", "c"], ordered=False)
>>> encode_factor(pd.Series(["b", "a", "z"]), fl)
array([[ 1.,  0.],
       [ 0.,  0.],
       [nan, nan]])
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np
import pandas as pd

NA_ACTIONS = ("pass", "zero")


def contr_treatment(k: int) -> np.ndarray:
    """Indicator contrasts with the first level as reference (row of zeros)."""
    if k < 1:
        raise ValueError("A factor needs at least one level.")
    return np.eye(k, dtype=float)[:, 1:]


def contr_poly(k: int) -> np.ndarray:
    """
    Orthonormal polynomial contrasts for `k` equally spaced levels.

    Column j (0-based) holds the degree j + 1 trend. Columns are mutually
    orthogonal, orthogonal to the constant, and have unit norm.
    """
    if k < 1:
        raise ValueError("A factor needs at least one level.")
    if k == 1:
        return np.zeros((1, 0), dtype=float)

    scores = np.arange(1, k + 1, dtype=float)
    centered = scores - scores.mean()
    X = np.vander(centered, N=k, increasing=True)
    Q, R = np.linalg.qr(X)
    # Q * diag(R) is invariant to the sign convention of the QR routine.
    raw = Q * np.diag(R)
    Z = raw / np.sqrt((raw ** 2).sum(axis=0))
    return Z[:, 1:]


@dataclass(frozen=True, eq=False)
class FactorLevels:
    """
    Levels seen in training for one factor, with its contrast basis.

    Attributes
    ----------
    levels : tuple
        Category values in their training order. The first one is the
        reference level for unordered factors.
    ordered : bool
        Whether the factor is ordinal (selects polynomial contrasts).
    contrast : ndarray of shape (k, k - 1)
        Read-only contrast matrix; row i encodes level i.
    """

    levels: Tuple[Any, ...]
    ordered: bool
    contrast: np.ndarray

    @classmethod
    def from_levels(cls, levels: Sequence[Any], ordered: bool = False) -> "FactorLevels":
        levels = tuple(levels)
        k = len(levels)
        contrast = contr_poly(k) if ordered else contr_treatment(k)
        contrast.setflags(write=False)
        return cls(levels=levels, ordered=bool(ordered), contrast=contrast)

    @classmethod
    def from_series(cls, series: pd.Series) -> "FactorLevels":
        dtype = series.dtype
        return cls.from_levels(list(dtype.categories), ordered=bool(dtype.ordered))

    @property
    def labels(self) -> List[str]:
        """Labels of the generated columns, one per contrast column."""
        if self.ordered:
            named = [".L", ".Q", ".C"]
            return [named[i] if i < 3 else f"^{i + 1}" for i in range(self.n_columns)]
        return [str(lvl) for lvl in self.levels[1:]]

    @property
    def n_columns(self) -> int:
        return self.contrast.shape[1]


def encode_factor(values: pd.Series, factor_levels: FactorLevels, na_action: str = "pass") -> np.ndarray:
    """
    Encode raw values against stored levels.

    Parameters
    ----------
    values : pandas.Series
        Raw column values (categorical or not).
    factor_levels : FactorLevels
        Levels and contrast basis captured at fit time.
    na_action : {"pass", "zero"}, default "pass"
        Encoding for missing or unseen values: a row of NaN ("pass") or a
        row of zeros ("zero").

    Returns
    -------
    ndarray of shape (n_rows, k - 1)
    """
    if na_action not in NA_ACTIONS:
        raise ValueError(f"na_action must be one of {NA_ACTIONS}, got {na_action!r}.")

    # Unseen and missing values both get code -1.
    codes = pd.Index(factor_levels.levels).get_indexer(pd.Series(values).astype(object))
    missing = codes < 0

    out = factor_levels.contrast[np.where(missing, 0, codes)].astype(float)
    if missing.any():
        out[missing] = np.nan if na_action == "pass" else 0.0
    return out


_INVALID_CHARS = re.compile(r"\W")


def _make_name(label: Any) -> str:
    name = _INVALID_CHARS.sub("_", str(label))
    if not name or not (name[0].isalpha() or name[0] == "_"):
        name = "X" + name
    return name


def dummy_names(var: str, lvl: Sequence[Any], ordinal: bool = False, sep: str = "_") -> List[str]:
    """
    Default names for dummy columns.

    Unordered factors get ``<var>_<level>`` with the level text made into a
    valid identifier; ordered factors get ``<var>_1``, ``<var>_2``, ...

    >>> dummy_names("x", ["b", "some text", "1"])
    ['x_b', 'x_some_text', 'x_X1']
    >>> dummy_names("x", [".L", ".Q"], ordinal=True)
    ['x_1', 'x_2']
    """
    if ordinal:
        return [f"{var}{sep}{i}" for i in range(1, len(lvl) + 1)]
    return [f"{var}{sep}{_make_name(level)}" for level in lvl]


__all__ = [
    "NA_ACTIONS",
    "contr_treatment",
    "contr_poly",
    "FactorLevels",
    "encode_factor",
    "dummy_names",
]
