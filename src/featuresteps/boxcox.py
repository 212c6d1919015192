"""
featuresteps/boxcox.py

Box-Cox lambda estimation and transformation kernels.

Extended Description
--------------------
The Box-Cox family maps strictly positive data x to

    (x ** lam - 1) / lam    for lam != 0
    log(x)                  for lam == 0

The exponent is chosen by maximizing the profile log-likelihood of the
geometric-mean scaled transform over a bounded interval. Near lam = 0 the
log form replaces the power form to avoid the removable singularity.

A column is not transformed (no lambda is returned) when:
- it has fewer than `nunique` distinct values
- any non-missing value is <= 0
- the maximizer lands within `eps` of either interval bound, which means the
  optimum lies outside the searched range

Main Components
---------------
- BoundedMaximum / maximize_bounded: 1-D bounded maximization via scipy.
- boxcox_loglik: profile log-likelihood for one lambda.
- estimate_lambda: learn lambda for one column (or None).
- boxcox_transform / inverse_boxcox: apply or undo the transform.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.optimize import minimize_scalar

from .config import BOXCOX_EPS, BOXCOX_LIMITS, BOXCOX_NUNIQUE, BOXCOX_TOL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundedMaximum:
    x: float
    value: float
    bounds: Tuple[float, float]

    def at_boundary(self, eps: float = BOXCOX_EPS) -> bool:
        low, high = self.bounds
        return abs(self.x - low) <= eps or abs(self.x - high) <= eps


def maximize_bounded(
    func: Callable[[float], float],
    bounds: Tuple[float, float],
    xatol: float = BOXCOX_TOL,
) -> BoundedMaximum:
    """Maximize a scalar function on a closed interval with bounded Brent search."""
    low, high = float(bounds[0]), float(bounds[1])
    res = minimize_scalar(
        lambda v: -func(v),
        bounds=(low, high),
        method="bounded",
        options={"xatol": xatol},
    )
    return BoundedMaximum(x=float(res.x), value=float(-res.fun), bounds=(low, high))


def boxcox_loglik(lam: float, y: np.ndarray, gm: float, eps: float = BOXCOX_EPS) -> float:
    n = len(y)
    gm0 = gm ** (lam - 1)
    if abs(lam) <= eps:
        z = np.log(y) / gm0
    else:
        z = (y ** lam - 1) / (lam * gm0)
    var_z = np.var(z)
    return -0.5 * n * np.log(var_z)


def estimate_lambda(
    values,
    limits: Sequence[float] = BOXCOX_LIMITS,
    nunique: int = BOXCOX_NUNIQUE,
    eps: float = BOXCOX_EPS,
) -> Optional[float]:
    """
    Estimate the Box-Cox lambda for one column.

    Parameters
    ----------
    values : array-like
        Column values; missing values are ignored by the likelihood.
    limits : sequence of two floats
        Search interval for lambda.
    nunique : int
        Minimum number of distinct values (missing counts as one value).
    eps : float
        Tolerance used for the log branch and the boundary check.

    Returns
    -------
    float or None
        The estimated lambda, or None when the column does not qualify.
    """
    series = pd.Series(values, dtype=float)
    dat = series.dropna().to_numpy()

    if series.nunique(dropna=False) < nunique:
        logger.debug("Box-Cox skipped: fewer than %d distinct values.", nunique)
        return None
    if dat.size == 0 or np.any(dat <= 0):
        logger.debug("Box-Cox skipped: non-positive or no observed values.")
        return None

    geo_mean = float(np.exp(np.mean(np.log(dat))))
    res = maximize_bounded(
        lambda lam: boxcox_loglik(lam, dat, geo_mean, eps=eps),
        bounds=(min(limits), max(limits)),
    )
    if res.at_boundary(eps):
        logger.debug("Box-Cox skipped: lambda %.4f hit the search limits %s.", res.x, res.bounds)
        return None
    return res.x


def boxcox_transform(x, lam: float, eps: float = BOXCOX_EPS):
    x = np.asarray(x, dtype=float)
    if abs(lam) < eps:
        return np.log(x)
    return (x ** lam - 1) / lam


def inverse_boxcox(y, lam: float, eps: float = BOXCOX_EPS):
    y = np.asarray(y, dtype=float)
    if abs(lam) < eps:
        return np.exp(y)
    return (lam * y + 1) ** (1 / lam)


__all__ = [
    "BoundedMaximum",
    "maximize_bounded",
    "boxcox_loglik",
    "estimate_lambda",
    "boxcox_transform",
    "inverse_boxcox",
]
