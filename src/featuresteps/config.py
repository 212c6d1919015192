"""
featuresteps/config.py

Default hyperparameters and logging setup shared by all feature steps.

Extended Description
--------------------
This module defines the canonical defaults referenced by the step classes in
transformers.py and by the Box-Cox kernels in boxcox.py. Keeping them in one
place guarantees that a step constructed without arguments behaves the same
way everywhere (constructor defaults, tidy summaries, tests).

It also offers `configure_logging`, which attaches console and optional file
handlers to the package logger. The library itself never installs handlers;
applications call this once at start-up.

Main Components
---------------
- DEFAULT_ROLE : role label assigned to columns created by a step.
- DEFAULT_HOLIDAYS : holidays used by HolidayFeatures when none are given.
- BOXCOX_LIMITS, BOXCOX_NUNIQUE, BOXCOX_EPS, BOXCOX_TOL : Box-Cox defaults.
- configure_logging : build the `featuresteps` logger.

Usage Example
-------------
>>> from featuresteps.config import BOXCOX_LIMITS, configure_logging
>>> BOXCOX_LIMITS
(-5.0, 5.0)
>>> logger = configure_logging(logging.DEBUG)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

DEFAULT_ROLE: str = "predictor"

DEFAULT_HOLIDAYS: Tuple[str, ...] = ("LaborDay", "NewYearsDay", "ChristmasDay")

BOXCOX_LIMITS: Tuple[float, float] = (-5.0, 5.0)
BOXCOX_NUNIQUE: int = 5
BOXCOX_EPS: float = 0.001
BOXCOX_TOL: float = 1e-4

LOGGER_NAME = "featuresteps"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: int = logging.INFO,
    log_path: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Attach a console handler (and optionally a file handler) to the package logger.

    Parameters
    ----------
    level : int, default logging.INFO
        Verbosity applied to the logger and its handlers.
    log_path : str or Path, optional
        When given, log records are also written to this file.

    Returns
    -------
    logging.Logger
        The configured `featuresteps` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


__all__ = [
    "DEFAULT_ROLE",
    "DEFAULT_HOLIDAYS",
    "BOXCOX_LIMITS",
    "BOXCOX_NUNIQUE",
    "BOXCOX_EPS",
    "BOXCOX_TOL",
    "LOGGER_NAME",
    "configure_logging",
]
