"""
featuresteps/persistence.py

Saving and loading trained feature steps.

Trained steps (or whole recipes built with `build_recipe`) are serialized with
joblib so that parameters learned on the training data can be reused to
transform new data in a later process.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import joblib
from sklearn.pipeline import Pipeline

from .base import BaseStep

logger = logging.getLogger(__name__)


def save_step(step: Union[BaseStep, Pipeline], path: Union[str, Path]) -> Path:
    path = Path(path)
    joblib.dump(step, path)
    logger.info("Saved %s to %s", type(step).__name__, path)
    return path


def load_step(path: Union[str, Path]) -> Union[BaseStep, Pipeline]:
    obj = joblib.load(path)
    if not isinstance(obj, (BaseStep, Pipeline)):
        raise TypeError(
            f"{path} does not contain a feature step or recipe (got {type(obj).__name__})."
        )
    logger.info("Loaded %s from %s", type(obj).__name__, path)
    return obj


__all__ = ["save_step", "load_step"]
