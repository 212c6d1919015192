"""
featuresteps/pipeline.py

Factory for assembling feature steps into an sklearn Pipeline.

Extended Description
--------------------
Feature steps are plain sklearn transformers, so the sequencing of fit and
transform calls is delegated to `sklearn.pipeline.Pipeline`: fitting the
pipeline trains each step on the output of the previous one, and transforming
new data applies the trained steps in order. This module only names the steps
consistently and collects their tidy summaries.

Main Components
---------------
- build_recipe: wrap steps in a Pipeline named ``step_<kind>_<n>``.
- tidy_recipe: stack the tidy summaries of all steps.

Usage Example
-------------
>>> rec = build_recipe(
...     DummyEncoder(columns="diet"),
...     BoxCoxTransformer(columns=all_numeric()),
... )
>>> baked = rec.fit(df_train).transform(df_test)
>>> tidy_recipe(rec)
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

import pandas as pd
from sklearn.pipeline import Pipeline

from .base import BaseStep

logger = logging.getLogger(__name__)


def build_recipe(*steps: BaseStep) -> Pipeline:
    """
    Construct an sklearn Pipeline from feature steps.

    Parameters
    ----------
    *steps : BaseStep
        Steps in the order they should be trained and applied.

    Returns
    -------
    sklearn.pipeline.Pipeline
        Pipeline whose step names are ``step_<kind>_<position>``.
    """
    if not steps:
        raise ValueError("build_recipe requires at least one step.")

    named: List[Tuple[str, Any]] = []
    for i, step in enumerate(steps, start=1):
        if not isinstance(step, BaseStep):
            raise TypeError(
                f"Step {i} must be a feature step, got {type(step).__name__}."
            )
        named.append((f"step_{step.step_kind}_{i}", step))

    logger.info("Recipe created with steps: %s", [name for name, _ in named])
    return Pipeline(steps=named)


def tidy_recipe(pipe: Pipeline) -> pd.DataFrame:
    """Concatenate the tidy summaries of every step in `pipe`."""
    frames = []
    for number, (name, step) in enumerate(pipe.steps, start=1):
        frame = step.tidy()
        frame.insert(0, "trained", step.trained)
        frame.insert(0, "step", name)
        frame.insert(0, "number", number)
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)


__all__ = ["build_recipe", "tidy_recipe"]
