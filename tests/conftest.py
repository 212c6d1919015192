"""Pytest configuration and shared fixtures."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def diet_train():
    """Training data with an unordered factor and a numeric column."""
    return pd.DataFrame(
        {
            "diet": pd.Categorical(["veg", "omni", "vegan", "omni", "veg", "vegan"]),
            "age": [23, 45, 31, 52, 38, 27],
        }
    )


@pytest.fixture
def diet_new():
    """New data containing only a subset of the training categories."""
    return pd.DataFrame(
        {
            "diet": pd.Categorical(["omni", "veg", "omni"]),
            "age": [40, 22, 61],
        },
        index=[10, 11, 12],
    )


@pytest.fixture
def quality_train():
    """Training data with an ordered factor."""
    return pd.DataFrame(
        {
            "quality": pd.Categorical(
                ["low", "mid", "high", "top", "mid"],
                categories=["low", "mid", "high", "top"],
                ordered=True,
            )
        }
    )


@pytest.fixture
def dates_frame():
    """Daily dates from 2000-12-20 spanning Christmas and New Year."""
    return pd.DataFrame(
        {
            "someday": pd.date_range("2000-12-20", periods=41, freq="D"),
            "value": np.arange(41, dtype=float),
        }
    )


@pytest.fixture
def censored_frame():
    """Non-negative measurements truncated at an instrument floor."""
    rng = np.random.RandomState(0)
    carbon = np.maximum(rng.uniform(30, 60, size=50), 40.0)
    hydrogen = np.maximum(rng.uniform(3, 8, size=50), 5.0)
    return pd.DataFrame({"carbon": carbon, "hydrogen": hydrogen, "id": np.arange(50)})


@pytest.fixture
def skewed_frame():
    """Positive skewed data plus columns that cannot be Box-Cox transformed."""
    rng = np.random.RandomState(42)
    n = 400
    return pd.DataFrame(
        {
            "lognormal": rng.lognormal(mean=1.0, sigma=0.6, size=n),
            "constant": np.full(n, 3.0),
            "signed": rng.normal(size=n),
            "few": rng.choice([1.0, 2.0, 3.0], size=n),
        }
    )
