# featuresteps/__init__.py
from __future__ import annotations

from .columns import (
    ColumnInfo,
    all_dates,
    all_nominal,
    all_numeric,
    all_predictors,
    has_role,
    has_type,
    infer_schema,
    resolve_columns,
)
from .config import configure_logging
from .contrasts import dummy_names
from .exceptions import (
    MissingVocabularyError,
    NegativeThresholdError,
    NoMatchError,
    NotCategoricalError,
    NotTrainedError,
    StepError,
    TypeMismatchError,
    UnknownHolidayError,
)
from .holiday_calendar import get_holiday_features, supported_holidays
from .persistence import load_step, save_step
from .pipeline import build_recipe, tidy_recipe
from .transformers import (
    BoxCoxTransformer,
    DummyEncoder,
    HolidayFeatures,
    LowerBoundImputer,
)

__version__ = "0.1.0"

__all__ = [
    "ColumnInfo",
    "infer_schema",
    "resolve_columns",
    "has_type",
    "has_role",
    "all_numeric",
    "all_nominal",
    "all_dates",
    "all_predictors",
    "configure_logging",
    "dummy_names",
    "get_holiday_features",
    "supported_holidays",
    "DummyEncoder",
    "HolidayFeatures",
    "LowerBoundImputer",
    "BoxCoxTransformer",
    "build_recipe",
    "tidy_recipe",
    "save_step",
    "load_step",
    "StepError",
    "TypeMismatchError",
    "NotCategoricalError",
    "UnknownHolidayError",
    "NegativeThresholdError",
    "MissingVocabularyError",
    "NoMatchError",
    "NotTrainedError",
]
