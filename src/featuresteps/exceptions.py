"""
featuresteps/exceptions.py

Error taxonomy raised by feature steps.

All errors derive from `StepError`. Validation failures additionally derive
from `ValueError` so they behave like the errors sklearn estimators raise for
bad input, and `NotTrainedError` derives from sklearn's `NotFittedError` so
generic sklearn tooling recognizes an untrained step.
"""

from __future__ import annotations

from sklearn.exceptions import NotFittedError


class StepError(Exception):
    """Base class for all feature step errors."""


class TypeMismatchError(StepError, ValueError):
    """A selected column has a type the step cannot handle."""


class NotCategoricalError(TypeMismatchError):
    """A column selected for dummy encoding is not categorical."""


class UnknownHolidayError(StepError, ValueError):
    """A holiday name is not present in the holiday registry."""


class NegativeThresholdError(StepError, ValueError):
    """Lower-bound imputation found a negative training minimum."""


class MissingVocabularyError(StepError, KeyError):
    """A trained dummy encoder has no stored levels for a column."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class NoMatchError(StepError, LookupError):
    """A column selection matched nothing or named an unknown column."""


class NotTrainedError(StepError, NotFittedError):
    """A step was used before `fit` was called."""


__all__ = [
    "StepError",
    "TypeMismatchError",
    "NotCategoricalError",
    "UnknownHolidayError",
    "NegativeThresholdError",
    "MissingVocabularyError",
    "NoMatchError",
    "NotTrainedError",
]
