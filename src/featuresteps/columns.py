"""
featuresteps/columns.py

Schema inference and column selection for feature steps.

Extended Description
--------------------
Steps are declared against a selection (column names or selector callables)
and only learn which concrete columns they act on when they are fitted. This
module provides the two collaborators needed for that:
- a schema descriptor that classifies each DataFrame column by type and role
- a resolver that turns a selection into an ordered list of column names

Column types are derived from pandas dtypes:

==================  ===============
pandas dtype        schema type
==================  ===============
bool                ``logical``
int / float         ``numeric``
category            ``categorical``
object / string     ``string``
datetime64          ``date``
anything else       ``other``
==================  ===============

Main Components
---------------
- ColumnInfo: frozen description of one column.
- infer_schema: build an ordered ``{name: ColumnInfo}`` mapping from a DataFrame.
- resolve_columns: resolve names and selectors against a schema.
- has_type, has_role, all_numeric, all_nominal, all_dates, all_predictors:
  selector factories.

Usage Example
-------------
>>> schema = infer_schema(df)
>>> resolve_columns([all_numeric(), "diet"], schema)
['age', 'height', 'diet']

Notes
-----
A selection that resolves to zero columns raises `NoMatchError`; so does a
name that is absent from the schema. Nothing is silently skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd
from pandas.api import types as ptypes

from .config import DEFAULT_ROLE
from .exceptions import NoMatchError

NUMERIC = "numeric"
CATEGORICAL = "categorical"
STRING = "string"
DATE = "date"
LOGICAL = "logical"
OTHER = "other"


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    type: str
    role: str = DEFAULT_ROLE
    ordered: bool = False


Schema = Dict[str, ColumnInfo]
Selector = Callable[[Mapping[str, ColumnInfo]], List[str]]
Selection = Union[str, Selector, Sequence[Union[str, Selector]]]


def _column_type(series: pd.Series) -> str:
    dtype = series.dtype
    if ptypes.is_bool_dtype(dtype):
        return LOGICAL
    if isinstance(dtype, pd.CategoricalDtype):
        return CATEGORICAL
    if ptypes.is_datetime64_any_dtype(dtype):
        return DATE
    if ptypes.is_numeric_dtype(dtype):
        return NUMERIC
    if ptypes.is_object_dtype(dtype) or ptypes.is_string_dtype(dtype):
        return STRING
    return OTHER


def infer_schema(
    df: pd.DataFrame,
    roles: Optional[Mapping[str, str]] = None,
) -> Schema:
    """
    Describe each column of a DataFrame by type, role and ordering.

    Parameters
    ----------
    df : pandas.DataFrame
        Dataset to describe.
    roles : mapping, optional
        Per-column role overrides. Columns not listed get ``DEFAULT_ROLE``.

    Returns
    -------
    dict of str -> ColumnInfo
        Schema in the column order of `df`.
    """
    roles = roles or {}
    schema: Schema = {}
    for name in df.columns:
        series = df[name]
        ordered = bool(
            isinstance(series.dtype, pd.CategoricalDtype) and series.dtype.ordered
        )
        schema[name] = ColumnInfo(
            name=name,
            type=_column_type(series),
            role=roles.get(name, DEFAULT_ROLE),
            ordered=ordered,
        )
    return schema


@dataclass(frozen=True)
class ColumnSelector:
    """Select the columns whose `field` attribute (type or role) is in `values`."""

    field: str
    values: Tuple[str, ...]

    def __call__(self, schema: Mapping[str, ColumnInfo]) -> List[str]:
        return [
            name for name, info in schema.items() if getattr(info, self.field) in self.values
        ]

    @property
    def label(self) -> str:
        return f"has_{self.field}({', '.join(self.values)})"


def has_type(*types: str) -> Selector:
    return ColumnSelector("type", tuple(types))


def has_role(*roles: str) -> Selector:
    return ColumnSelector("role", tuple(roles))


def all_numeric() -> Selector:
    return has_type(NUMERIC)


def all_nominal() -> Selector:
    return has_type(CATEGORICAL, STRING)


def all_dates() -> Selector:
    return has_type(DATE)


def all_predictors() -> Selector:
    return has_role(DEFAULT_ROLE)


def _as_items(selection: Selection) -> Iterable[Union[str, Selector]]:
    if isinstance(selection, str) or callable(selection):
        return [selection]
    return list(selection)


def resolve_columns(selection: Selection, schema: Mapping[str, ColumnInfo]) -> List[str]:
    """
    Resolve a selection into concrete column names.

    Parameters
    ----------
    selection : str, callable or sequence of those
        Column names and/or selector callables. Selectors receive the schema
        and return column names.
    schema : mapping of str -> ColumnInfo
        Schema of the dataset the step is fitted on.

    Returns
    -------
    list of str
        Selected column names, in first-seen order without duplicates.

    Raises
    ------
    NoMatchError
        If a named column is absent from the schema, or if nothing is selected.
    """
    if selection is None:
        raise NoMatchError("No columns were selected (selection is None).")

    selected: List[str] = []
    missing: List[str] = []
    for item in _as_items(selection):
        if callable(item):
            names = item(schema)
        else:
            names = [item]
        for name in names:
            if name not in schema:
                missing.append(name)
            elif name not in selected:
                selected.append(name)

    if missing:
        raise NoMatchError(
            "Selected columns not found in data: "
            + ", ".join(f"`{m}`" for m in missing)
        )
    if not selected:
        raise NoMatchError(
            f"Selection {describe_selection(selection)} did not match any column."
        )
    return selected


def _label(item) -> str:
    if isinstance(item, str):
        return item
    return getattr(item, "label", None) or getattr(item, "__name__", repr(item))


def describe_selection(selection: Optional[Selection]) -> List[str]:
    """Human-readable labels for a selection (used by untrained tidy summaries)."""
    if selection is None:
        return []
    return [
        _label(item)
        for item in _as_items(selection)
    ]


__all__ = [
    "NUMERIC",
    "CATEGORICAL",
    "STRING",
    "DATE",
    "LOGICAL",
    "OTHER",
    "ColumnInfo",
    "ColumnSelector",
    "Schema",
    "infer_schema",
    "resolve_columns",
    "describe_selection",
    "has_type",
    "has_role",
    "all_numeric",
    "all_nominal",
    "all_dates",
    "all_predictors",
]
