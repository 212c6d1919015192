"""Unit tests for schema inference and column selection."""

import pandas as pd
import pytest

from featuresteps.columns import (
    ColumnInfo,
    all_dates,
    all_nominal,
    all_numeric,
    all_predictors,
    describe_selection,
    has_role,
    has_type,
    infer_schema,
    resolve_columns,
)
from featuresteps.exceptions import NoMatchError, StepError


@pytest.fixture
def mixed_frame():
    return pd.DataFrame(
        {
            "num": [1.0, 2.0, 3.0],
            "count": [1, 2, 3],
            "fac": pd.Categorical(["a", "b", "a"]),
            "ord": pd.Categorical(["lo", "hi", "lo"], categories=["lo", "hi"], ordered=True),
            "text": ["x", "y", "z"],
            "flag": [True, False, True],
            "when": pd.date_range("2020-01-01", periods=3),
            "when_tz": pd.date_range("2020-01-01", periods=3, tz="UTC"),
        }
    )


# ============================================================================
# infer_schema
# ============================================================================


class TestInferSchema:
    def test_types(self, mixed_frame):
        schema = infer_schema(mixed_frame)
        assert {name: info.type for name, info in schema.items()} == {
            "num": "numeric",
            "count": "numeric",
            "fac": "categorical",
            "ord": "categorical",
            "text": "string",
            "flag": "logical",
            "when": "date",
            "when_tz": "date",
        }

    def test_preserves_column_order(self, mixed_frame):
        assert list(infer_schema(mixed_frame)) == list(mixed_frame.columns)

    def test_ordered_flag(self, mixed_frame):
        schema = infer_schema(mixed_frame)
        assert schema["ord"].ordered is True
        assert schema["fac"].ordered is False

    def test_roles(self, mixed_frame):
        schema = infer_schema(mixed_frame, roles={"num": "outcome"})
        assert schema["num"].role == "outcome"
        assert schema["fac"].role == "predictor"

    def test_column_info_is_frozen(self):
        info = ColumnInfo(name="a", type="numeric")
        with pytest.raises(Exception):
            info.type = "date"


# ============================================================================
# resolve_columns
# ============================================================================


class TestResolveColumns:
    def test_single_name(self, mixed_frame):
        assert resolve_columns("num", infer_schema(mixed_frame)) == ["num"]

    def test_selectors(self, mixed_frame):
        schema = infer_schema(mixed_frame)
        assert resolve_columns(all_numeric(), schema) == ["num", "count"]
        assert resolve_columns(all_nominal(), schema) == ["fac", "ord", "text"]
        assert resolve_columns(all_dates(), schema) == ["when", "when_tz"]

    def test_mixed_selection_keeps_first_seen_order(self, mixed_frame):
        schema = infer_schema(mixed_frame)
        result = resolve_columns(["text", all_numeric(), "num"], schema)
        assert result == ["text", "num", "count"]

    def test_role_selectors(self, mixed_frame):
        schema = infer_schema(mixed_frame, roles={"num": "outcome"})
        assert resolve_columns(has_role("outcome"), schema) == ["num"]
        assert "num" not in resolve_columns(all_predictors(), schema)

    def test_plain_callable(self, mixed_frame):
        schema = infer_schema(mixed_frame)
        pick = lambda s: [n for n in s if n.startswith("when")]
        assert resolve_columns(pick, schema) == ["when", "when_tz"]

    def test_unknown_name_raises(self, mixed_frame):
        with pytest.raises(NoMatchError, match="missing_col"):
            resolve_columns(["num", "missing_col"], infer_schema(mixed_frame))

    def test_empty_match_raises(self):
        schema = infer_schema(pd.DataFrame({"a": ["x", "y"]}))
        with pytest.raises(NoMatchError):
            resolve_columns(all_numeric(), schema)

    def test_none_selection_raises(self, mixed_frame):
        with pytest.raises(NoMatchError):
            resolve_columns(None, infer_schema(mixed_frame))

    def test_no_match_is_step_error(self):
        assert issubclass(NoMatchError, StepError)
        assert issubclass(NoMatchError, LookupError)


def test_describe_selection():
    assert describe_selection(["a", has_type("numeric")]) == ["a", "has_type(numeric)"]
    assert describe_selection(None) == []


def test_selectors_compare_by_value():
    assert all_numeric() == has_type("numeric")
    assert all_numeric()({}) == []
