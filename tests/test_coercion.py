import pandas as pd
import pytest

from waffleviz.services.coercion import coerce_dates, coerce_numbers
from waffleviz.services.errors import DateCoercionError


def test_coerce_numbers_propagates_nan():
    frame = pd.DataFrame({"v": ["1", "x", "", "2.5"]})
    result = coerce_numbers(frame, "v")
    values = result["v"].tolist()
    assert values[0] == 1.0
    assert pd.isna(values[1])
    assert values[2] == 0.0
    assert values[3] == 2.5
    # Input frame untouched.
    assert frame["v"].tolist() == ["1", "x", "", "2.5"]


def test_coerce_numbers_is_idempotent():
    once = coerce_numbers([{"v": "3"}, {"v": 4}], "v")
    twice = coerce_numbers(once, "v")
    pd.testing.assert_frame_equal(once, twice)


def test_coerce_dates_generic_parser():
    result = coerce_dates([{"d": "2020-01-01"}, {"d": "2020/02/01"}], "d")
    assert pd.api.types.is_datetime64_any_dtype(result["d"])
    assert result["d"].iloc[0] == pd.Timestamp("2020-01-01")
    assert result["d"].iloc[1] == pd.Timestamp("2020-02-01")


def test_coerce_dates_with_format():
    result = coerce_dates([{"d": "01/02/2020"}], "d", "%d/%m/%Y")
    assert result["d"].iloc[0] == pd.Timestamp("2020-02-01")


def test_coerce_dates_is_idempotent():
    once = coerce_dates([{"d": "2020-01-01"}, {"d": "2021-06-30"}], "d")
    twice = coerce_dates(once, "d", "%Y-%m-%d")
    pd.testing.assert_frame_equal(once, twice)


def test_coerce_dates_failure_leaves_input_unchanged():
    frame = pd.DataFrame({"d": ["2020-01-01", "not-a-date"], "n": [1, 2]})
    with pytest.raises(DateCoercionError) as excinfo:
        coerce_dates(frame, "d")
    assert excinfo.value.column == "d"
    assert excinfo.value.value == "not-a-date"
    assert frame["d"].tolist() == ["2020-01-01", "not-a-date"]


def test_coerce_dates_format_mismatch_fails():
    with pytest.raises(DateCoercionError):
        coerce_dates([{"d": "01/02/2020"}, {"d": "2020-02-01"}], "d", "%d/%m/%Y")


def test_coerce_missing_column():
    with pytest.raises(KeyError):
        coerce_numbers([{"a": 1}], "b")
