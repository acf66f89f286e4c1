from __future__ import annotations

import pytest

from bikewatch.domain.exceptions import InvalidTimeSelection
from bikewatch.domain.models import (
    ANY_TIME,
    SpecificMinute,
    format_time_selection,
    parse_time_selection,
)


@pytest.mark.parametrize("raw", [None, "", "any", "Any time", " ANY "])
def test_parse_any_time_aliases(raw: str | None) -> None:
    assert parse_time_selection(raw) is ANY_TIME


def test_parse_minutes() -> None:
    assert parse_time_selection(1) == SpecificMinute(1)
    assert parse_time_selection("510") == SpecificMinute(510)


@pytest.mark.parametrize("raw", [-1, 1440, "noon", "12:30", True])
def test_parse_rejects_invalid_values(raw: object) -> None:
    with pytest.raises(InvalidTimeSelection):
        parse_time_selection(raw)  # type: ignore[arg-type]


def test_invalid_selection_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        SpecificMinute(2000)


def test_format_labels() -> None:
    assert format_time_selection(ANY_TIME) == "Any time"
    assert format_time_selection(SpecificMinute(0)) == "00:00"
    assert format_time_selection(SpecificMinute(1)) == "00:01"
    assert format_time_selection(SpecificMinute(1439)) == "23:59"
