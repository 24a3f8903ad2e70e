"""Tests for replay gain text conversions."""

import pytest

from tagnorm.features.metadata.domain.replay_gain import (
    RATIO_0DB,
    db_to_ratio,
    format_peak,
    format_ratio,
    parse_peak,
    parse_ratio,
    ratio_to_db,
)


@pytest.mark.parametrize("text", ["-6.5 dB", "-6.5dB", "-6.5 DB", "-6.5"])
def test_parse_ratio_accepts_optional_suffix(text: str) -> None:
    ratio = parse_ratio(text)
    assert ratio is not None
    assert ratio_to_db(ratio) == pytest.approx(-6.5)


def test_parse_ratio_accepts_leading_plus() -> None:
    ratio = parse_ratio("+3 dB")
    assert ratio == pytest.approx(db_to_ratio(3.0))


@pytest.mark.parametrize("text", [None, "", "dB", "loud", "nan dB"])
def test_parse_ratio_rejects_malformed_text(text: str | None) -> None:
    assert parse_ratio(text) is None


def test_zero_db_maps_to_unit_ratio() -> None:
    assert parse_ratio("0 dB") == RATIO_0DB


def test_format_ratio() -> None:
    assert format_ratio(db_to_ratio(-6.5)) == "-6.5 dB"
    assert format_ratio(RATIO_0DB) == "0 dB"
    assert format_ratio(None) == ""
    assert format_ratio(0.0) == ""


def test_peak_round_trip() -> None:
    assert parse_peak("0.988") == pytest.approx(0.988)
    assert format_peak(0.988) == "0.988"


def test_parse_peak_rejects_negative_and_garbage() -> None:
    assert parse_peak("-0.5") is None
    assert parse_peak("peak") is None
    assert format_peak(None) == ""
