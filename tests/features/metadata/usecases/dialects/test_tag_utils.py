"""Tests for fallback chain helpers shared by the dialect adapters."""

from tagnorm.features.metadata.usecases.dialects._tag_utils import (
    equals_ignore_case,
    find_first_non_empty,
    find_first_non_empty_value,
    first_non_empty,
    parse_tuple_numbers,
)


def test_equals_ignore_case() -> None:
    assert equals_ignore_case("Comment", "COMMENT")
    assert equals_ignore_case(None, None)
    assert not equals_ignore_case("", None)


def test_first_non_empty_distinguishes_empty_from_absent() -> None:
    assert first_non_empty([None, "", "value"]) == "value"
    assert first_non_empty([None, ""]) == ""
    assert first_non_empty([None, None]) is None
    assert first_non_empty([]) is None


def test_find_first_non_empty_value_walks_chain_in_order() -> None:
    fields = {"ALBUMARTIST": "", "ALBUM_ARTIST": "Various", "ENSEMBLE": "Other"}
    chain = ("ALBUMARTIST", "ALBUM_ARTIST", "ALBUM ARTIST", "ENSEMBLE")

    assert find_first_non_empty_value(fields.get, chain) == "Various"


def test_find_first_non_empty_value_keeps_present_empty_value() -> None:
    fields = {"KEY": ""}
    assert find_first_non_empty_value(fields.get, ("INITIALKEY", "KEY")) == ""
    assert find_first_non_empty_value({}.get, ("INITIALKEY", "KEY")) is None


def test_find_first_non_empty_prefers_candidate_with_text() -> None:
    candidates = [("a", ""), ("b", "text"), ("c", "more")]
    assert find_first_non_empty(candidates, lambda item: item[1]) == ("b", "text")
    assert find_first_non_empty([("a", "")], lambda item: item[1]) == ("a", "")
    assert find_first_non_empty([], lambda item: item) is None


def test_parse_tuple_numbers() -> None:
    assert parse_tuple_numbers([(4, 12)]) == (4, 12)
    assert parse_tuple_numbers([(4,)]) == (4, 0)  # pyright: ignore[reportArgumentType]
    assert parse_tuple_numbers([]) is None
    assert parse_tuple_numbers(None) is None
