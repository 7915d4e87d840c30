import json

import pytest

from mflash_studio.find_replace import (
    FindState,
    build_regex,
    cut_range,
    find_matches,
    format_json,
    insert_text,
    line_count,
    replace_all_case_insensitive_ascii,
)


def test_plain_search_case_insensitive_finds_every_occurrence():
    text = "abcABCabc"
    matches = find_matches(text, "abc", case_sensitive=False)
    assert len(matches) == 3
    assert all(text[s:e].lower() == "abc" for s, e in matches)


def test_plain_search_case_sensitive():
    text = "abcABCabc"
    matches = find_matches(text, "ABC", case_sensitive=True)
    assert [text[s:e] for s, e in matches] == ["ABC"]


def test_plain_search_is_non_overlapping():
    matches = find_matches("aaaa", "aa", case_sensitive=True)
    assert len(matches) == 2
    assert matches[0][1] <= matches[1][0]


def test_plain_search_folds_only_ascii():
    assert find_matches("É", "é", case_sensitive=False) == []


def test_empty_query_matches_nothing():
    assert find_matches("anything", "") == []


def test_regex_search_and_invalid_regex():
    text = "id1 id22 id333"
    matches = find_matches(text, r"id\d+", use_regex=True)
    assert [text[s:e] for s, e in matches] == ["id1", "id22", "id333"]
    assert find_matches(text, "(", use_regex=True) == []
    assert build_regex("(", False) is None


def test_build_regex_respects_case():
    assert build_regex("abc", False).search("ABC") is not None
    assert build_regex("abc", True).search("ABC") is None


def test_replace_all_case_insensitive_ascii():
    text = "Foo foo FOO bar"
    result = replace_all_case_insensitive_ascii(text, "foo", "x")
    assert "foo" not in result.lower()
    assert result.endswith(" bar")
    assert replace_all_case_insensitive_ascii(text, "", "x") == text


def test_state_navigation_wraps():
    state = FindState(query="a")
    state.update("a a a")
    assert state.status() == "1 of 3"
    state.previous()
    assert state.current == 2
    state.next()
    assert state.current == 0


def test_state_status_messages():
    state = FindState(query="zzz")
    state.update("abc")
    assert state.status() == "No results"
    state = FindState(query="[", use_regex=True)
    state.update("abc")
    assert state.status() == "Invalid regex"


def test_update_clamps_current():
    state = FindState(query="a", current=5)
    state.update("a a")
    assert state.current == len(state.matches) - 1


def test_replace_current_plain():
    state = FindState(query="cat", case_sensitive=True)
    text = "cat cat"
    state.update(text)
    state.next()
    result = state.replace_current(text, "dog")
    assert result == "cat dog"
    assert len(state.matches) == 1


def test_replace_current_without_matches_keeps_text():
    state = FindState(query="zzz")
    state.update("abc")
    assert state.replace_current("abc", "x") == "abc"


def test_replace_all_regex_with_group_references():
    state = FindState(query=r"(\w)(\d)", use_regex=True)
    text = "a1 b2"
    state.update(text)
    assert state.replace_all(text, "$2$1") == "1a 2b"


def test_replace_all_plain_leaves_no_matches():
    state = FindState(query="Ab")
    result = state.replace_all("ab AB aB", "_")
    assert state.matches == []
    assert find_matches(result, "ab") == []


def test_replace_all_empty_query_is_noop():
    state = FindState()
    assert state.replace_all("text", "x") == "text"


def test_format_json_round_trip_and_error():
    source = '{"a":[1,2],"b":{"c":null}}'
    formatted = format_json(source)
    assert json.loads(formatted) == json.loads(source)
    assert "\n" in formatted
    assert format_json(formatted) == formatted
    with pytest.raises(ValueError):
        format_json("{not json")


def test_line_count():
    assert line_count("") == 1
    assert line_count("a\nb\nc") == 3


def test_cut_and_insert():
    text = "hello world"
    assert cut_range(text, 0, 6) == "world"
    assert insert_text(text, "big ", 6) == "hello big world"
    assert insert_text(text, "there", 6, 11) == "hello there"
    assert insert_text(text, "!", 100) == text + "!"
    with pytest.raises(ValueError):
        cut_range(text, 5, 2)


def test_cut_then_insert_restores_text():
    text = "abcdef"
    removed = text[2:4]
    assert insert_text(cut_range(text, 2, 4), removed, 2) == text