from __future__ import annotations

from typing import Any

import pytest

from core.errors import ValidationError
from core.models import SearchRequest
from core.query import build_query_params, build_search_term, normalize_request


def test_defaults_applied() -> None:
    req = normalize_request({"query": "*.txt"})

    assert req == SearchRequest(
        query="*.txt",
        scope="C:",
        case_sensitive=False,
        whole_word=False,
        regex=False,
        path=False,
        max_results=100,
        sort_by="name",
        ascending=True,
        offset=0,
    )


def test_wire_names_mapped() -> None:
    req = normalize_request(
        {
            "query": "report",
            "scope": "D:\\work",
            "caseSensitive": True,
            "wholeWord": True,
            "regex": True,
            "path": True,
            "maxResults": 5,
            "sortBy": "date_modified",
            "ascending": False,
            "offset": 20,
        }
    )

    assert req.scope == "D:\\work"
    assert req.case_sensitive and req.whole_word and req.regex and req.path
    assert req.max_results == 5
    assert req.sort_by == "date_modified"
    assert req.ascending is False
    assert req.offset == 20


def test_none_means_unset_and_unknown_keys_ignored() -> None:
    req = normalize_request(
        {"query": "a", "maxResults": None, "sortBy": None, "extra": "ignored"},
        default_scope="E:",
    )

    assert req.max_results == 100
    assert req.sort_by == "name"
    assert req.scope == "E:"


def test_integral_float_accepted() -> None:
    assert normalize_request({"query": "a", "maxResults": 5.0}).max_results == 5


@pytest.mark.parametrize(
    "arguments,message",
    [
        ({}, "query is required"),
        ({"query": 42}, "query must be a string"),
        ({"query": "   "}, "query must not be empty"),
        ({"query": "a", "maxResults": 0}, "maxResults must be between 1 and 1000"),
        ({"query": "a", "maxResults": 1001}, "maxResults must be between 1 and 1000"),
        ({"query": "a", "maxResults": "10"}, "maxResults must be an integer"),
        ({"query": "a", "maxResults": True}, "maxResults must be an integer"),
        ({"query": "a", "maxResults": 2.5}, "maxResults must be an integer"),
        ({"query": "a", "sortBy": "extension"}, "sortBy must be one of"),
        ({"query": "a", "offset": -1}, "offset must be >= 0"),
        ({"query": "a", "scope": 3}, "scope must be a string"),
        ({"query": "a", "regex": "yes"}, "regex must be a boolean"),
    ],
)
def test_invalid_arguments_rejected(arguments: dict[str, Any], message: str) -> None:
    with pytest.raises(ValidationError) as ei:
        normalize_request(arguments)

    assert message in str(ei.value)


def test_non_mapping_rejected() -> None:
    with pytest.raises(ValidationError):
        normalize_request(["query"])  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "scope,query,expected",
    [
        ("C:", "*.txt", "C:\\*.txt"),
        ("C:\\", "*.txt", "C:\\*.txt"),
        ("D:\\projects", "main.py", "D:\\projects\\main.py"),
        ("", "*.txt", "*.txt"),
    ],
)
def test_build_search_term(scope: str, query: str, expected: str) -> None:
    assert build_search_term(query, scope) == expected


def test_build_query_params_flags() -> None:
    req = normalize_request(
        {"query": "*.txt", "caseSensitive": True, "ascending": False, "maxResults": 5}
    )

    params = build_query_params(req)

    assert params == {
        "search": "C:\\*.txt",
        "json": 1,
        "path_column": 1,
        "size_column": 1,
        "date_modified_column": 1,
        "case": 1,
        "wholeword": 0,
        "regex": 0,
        "path": 0,
        "count": 5,
        "offset": 0,
        "sort": "name",
        "ascending": 0,
    }


def test_build_query_params_all_flags_on() -> None:
    req = normalize_request(
        {
            "query": "^notes\\d+$",
            "caseSensitive": True,
            "wholeWord": True,
            "regex": True,
            "path": True,
            "ascending": True,
        }
    )

    params = build_query_params(req)

    assert params["case"] == 1
    assert params["wholeword"] == 1
    assert params["regex"] == 1
    assert params["path"] == 1
    assert params["ascending"] == 1


@pytest.mark.parametrize("max_results", [1, 2, 100, 999, 1000])
def test_count_within_bounds_for_valid_requests(max_results: int) -> None:
    params = build_query_params(normalize_request({"query": "a", "maxResults": max_results}))

    assert params["count"] == max_results
    assert 1 <= params["count"] <= 1000


@pytest.mark.parametrize("max_results,expected", [(-5, 1), (0, 1), (5000, 1000)])
def test_count_clamped_for_hand_built_requests(max_results: int, expected: int) -> None:
    params = build_query_params(SearchRequest(query="a", max_results=max_results))

    assert params["count"] == expected
