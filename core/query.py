# =============================================================================
# core/query.py  —  Request Normalizer
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the untyped argument bag of a `search` tool call into a validated
#   SearchRequest, and a SearchRequest into the exact query-string parameters
#   Everything's HTTP server understands.
#
# THE FLOW:
#   {"query": "*.txt", "maxResults": 5}            (tool arguments, camelCase)
#        │  normalize_request()
#        ▼
#   SearchRequest(query="*.txt", max_results=5, ...) (defaults filled in)
#        │  build_query_params()
#        ▼
#   {"search": "C:\\*.txt", "json": 1, "count": 5, ...}
#
# SCOPE RULE:
#   A non-empty scope is always joined to the query with a backslash, unless
#   the scope already ends with one.  An empty scope searches everywhere.
#   The default "C:" gets no special treatment: "C:" + "*.txt" → "C:\*.txt".
# =============================================================================

from collections.abc import Mapping
from typing import Any

from core.errors import ValidationError
from core.models import MAX_RESULTS, MIN_RESULTS, SORT_FIELDS, SearchRequest
from core.config import DEFAULT_SCOPE


PATH_SEPARATOR = "\\"

_BOOL_FIELDS = {
    # wire name → SearchRequest attribute
    "caseSensitive": "case_sensitive",
    "wholeWord": "whole_word",
    "regex": "regex",
    "path": "path",
    "ascending": "ascending",
}


def _as_int(name: str, value: Any) -> int:
    # JSON numbers may arrive as floats ("5.0"); bool is an int subclass
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValidationError(f"{name} must be an integer, got {value!r}")


def normalize_request(
    arguments: Mapping[str, Any] | None,
    default_scope: str = DEFAULT_SCOPE,
) -> SearchRequest:
    """Validate raw tool arguments and apply defaults.

    Args:
        arguments: The tool-call arguments, keyed by their wire (camelCase)
            names.  Unknown keys are ignored; None means "not given".
        default_scope: Scope used when the caller does not pass one.

    Returns:
        A SearchRequest with every field set.

    Raises:
        ValidationError: If query is missing/empty/not a string, maxResults is
            outside [1, 1000], sortBy is not a known column, offset is
            negative, or any field has the wrong type.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("Search arguments must be an object")

    query = arguments.get("query")
    if query is None:
        raise ValidationError("query is required")
    if not isinstance(query, str):
        raise ValidationError("query must be a string")
    if not query.strip():
        raise ValidationError("query must not be empty")

    scope = arguments.get("scope")
    if scope is None:
        scope = default_scope
    elif not isinstance(scope, str):
        raise ValidationError("scope must be a string")

    flags: dict[str, bool] = {}
    for wire_name, attr in _BOOL_FIELDS.items():
        value = arguments.get(wire_name)
        if value is None:
            continue
        if not isinstance(value, bool):
            raise ValidationError(f"{wire_name} must be a boolean")
        flags[attr] = value

    max_results = arguments.get("maxResults")
    if max_results is None:
        max_results = 100
    else:
        max_results = _as_int("maxResults", max_results)
        if not MIN_RESULTS <= max_results <= MAX_RESULTS:
            raise ValidationError(
                f"maxResults must be between {MIN_RESULTS} and {MAX_RESULTS}, got {max_results}"
            )

    sort_by = arguments.get("sortBy")
    if sort_by is None:
        sort_by = "name"
    elif sort_by not in SORT_FIELDS:
        raise ValidationError(
            f"sortBy must be one of {', '.join(SORT_FIELDS)}, got {sort_by!r}"
        )

    offset = arguments.get("offset")
    if offset is None:
        offset = 0
    else:
        offset = _as_int("offset", offset)
        if offset < 0:
            raise ValidationError(f"offset must be >= 0, got {offset}")

    return SearchRequest(
        query=query,
        scope=scope,
        max_results=max_results,
        sort_by=sort_by,
        offset=offset,
        **flags,
    )


def build_search_term(query: str, scope: str) -> str:
    """Join scope and query into the string sent as `search=`."""
    if not scope:
        return query
    if scope.endswith(PATH_SEPARATOR):
        return f"{scope}{query}"
    return f"{scope}{PATH_SEPARATOR}{query}"


def build_query_params(request: SearchRequest) -> dict[str, str | int]:
    """Map a SearchRequest onto Everything's HTTP query-string parameters.

    The *_column flags ask Everything to include path, size and modification
    date in the JSON; without them every entry carries only its name.
    """
    return {
        "search": build_search_term(request.query, request.scope),
        "json": 1,
        "path_column": 1,
        "size_column": 1,
        "date_modified_column": 1,
        "case": int(request.case_sensitive),
        "wholeword": int(request.whole_word),
        "regex": int(request.regex),
        "path": int(request.path),
        # Clamped again for SearchRequests built by hand
        "count": min(max(request.max_results, MIN_RESULTS), MAX_RESULTS),
        "offset": request.offset,
        "sort": request.sort_by,
        "ascending": int(request.ascending),
    }
