# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that flows
# through a search:
#
#   SearchRequest    →  what the caller asked for (already validated)
#   RawSearchResult  →  one entry as reported by Everything's HTTP server
#   SearchResponse   →  the whole JSON body, parsed
#
# They carry no behavior.  Validation lives in core/query.py (requests) and
# core/everything.py (responses); rendering lives in core/formatting.py.
# =============================================================================

from dataclasses import dataclass, field
from typing import Optional


# Sort columns understood by Everything's HTTP server (the `sort=` parameter).
SORT_FIELDS = ("name", "path", "size", "date_modified")

MIN_RESULTS = 1
MAX_RESULTS = 1000


# -----------------------------------------------------------------------------
# SearchRequest — a normalized tool call
# -----------------------------------------------------------------------------
# Every optional field already holds its default by the time one of these
# exists.  Use core.query.normalize_request() to build one from raw tool
# arguments.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchRequest:
    """A validated search request, ready to be turned into query parameters."""

    query: str                         # Free-text Everything query, e.g. "*.txt"
    scope: str = "C:"                  # Path prefix joined to the query ("" = everywhere)
    case_sensitive: bool = False
    whole_word: bool = False
    regex: bool = False
    path: bool = False                 # Match against full paths, not just names
    max_results: int = 100             # Always within [MIN_RESULTS, MAX_RESULTS]
    sort_by: str = "name"              # One of SORT_FIELDS
    ascending: bool = True
    offset: int = 0                    # Skip the first N results (paging)


# -----------------------------------------------------------------------------
# RawSearchResult — one row from Everything
# -----------------------------------------------------------------------------
# Everything reports sizes and dates as decimal *strings*.  Dates are Windows
# FILETIME ticks (100 ns since 1601-01-01 UTC); "0" means "no date".
# Folders carry type="folder" and a size that means nothing.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RawSearchResult:
    """One file or folder entry exactly as the engine reported it."""

    name: str
    path: str
    size: Optional[str] = None
    date_modified: Optional[str] = None
    type: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return self.type == "folder"


@dataclass(frozen=True)
class SearchResponse:
    """The parsed JSON body: a total count plus the entries, in engine order.

    total_results is what the engine *reported*; it may be larger than
    len(results) (paging) and is never reconciled with the list.
    """

    total_results: int
    results: list[RawSearchResult] = field(default_factory=list)
