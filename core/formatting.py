# =============================================================================
# core/formatting.py  —  Result Formatter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Renders a SearchResponse as the plain text block the `search` tool
#   returns:
#
#       Found 2 results:
#
#       Name: report.txt
#       Path: C:\docs
#       Size: 1.00 KB
#       Modified: Tue Mar 10 14:02:11 2020
#
#       Name: old
#       Path: C:\docs
#       Size: (folder)
#       Modified: No date
#
#   Entries appear in the order Everything returned them.  Sorting happens
#   upstream (the sort= and ascending= parameters), never here.
#
# Every function in this module is pure: the same input always gives the
# same text.
# =============================================================================

import logging
from datetime import date, datetime
from typing import Optional

from core.models import RawSearchResult, SearchResponse

logger = logging.getLogger(__name__)


_SIZE_UNITS = ("bytes", "KB", "MB", "GB", "TB")

# Milliseconds between 1601-01-01 (FILETIME epoch) and 1970-01-01 (Unix epoch)
FILETIME_EPOCH_OFFSET_MS = 11_644_473_600_000
_TICKS_PER_MS = 10_000

# Everything writes this date when it does not know the real one
_PLACEHOLDER_DATE = date(1980, 2, 1)


def format_file_size(size: Optional[str], is_folder: bool = False) -> str:
    """Render a decimal byte count as "12.34 MB".

    Folders always render as "(folder)".  Missing, unparseable and zero sizes
    render as "N/A", as do counts too large for a float.
    """
    if is_folder:
        return "(folder)"
    if not size:
        return "N/A"
    try:
        value = int(str(size).strip())
        amount = float(value)
    except (ValueError, OverflowError):
        return "N/A"
    if value == 0:
        return "N/A"

    unit = 0
    while amount >= 1024 and unit < len(_SIZE_UNITS) - 1:
        amount /= 1024
        unit += 1
    return f"{amount:.2f} {_SIZE_UNITS[unit]}"


def filetime_to_datetime(file_time: str) -> datetime:
    """Convert FILETIME ticks (as text) to a naive local datetime.

    Raises ValueError / OverflowError / OSError on bad input.
    """
    unix_ms = int(file_time) // _TICKS_PER_MS - FILETIME_EPOCH_OFFSET_MS
    return datetime.fromtimestamp(unix_ms / 1000)


def format_file_time(file_time: Optional[str]) -> str:
    """Render a FILETIME tick count as a local date/time string.

    Returns "No date" for empty, "0" and Everything's 1980-02-01 placeholder,
    and "Invalid date" when the value cannot be converted.
    """
    if file_time is None or file_time in ("", "0"):
        return "No date"

    try:
        moment = filetime_to_datetime(file_time)
    except (ValueError, OverflowError, OSError) as e:
        logger.error("Date conversion error: %s (value=%r)", e, file_time)
        return "Invalid date"

    if moment.date() == _PLACEHOLDER_DATE:
        return "No date"
    return moment.strftime("%c")


def format_result(entry: RawSearchResult) -> str:
    size = format_file_size(entry.size, entry.is_folder)
    modified = format_file_time(entry.date_modified)
    return f"Name: {entry.name}\nPath: {entry.path}\nSize: {size}\nModified: {modified}\n"


def format_search_response(response: SearchResponse) -> str:
    """Render the whole response: count header, then one block per entry.

    The header always shows the engine's reported total, even when the
    results list is empty (e.g. a body with totalResults but no results).
    """
    header = f"Found {response.total_results} results:\n\n"
    if not response.results:
        return header + "No results found"
    return header + "\n".join(format_result(entry) for entry in response.results)
