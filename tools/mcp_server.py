# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the single `search` tool over MCP.  The tool is a thin wrapper
#   around core/: it validates the arguments, asks Everything for results and
#   returns them as readable text.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls `search` with a JSON argument object
#   2. FastMCP routes the call to the decorated function below
#   3. core.query.normalize_request() validates it and fills in defaults
#   4. core.everything.EverythingClient sends one GET to Everything
#   5. core.formatting renders the response as text
#   6. Any core.errors failure becomes a ToolError the client can show
#
# ARGUMENT NAMES:
#   The tool's parameters use camelCase (caseSensitive, maxResults, ...)
#   because the parameter names ARE the published input schema.
#
# RUNNING THIS SERVER:
#     a) Standalone over stdio:  python -m tools.mcp_server
#     b) In-process, through fastmcp.Client(create_server(...))  (main.py, tests)
# =============================================================================

import json
import logging
import os
import sys
from typing import Annotated, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.config import EverythingSettings
from core.errors import EverythingSearchError
from core.everything import EverythingClient
from core.formatting import format_search_response
from core.query import normalize_request

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: over the stdio transport, STDOUT carries the MCP JSON
# messages and anything else written there would corrupt the stream.
#
# Colors:
#   CYAN    incoming tool calls (name + parameters)
#   YELLOW  intermediate status
#   GREEN   responses
#   RED     failures reported back to the caller
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _log_level(name: Optional[str]) -> int:
    """Map LOG_LEVEL to a logging level; unknown names mean INFO."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=_log_level(os.environ.get("LOG_LEVEL")),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

# Longest response text echoed to the log
_LOG_PREVIEW_CHARS = 300


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the start of the tool's text response in GREEN, then return it."""
    preview = text if len(text) <= _LOG_PREVIEW_CHARS else text[:_LOG_PREVIEW_CHARS] + "…"
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(preview)}{_RESET}")
    return text


def _log_failure(tool_name: str, error: Exception) -> None:
    logging.warning(f"{_RED}  ✗ {tool_name} failed ({type(error).__name__}): {error}{_RESET}")


# =============================================================================
# Server factory
# =============================================================================
# The name "everything-search" is the server identity clients see.
# create_server() takes an optional EverythingClient so tests can hand in one
# backed by httpx.MockTransport.
# =============================================================================
def create_server(
    client: Optional[EverythingClient] = None,
    settings: Optional[EverythingSettings] = None,
) -> FastMCP:
    """Build the FastMCP server with the `search` tool registered."""
    if client is None:
        client = EverythingClient(settings or EverythingSettings.from_env())
    settings = client.settings

    server = FastMCP("everything-search")

    @server.tool()
    async def search(
        query: Annotated[str, Field(description="Search query")],
        scope: Annotated[Optional[str], Field(description=f"Search scope (default: {settings.default_scope})")] = None,
        caseSensitive: Annotated[Optional[bool], Field(description="Match case")] = None,
        wholeWord: Annotated[Optional[bool], Field(description="Match whole words only")] = None,
        regex: Annotated[Optional[bool], Field(description="Use regular expressions")] = None,
        path: Annotated[Optional[bool], Field(description="Search in paths")] = None,
        maxResults: Annotated[
            Optional[int], Field(description="Maximum number of results (1-1000, default: 100)")
        ] = None,
        sortBy: Annotated[
            Optional[str], Field(description="Sort results by: name, path, size or date_modified")
        ] = None,
        ascending: Annotated[Optional[bool], Field(description="Sort in ascending order")] = None,
        offset: Annotated[Optional[int], Field(description="Display results from the nth result")] = None,
    ) -> str:
        """Search for files and folders using Everything Search.

        Everything must be running on the same machine with its HTTP server
        enabled.  Queries use Everything's syntax (wildcards such as *.txt,
        multiple terms, ext:pdf, ...).  The scope is prepended as a path,
        so scope "C:\\Users" with query "*.txt" searches C:\\Users\\*.txt;
        pass an empty scope to search all indexed drives.

        Returns a text block: "Found N results:" followed by one
        Name/Path/Size/Modified block per entry.
        """
        arguments = {
            "query": query,
            "scope": scope,
            "caseSensitive": caseSensitive,
            "wholeWord": wholeWord,
            "regex": regex,
            "path": path,
            "maxResults": maxResults,
            "sortBy": sortBy,
            "ascending": ascending,
            "offset": offset,
        }
        _log_request("search", **{k: v for k, v in arguments.items() if v is not None})

        try:
            request = normalize_request(arguments, default_scope=settings.default_scope)
            response = await client.search(request)
        except EverythingSearchError as e:
            _log_failure("search", e)
            raise ToolError(str(e)) from e

        _log_status(
            f"Everything reported {response.total_results} results, "
            f"{len(response.results)} returned"
        )
        return _log_response("search", format_search_response(response))

    return server


mcp = create_server()


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
