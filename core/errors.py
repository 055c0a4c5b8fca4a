# =============================================================================
# core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure a search can hit is one of these.  core/ raises them; the
# tools/ layer turns them into MCP tool errors.  Nothing here is retried.
#
#   ValidationError       the caller sent a malformed request
#   UnavailableError      Everything's HTTP server is not reachable
#   RequestTimeoutError   the HTTP call exceeded its deadline
#   ProtocolError         the response body is not the shape we expect
#   ExternalServiceError  any other HTTP / transport failure
#
# The message of each error is what the caller sees.  Diagnostic detail
# (parameters, response snippets) goes to the log, never into the message.
# =============================================================================


class EverythingSearchError(Exception):
    """Base class for every error raised while serving a search."""


class ValidationError(EverythingSearchError):
    """The tool arguments failed validation."""


class UnavailableError(EverythingSearchError):
    """Everything's HTTP server refused the connection (or is not running)."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "Could not connect to Everything Search. Make sure the HTTP server "
            "is enabled in Everything's settings (Tools > Options > HTTP Server)."
        )


class RequestTimeoutError(EverythingSearchError, TimeoutError):
    """The request to Everything did not complete in time."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or "Everything Search API request timed out. "
            "The server might be busy or unresponsive."
        )


class ProtocolError(EverythingSearchError):
    """The engine answered, but not with {totalResults, results}."""

    def __init__(self, message: str | None = None):
        super().__init__(message or "Invalid response from Everything Search API")


class ExternalServiceError(EverythingSearchError):
    """Any other transport or HTTP status failure."""
