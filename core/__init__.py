# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL search logic: request validation, the HTTP call
# to Everything and the text rendering of its results.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The tool server in tools/ is
#   the only MCP-aware code; everything here can be used (and tested) from a
#   plain Python REPL, with httpx.MockTransport standing in for Everything.
# =============================================================================
