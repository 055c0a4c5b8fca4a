# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  It:
#     1. Declares the `search` tool and its input schema
#     2. Hands the arguments to core/ for validation and the HTTP call
#     3. Returns core/'s text rendering as the tool result
#     4. Converts core.errors failures into MCP tool errors
#
#   It contains no validation rules, no HTTP code and no formatting logic.
# =============================================================================
