# =============================================================================
# main.py  —  Interactive Console for the Everything Search tool
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads settings from the environment / .env (core/config.py)
#   2. Builds the tool server (tools/mcp_server.py) and connects an in-memory
#      FastMCP client to it, the same way a real MCP client would talk to it
#   3. Reads one query per line and prints the `search` tool's text output
#
#   Use it to check that Everything's HTTP server is reachable and that the
#   output looks right before wiring the server into an MCP client.  Errors
#   (Everything not running, timeouts, ...) are printed, not raised.
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Load .env BEFORE building the server so EverythingSettings sees it
load_dotenv()

from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.config import EverythingSettings
from tools.mcp_server import create_server


async def run_console(max_results: int = 20) -> None:
    """Prompt for queries until the user quits."""
    settings = EverythingSettings.from_env()
    server = create_server(settings=settings)

    print("=" * 70)
    print("  EVERYTHING SEARCH CONSOLE")
    print(f"  Everything HTTP server: {settings.base_url}")
    print(f"  Default scope: {settings.default_scope or '(all drives)'}")
    print("=" * 70)
    print("   (Type 'quit' to exit)\n")

    async with Client(server) as client:
        while True:
            try:
                query = input("\n🔎 Search: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\n\n👋 Goodbye!")
                break

            if query.lower() in ("quit", "exit", "q"):
                print("\n👋 Goodbye!")
                break

            if not query:
                continue

            try:
                result = await client.call_tool(
                    "search", {"query": query, "maxResults": max_results}
                )
            except ToolError as e:
                print(f"\n⚠️  {e}")
                continue

            print("-" * 70)
            for block in result.content:
                text = getattr(block, "text", None)
                if text:
                    print(text)
            print("-" * 70)


if __name__ == "__main__":
    asyncio.run(run_console())
