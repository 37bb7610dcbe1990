#!/usr/bin/env python3
"""
Arc MCP Server

Manage Arc Browser spaces and tabs over the Model Context Protocol (stdio).
Run with `arc-mcp` or `python -m arc_mcp`.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .sidebar_store import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line options."""
    parser = argparse.ArgumentParser(
        prog="arc-mcp",
        description="MCP server for Arc Browser spaces and tabs.",
    )
    parser.add_argument(
        "--sidebar",
        metavar="PATH",
        help="StorableSidebar.json to edit (default: Arc's own, or $ARC_SIDEBAR_PATH)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    parser.add_argument("-s", "--silent", action="store_true", help="Disable logging")
    return parser.parse_args(argv)


def check_macos():
    """Warn when not on macOS: focus_space and open_url need osascript."""
    if sys.platform != "darwin":
        logging.warning(f"Not running on macOS ({sys.platform}); focus_space and open_url will fail.")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose, silent=args.silent)
    check_macos()

    from .server import configure, mcp

    configure(args.sidebar)
    logging.info("Arc MCP server running on stdio")
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logging.info("Bye!")


if __name__ == "__main__":
    main()
