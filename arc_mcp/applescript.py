#!/usr/bin/env python3
"""Drive the running Arc application through osascript (macOS only)."""

import logging
import subprocess
from typing import Optional

from .sidebar_store import ScriptError


def quote(value: str) -> str:
    """AppleScript string literal for value."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def focus_space_script(space_title: str) -> str:
    return f"""
tell application "Arc"
  tell front window
    tell space {quote(space_title)} to focus
  end tell
end tell
"""


def open_url_script(url: str, space_title: Optional[str] = None) -> str:
    if space_title is None:
        return f"""
tell application "Arc"
  tell front window
    make new tab with properties {{URL:{quote(url)}}}
  end tell
end tell
"""
    return f"""
tell application "Arc"
  tell front window
    tell space {quote(space_title)}
      make new tab with properties {{URL:{quote(url)}}}
    end tell
  end tell
end tell
"""


def run_osascript(script: str) -> str:
    """Run an AppleScript and return its stdout."""
    logging.debug(f"osascript: {script.strip()}")
    try:
        result = subprocess.run(
            ["osascript", "-e", script],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as e:
        raise ScriptError("osascript is not available (macOS only)") from e

    if result.returncode != 0:
        raise ScriptError(result.stderr.strip() or f"osascript exited with status {result.returncode}")
    return result.stdout
