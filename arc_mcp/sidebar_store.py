#!/usr/bin/env python3
"""Read, back up and write Arc's StorableSidebar.json."""

import json
import logging
import os
import shutil
import time
from pathlib import Path
from typing import Optional, Union

from .ledger import SidebarDocument


class ArcDataError(Exception):
    """Base exception for Arc sidebar data errors."""
    pass


class StorageUnavailable(ArcDataError):
    """The sidebar file is missing, unreadable or not a sidebar document."""
    pass


class NotFound(ArcDataError):
    """A space or tab lookup failed."""
    pass


class ThemeTemplateMissing(ArcDataError):
    """No existing space carries a window theme to copy."""
    pass


class ContainerMissing(ArcDataError):
    """A space lacks its pinned/unpinned structural containers."""
    pass


class ScriptError(ArcDataError):
    """osascript failed or is not available."""
    pass


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREY = "\033[90m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"

    @staticmethod
    def background(color: str) -> str:
        """Convert foreground color to background color."""
        return color.replace("[3", "[4", 1)


class CustomFormatter(logging.Formatter):
    """Custom formatter for colored logging output."""

    def __init__(self):
        super().__init__()
        time_format = f"{Colors.GREY}%(asctime)s{Colors.RESET}"
        self.FORMATS = {
            logging.DEBUG: f"{time_format} {Colors.BOLD}{Colors.CYAN}DEBG{Colors.RESET} %(message)s",
            logging.INFO: f"{time_format} {Colors.BOLD}{Colors.GREEN}INFO{Colors.RESET} %(message)s",
            logging.WARNING: f"{time_format} {Colors.BOLD}{Colors.YELLOW}WARN{Colors.RESET} %(message)s",
            logging.ERROR: f"{time_format} {Colors.BOLD}{Colors.RED}ERRR{Colors.RESET} %(message)s",
            logging.CRITICAL: f"{time_format} {Colors.BOLD}{Colors.background(Colors.RED)}CRIT{Colors.RESET} %(message)s",
        }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt, datefmt="%H:%M")
        return formatter.format(record)


def setup_logging(verbose: bool = False, silent: bool = False):
    """Configure logging with custom formatting. Output goes to stderr."""
    if silent:
        logging.disable(logging.CRITICAL)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(CustomFormatter())

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, handlers=[handler])


class SidebarStore:
    """Handles reading, backing up and writing the Arc sidebar file."""

    FILENAME = "StorableSidebar.json"
    BACKUP_PATTERN = "StorableSidebar.backup.{timestamp}.json"
    PATH_ENV = "ARC_SIDEBAR_PATH"

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else self.get_arc_data_path()

    @classmethod
    def get_arc_data_path(cls) -> Path:
        """Get the path to Arc's sidebar file, honoring ARC_SIDEBAR_PATH."""
        override = os.environ.get(cls.PATH_ENV)
        if override:
            return Path(os.path.expanduser(override))
        return Path(os.path.expanduser("~/Library/Application Support/Arc/")) / cls.FILENAME

    def load(self) -> SidebarDocument:
        """Read the sidebar file into a fresh document."""
        logging.debug(f"Reading {self.path}")

        if not self.path.exists():
            raise StorageUnavailable(
                f'File not found. Look for "{self.FILENAME}" '
                f'in the Arc browser data directory: {self.path.parent}'
            )

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageUnavailable(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageUnavailable(f"{self.path} is not an Arc sidebar document")

        doc = SidebarDocument(data)
        if doc.primary is None:
            raise StorageUnavailable(f"No sidebar container with spaces or items in {self.path}")
        return doc

    def backup(self) -> Path:
        """Copy the current file to a sibling tagged with the time in milliseconds."""
        timestamp = int(time.time() * 1000)
        backup_path = self.path.with_name(self.BACKUP_PATTERN.format(timestamp=timestamp))
        try:
            shutil.copy2(self.path, backup_path)
        except OSError as e:
            raise StorageUnavailable(f"Backup failed: {e}") from e

        logging.debug(f"Backup: {backup_path.name}")
        return backup_path

    def save(self, doc: SidebarDocument):
        """Overwrite the sidebar file with the document."""
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(doc.data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageUnavailable(f"Cannot write {self.path}: {e}") from e

        logging.debug(f"Saved {self.path}")
