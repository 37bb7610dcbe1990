"""Core modules for Arc sidebar operations."""

from .models import Space, SpaceTree, Tab, TabNode, FolderNode, ItemKind, Reference, Record
from .ledger import PairedList, SidebarDocument
from .sidebar_store import (
    ArcDataError,
    StorageUnavailable,
    NotFound,
    ThemeTemplateMissing,
    ContainerMissing,
    ScriptError,
    SidebarStore,
    setup_logging,
)
from .registry import SpaceRegistry
from .mirror import MirrorSynchronizer
from .tree import TreeBuilder
from .operations import (
    list_spaces,
    find_space,
    create_space,
    delete_space,
    focus_space,
    list_tabs,
    list_all_tabs,
    add_tab,
    delete_tab,
    open_url,
)

__all__ = [
    # Models
    "Space",
    "SpaceTree",
    "Tab",
    "TabNode",
    "FolderNode",
    "ItemKind",
    "Reference",
    "Record",
    # Document
    "PairedList",
    "SidebarDocument",
    "SidebarStore",
    "setup_logging",
    # Errors
    "ArcDataError",
    "StorageUnavailable",
    "NotFound",
    "ThemeTemplateMissing",
    "ContainerMissing",
    "ScriptError",
    # Engine
    "SpaceRegistry",
    "MirrorSynchronizer",
    "TreeBuilder",
    # Operations
    "list_spaces",
    "find_space",
    "create_space",
    "delete_space",
    "focus_space",
    "list_tabs",
    "list_all_tabs",
    "add_tab",
    "delete_tab",
    "open_url",
]
