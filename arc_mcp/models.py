#!/usr/bin/env python3
"""Common data models for the Arc sidebar document and its views."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


PINNED = "pinned"
UNPINNED = "unpinned"
ROLE_MARKERS = (PINNED, UNPINNED)


class ItemKind(Enum):
    """Shape of an entry in the sidebar item pool."""
    TAB = "tab"
    CONTAINER = "container"
    FOLDER = "folder"


# ============== Paired list entries ==============

@dataclass(frozen=True)
class Reference:
    """Bare id token that precedes a record in a paired list."""
    id: str


@dataclass
class Record:
    """Full record of a paired list. `data` is the stored dict, not a copy."""
    id: str
    data: Dict[str, Any]


Entry = Union[Reference, Record]


# ============== Views ==============

@dataclass
class Space:
    """Represents an Arc Browser Space as listed to callers."""
    id: str
    title: str
    icon: Optional[str] = None


@dataclass
class TabNode:
    """A tab leaf in the nested sidebar tree."""
    id: str
    title: str
    url: str
    type: str = "tab"


@dataclass
class FolderNode:
    """A folder in the nested sidebar tree, children in sidebar order."""
    id: str
    title: str
    children: List[Union["TabNode", "FolderNode"]] = field(default_factory=list)
    type: str = "folder"


TreeNode = Union[TabNode, FolderNode]


@dataclass
class SpaceTree:
    """Pinned and unpinned sections of one space."""
    space_id: str
    title: str
    pinned: List[TreeNode] = field(default_factory=list)
    unpinned: List[TreeNode] = field(default_factory=list)


@dataclass
class Tab:
    """A tab in the flat cross-space listing."""
    id: str
    title: str
    url: str
    location: str
    space_id: str
