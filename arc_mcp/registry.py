#!/usr/bin/env python3
"""Locate and list spaces in the primary sidebar container."""

from typing import Any, Dict, List, Optional, Tuple

from .ledger import SidebarDocument
from .models import ROLE_MARKERS, Space
from .sidebar_store import NotFound


def container_ids(space: Dict[str, Any]) -> List[str]:
    """
    Structural container ids of a space, in stored order.

    By convention the first is the pinned container and the second the
    unpinned one. Spaces without containerIDs fall back to the string
    entries of newContainerIDs.
    """
    ids = space.get("containerIDs")
    if ids is None:
        ids = space.get("newContainerIDs") or []
    return [cid for cid in ids if isinstance(cid, str) and cid not in ROLE_MARKERS]


def space_icon(space: Dict[str, Any]) -> Optional[str]:
    icon_type = (space.get("customInfo") or {}).get("iconType") or {}
    return icon_type.get("emoji") or icon_type.get("icon")


class SpaceRegistry:
    """Space lookups over one loaded document."""

    def __init__(self, doc: SidebarDocument):
        self.doc = doc

    def find(self, name_or_id: str) -> Optional[Dict[str, Any]]:
        """First space whose id or title equals name_or_id, in storage order."""
        for record in self.doc.spaces.records():
            if record.id == name_or_id or record.data.get("title") == name_or_id:
                return record.data
        return None

    def require(self, name_or_id: str) -> Dict[str, Any]:
        space = self.find(name_or_id)
        if space is None:
            raise NotFound(f"Space not found: {name_or_id}")
        return space

    def list(self) -> List[Space]:
        """Every space that has both an id and a title."""
        spaces = []
        for record in self.doc.spaces.records():
            space = record.data
            if space.get("id") and space.get("title"):
                spaces.append(Space(id=space["id"], title=space["title"], icon=space_icon(space)))
        return spaces

    def container_roles(self) -> Dict[str, Tuple[str, bool]]:
        """Map each structural container id to (space id, is_pinned)."""
        roles = {}
        for record in self.doc.spaces.records():
            ids = container_ids(record.data)
            if len(ids) > 0:
                roles[ids[0]] = (record.id, True)
            if len(ids) > 1:
                roles[ids[1]] = (record.id, False)
        return roles
