#!/usr/bin/env python3
"""Rebuild the nested tab/folder tree of a space from the flat item pool."""

import logging
from typing import Any, Dict, List, Optional, Set

from .ledger import SidebarDocument
from .models import PINNED, UNPINNED, FolderNode, ItemKind, SpaceTree, Tab, TabNode, TreeNode
from .registry import SpaceRegistry, container_ids


def classify(item: Dict[str, Any]) -> ItemKind:
    """Tab payload wins over container payload; anything else is a folder."""
    data = item.get("data") or {}
    if "tab" in data:
        return ItemKind.TAB
    if "itemContainer" in data:
        return ItemKind.CONTAINER
    return ItemKind.FOLDER


def saved_title(item: Dict[str, Any]) -> str:
    """Title Arc saved with the tab, ignoring a sidebar rename."""
    tab_data = (item.get("data") or {}).get("tab") or {}
    return tab_data.get("savedTitle") or tab_data.get("savedURL") or "Untitled"


def tab_title(item: Dict[str, Any]) -> str:
    """Sidebar rename first, then the saved title."""
    return item.get("title") or saved_title(item)


def tab_url(item: Dict[str, Any]) -> str:
    return ((item.get("data") or {}).get("tab") or {}).get("savedURL") or ""


class TreeBuilder:
    """Builds sidebar views over one loaded document."""

    def __init__(self, doc: SidebarDocument):
        self.doc = doc
        self.registry = SpaceRegistry(doc)
        self.item_lookup = self._build_lookup()

    def _build_lookup(self) -> Dict[str, Dict[str, Any]]:
        items = self.doc.items
        for problem in items.pairing_violations():
            logging.warning(f"Sidebar items: {problem}")
        return {record.id: record.data for record in items.records()}

    def _child_ids(self, parent_id: str) -> List[str]:
        parent_item = self.item_lookup.get(parent_id)
        if parent_item and "childrenIds" in parent_item:
            return parent_item["childrenIds"] or []

        # Fallback: collect children by parentID (storage order)
        return [
            item_id for item_id, item in self.item_lookup.items()
            if item.get("parentID") == parent_id
        ]

    def build_tree(self, parent_id: str, _path: Optional[Set[str]] = None) -> List[TreeNode]:
        """Recursively build the children of parent_id, preserving order."""
        path = (_path or set()) | {parent_id}
        children: List[TreeNode] = []

        for item_id in self._child_ids(parent_id):
            item = self.item_lookup.get(item_id)
            if not item or item_id in path:
                continue

            kind = classify(item)
            if kind is ItemKind.TAB:
                children.append(TabNode(id=item_id, title=tab_title(item), url=tab_url(item)))
            elif kind is ItemKind.FOLDER:
                children.append(FolderNode(
                    id=item_id,
                    title=item.get("title") or "Untitled",
                    children=self.build_tree(item_id, path),
                ))
            else:
                logging.debug(f"Skipping container {item_id} nested under {parent_id}")

        return children

    def space_tree(self, space: Dict[str, Any]) -> SpaceTree:
        """Pinned and unpinned sections of a space, by container position."""
        containers = container_ids(space)
        tree = SpaceTree(space_id=space["id"], title=space.get("title") or "")
        if len(containers) > 0:
            tree.pinned = self.build_tree(containers[0])
        if len(containers) > 1:
            tree.unpinned = self.build_tree(containers[1])
        return tree

    def flat_tabs(self, space_id: Optional[str] = None) -> List[Tab]:
        """
        Tabs parented directly on a space container, in storage order.

        Tabs inside folders are not included.
        """
        roles = self.registry.container_roles()
        tabs = []

        for item_id, item in self.item_lookup.items():
            if classify(item) is not ItemKind.TAB or not item.get("parentID"):
                continue
            role = roles.get(item["parentID"])
            if role is None:
                continue
            owner, is_pinned = role
            if space_id and owner != space_id:
                continue

            tabs.append(Tab(
                id=item_id,
                title=saved_title(item),
                url=tab_url(item),
                location=PINNED if is_pinned else UNPINNED,
                space_id=owner,
            ))

        return tabs
