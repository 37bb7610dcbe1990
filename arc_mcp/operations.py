#!/usr/bin/env python3
"""
Public sidebar operations.

Each call reads the sidebar file fresh. Mutating operations back the file
up, apply the edit in memory and write it once at the end; they never
raise, returning {"success": True, ...} or {"success": False, "error": ...}.
Listing operations raise ArcDataError when the file cannot be read.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from . import applescript
from .ledger import SidebarDocument
from .mirror import MirrorSynchronizer
from .models import Space, SpaceTree, Tab
from .registry import SpaceRegistry, space_icon
from .sidebar_store import ArcDataError, NotFound, SidebarStore
from .tree import TreeBuilder


Result = Dict[str, Any]


def _failure(action: str, error: Exception) -> Result:
    if isinstance(error, ArcDataError):
        logging.error(f"{action} failed: {error}")
    else:
        logging.exception(f"{action} failed unexpectedly")
    return {"success": False, "error": str(error)}


def _mutate(store: Optional[SidebarStore], action: str, edit: Callable[[SidebarDocument], Result]) -> Result:
    """Load, back up, edit and save. Nothing is written if edit raises."""
    store = store or SidebarStore()
    try:
        doc = store.load()
        store.backup()
        result = edit(doc)
        store.save(doc)
    except Exception as e:
        return _failure(action, e)

    return {"success": True, **result}


# ============== Spaces ==============

def list_spaces(store: Optional[SidebarStore] = None) -> List[Space]:
    doc = (store or SidebarStore()).load()
    return SpaceRegistry(doc).list()


def find_space(name_or_id: str, store: Optional[SidebarStore] = None) -> Optional[Space]:
    """Space by id or exact title, or None."""
    doc = (store or SidebarStore()).load()
    space = SpaceRegistry(doc).find(name_or_id)
    if space is None:
        return None
    return Space(id=space["id"], title=space.get("title") or "", icon=space_icon(space))


def create_space(name: str, icon: str = "star", store: Optional[SidebarStore] = None) -> Result:
    def edit(doc: SidebarDocument) -> Result:
        space_id = MirrorSynchronizer(doc).create_space(name, icon)
        logging.info(f"Created space '{name}' ({space_id})")
        return {"space_id": space_id}

    return _mutate(store, "Create space", edit)


def delete_space(name_or_id: str, recursive: bool = False, store: Optional[SidebarStore] = None) -> Result:
    """
    Delete a space with its containers and their direct children.

    With recursive=False, items nested inside folders of the space stay in
    the file, parented on a folder that no longer exists. recursive=True
    removes the whole subtree.
    """
    def edit(doc: SidebarDocument) -> Result:
        space = SpaceRegistry(doc).require(name_or_id)
        removed = MirrorSynchronizer(doc).delete_space(space, recursive=recursive)
        logging.info(f"Deleted space '{space.get('title')}' ({space['id']}) and {len(removed)} items")
        return {"space_id": space["id"]}

    return _mutate(store, "Delete space", edit)


def focus_space(name_or_id: str, store: Optional[SidebarStore] = None) -> Result:
    try:
        space = find_space(name_or_id, store)
        if space is None:
            raise NotFound(f"Space not found: {name_or_id}")
        applescript.run_osascript(applescript.focus_space_script(space.title))
    except Exception as e:
        return _failure("Focus space", e)

    logging.info(f"Focused space '{space.title}'")
    return {"success": True}


# ============== Tabs ==============

def list_tabs(space: Optional[str] = None, store: Optional[SidebarStore] = None) -> Optional[SpaceTree]:
    """
    Nested pinned/unpinned tree of one space.

    Without a space the first space is listed. Returns None when the space
    does not exist or the sidebar has no spaces.
    """
    doc = (store or SidebarStore()).load()
    registry = SpaceRegistry(doc)

    if space is None:
        spaces = registry.list()
        if not spaces:
            return None
        space = spaces[0].id

    space_data = registry.find(space)
    if space_data is None:
        return None
    return TreeBuilder(doc).space_tree(space_data)


def list_all_tabs(space: Optional[str] = None, store: Optional[SidebarStore] = None) -> List[Tab]:
    """Flat listing of top-level tabs across spaces, or of one space."""
    doc = (store or SidebarStore()).load()

    space_id = None
    if space is not None:
        space_data = SpaceRegistry(doc).find(space)
        if space_data is None:
            return []
        space_id = space_data["id"]

    return TreeBuilder(doc).flat_tabs(space_id)


def add_tab(
    space: str,
    url: str,
    title: Optional[str] = None,
    pinned: bool = False,
    store: Optional[SidebarStore] = None,
) -> Result:
    def edit(doc: SidebarDocument) -> Result:
        space_data = SpaceRegistry(doc).require(space)
        tab_id = MirrorSynchronizer(doc).add_tab(space_data, url, title=title, pinned=pinned)
        location = "pinned" if pinned else "unpinned"
        logging.info(f"Added {location} tab {tab_id} to '{space_data.get('title')}': {url}")
        return {"tab_id": tab_id}

    return _mutate(store, "Add tab", edit)


def delete_tab(tab_id: str, store: Optional[SidebarStore] = None) -> Result:
    def edit(doc: SidebarDocument) -> Result:
        parent_id = MirrorSynchronizer(doc).delete_tab(tab_id)
        logging.info(f"Deleted tab {tab_id} (parent {parent_id})")
        return {}

    return _mutate(store, "Delete tab", edit)


def open_url(url: str, space: Optional[str] = None, store: Optional[SidebarStore] = None) -> Result:
    """Open url in the running Arc window, optionally inside a space."""
    try:
        title = None
        if space is not None:
            found = find_space(space, store)
            if found is None:
                raise NotFound(f"Space not found: {space}")
            title = found.title
        applescript.run_osascript(applescript.open_url_script(url, title))
    except Exception as e:
        return _failure("Open URL", e)

    logging.info(f"Opened {url}" + (f" in '{title}'" if title else ""))
    return {"success": True}
