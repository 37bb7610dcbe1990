#!/usr/bin/env python3
"""
Apply space and tab edits to every representation of the sidebar.

A space or item lives in up to five places: the primary container
(sidebar.containers), the local ledger (sidebarSyncState) and the remote
ledger (firebaseSyncState.syncData). Each edit here touches all of those
that are present in the document, so the ledgers stay isomorphic to the
primary lists for changes made by this tool.
"""

import copy
import logging
from typing import Any, Dict, Iterable, Optional, Set

from .identifiers import new_id, resolve_device_tag, timestamp
from .ledger import PairedList, SidebarDocument
from .models import PINNED, UNPINNED
from .registry import container_ids
from .sidebar_store import ContainerMissing, NotFound, ThemeTemplateMissing


# ============== Record Creation ==============

def build_space(
    space_id: str,
    title: str,
    icon: str,
    pinned_id: str,
    unpinned_id: str,
    theme: Dict[str, Any],
) -> Dict[str, Any]:
    """Create a space record. Icons containing a dot are SF Symbol names."""
    icon_type = {"icon": icon} if "." in icon else {"emoji": icon}

    return {
        "id": space_id,
        "title": title,
        "profile": {"default": True},
        "containerIDs": [PINNED, pinned_id, UNPINNED, unpinned_id],
        "newContainerIDs": [
            {PINNED: {}},
            pinned_id,
            {UNPINNED: {"_0": {"shared": {}}}},
            unpinned_id,
        ],
        "customInfo": {
            "iconType": icon_type,
            "windowTheme": copy.deepcopy(theme),
        },
    }


def build_container(container_id: str, space_id: str, ts: float, device: str) -> Dict[str, Any]:
    """Create an empty structural container owned by space_id."""
    return {
        "id": container_id,
        "title": None,
        "parentID": None,
        "childrenIds": [],
        "createdAt": ts,
        "originatingDevice": device,
        "isUnread": False,
        "data": {
            "itemContainer": {
                "containerType": {
                    "spaceItems": {"_0": space_id},
                },
            },
        },
    }


def build_tab(
    tab_id: str,
    parent_id: str,
    url: str,
    title: Optional[str],
    ts: float,
    device: str,
) -> Dict[str, Any]:
    """Create a tab item. The saved title defaults to the URL."""
    return {
        "id": tab_id,
        "title": None,
        "parentID": parent_id,
        "childrenIds": [],
        "createdAt": ts,
        "originatingDevice": device,
        "isUnread": False,
        "data": {
            "tab": {
                "savedURL": url,
                "savedTitle": title or url,
                "savedMuteStatus": "allowAudio",
                "timeLastActiveAt": ts,
            },
        },
    }


def removal_set(items: PairedList, containers: Iterable[str], recursive: bool = False) -> Set[str]:
    """
    Ids to drop when deleting a space: its containers and their children.

    Only items parented directly on a container are included unless
    recursive is set, in which case folder contents are followed down
    through parentID until nothing new is found.
    """
    doomed = set(containers)
    frontier = set(doomed)

    while frontier:
        children = {
            record.id for record in items.records()
            if record.data.get("parentID") in frontier and record.id not in doomed
        }
        doomed |= children
        frontier = children if recursive else set()

    return doomed


# ============== Synchronizer ==============

class MirrorSynchronizer:
    """Edits one loaded document. Device tag and timestamp are fixed per instance."""

    def __init__(self, doc: SidebarDocument, device: Optional[str] = None, ts: Optional[float] = None):
        self.doc = doc
        self.device = resolve_device_tag(doc) if device is None else device
        self.ts = timestamp() if ts is None else ts

    def _stamped(self, item_id: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Wrap a record the way the remote ledger stores it."""
        return {
            "id": item_id,
            "lastChangeDate": self.ts,
            "lastChangedDevice": self.device,
            "value": record,
        }

    def theme_template(self) -> Dict[str, Any]:
        for record in self.doc.spaces.records():
            theme = (record.data.get("customInfo") or {}).get("windowTheme")
            if theme:
                return theme
        raise ThemeTemplateMissing("Could not find theme template from existing spaces")

    def create_space(self, title: str, icon: str = "star") -> str:
        """Add a space and its two empty containers everywhere. Returns the space id."""
        theme = self.theme_template()

        space_id = new_id()
        pinned_id = new_id()
        unpinned_id = new_id()

        space = build_space(space_id, title, icon, pinned_id, unpinned_id, theme)
        pinned = build_container(pinned_id, space_id, self.ts, self.device)
        unpinned = build_container(unpinned_id, space_id, self.ts, self.device)

        self.doc.spaces.append(space_id, space)
        self.doc.items.append(pinned_id, pinned)
        self.doc.items.append(unpinned_id, unpinned)

        local_ordered = self.doc.local_ordered_space_ids
        if local_ordered is not None:
            local_ordered.append(space_id)

        local_models = self.doc.local_space_models
        if local_models is not None:
            local_models.append(space_id, {"encodedCKRecordFields": None, "value": space})

        remote_ordered = self.doc.remote_ordered_space_ids
        if remote_ordered is not None:
            remote_ordered.setdefault("value", []).append(space_id)
            remote_ordered["lastChangeDate"] = self.ts
            remote_ordered["lastChangedDevice"] = self.device

        remote_models = self.doc.remote_space_models
        if remote_models is not None:
            remote_models.append(space_id, self._stamped(space_id, space))

        remote_items = self.doc.remote_items
        if remote_items is not None:
            remote_items.append(pinned_id, self._stamped(pinned_id, pinned))
            remote_items.append(unpinned_id, self._stamped(unpinned_id, unpinned))

        logging.debug(
            f"Space {space_id}: pinned {pinned_id}, unpinned {unpinned_id}, "
            f"local ledger {'yes' if local_models is not None else 'no'}, "
            f"remote ledger {'yes' if remote_items is not None else 'no'}"
        )
        return space_id

    def delete_space(self, space: Dict[str, Any], recursive: bool = False) -> Set[str]:
        """Remove a space, its containers and their children everywhere. Returns removed item ids."""
        space_id = space["id"]
        doomed = removal_set(self.doc.items, container_ids(space), recursive=recursive)

        self.doc.spaces.remove([space_id])
        self.doc.items.remove(doomed)

        local_ordered = self.doc.local_ordered_space_ids
        if local_ordered is not None:
            local_ordered[:] = [sid for sid in local_ordered if sid != space_id]

        local_models = self.doc.local_space_models
        if local_models is not None:
            local_models.remove([space_id])

        remote_ordered = self.doc.remote_ordered_space_ids
        if remote_ordered is not None and isinstance(remote_ordered.get("value"), list):
            remote_ordered["value"] = [sid for sid in remote_ordered["value"] if sid != space_id]

        remote_models = self.doc.remote_space_models
        if remote_models is not None:
            remote_models.remove([space_id])

        remote_items = self.doc.remote_items
        if remote_items is not None:
            remote_items.remove(doomed)

        logging.debug(f"Space {space_id}: removed {len(doomed)} items")
        return doomed

    def add_tab(self, space: Dict[str, Any], url: str, title: Optional[str] = None, pinned: bool = False) -> str:
        """Append a tab to the space's pinned or unpinned container. Returns the tab id."""
        containers = container_ids(space)
        index = 0 if pinned else 1
        if len(containers) <= index:
            raise ContainerMissing(f"Container not found for space: {space['id']}")
        container_id = containers[index]

        tab_id = new_id()
        tab = build_tab(tab_id, container_id, url, title, self.ts, self.device)

        self.doc.items.append(tab_id, tab)

        container = self.doc.items.find(container_id)
        if container is not None:
            container["childrenIds"] = (container.get("childrenIds") or []) + [tab_id]
        else:
            logging.warning(f"Container {container_id} has no record; tab {tab_id} is parented on it anyway")

        remote_items = self.doc.remote_items
        if remote_items is not None:
            remote_items.append(tab_id, self._stamped(tab_id, tab))

        return tab_id

    def delete_tab(self, tab_id: str) -> Optional[str]:
        """Remove a tab and unlink it from its parent. Returns the former parent id."""
        tab = self.doc.items.find(tab_id)
        if tab is None:
            raise NotFound(f"Tab not found: {tab_id}")
        parent_id = tab.get("parentID")

        self.doc.items.remove([tab_id])

        if parent_id:
            parent = self.doc.items.find(parent_id)
            if parent is not None and parent.get("childrenIds"):
                parent["childrenIds"] = [cid for cid in parent["childrenIds"] if cid != tab_id]

        remote_items = self.doc.remote_items
        if remote_items is not None:
            remote_items.remove([tab_id])

        return parent_id
