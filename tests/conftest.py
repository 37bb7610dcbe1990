"""
Shared pytest fixtures for arc_mcp tests.

Builds a small but realistic StorableSidebar.json: one space "Work" with a
pinned container holding a tab and a folder (which holds another tab), and
an unpinned container holding one tab. Both sync ledgers are present.
"""

import copy
import json
from pathlib import Path

import pytest

from arc_mcp.ledger import SidebarDocument
from arc_mcp.sidebar_store import SidebarStore


WORK = "WORK-SPACE"
PINNED = "WORK-PINNED"
UNPINNED = "WORK-UNPINNED"
TAB_PINNED = "TAB-PINNED"
FOLDER = "FOLDER-DOCS"
TAB_IN_FOLDER = "TAB-IN-FOLDER"
TAB_UNPINNED = "TAB-UNPINNED"

ITEM_DEVICE = "DEVICE-ITEMS"
REMOTE_DEVICE = "DEVICE-REMOTE"

THEME = {"background": {"single": {"_0": {"style": {"color": {"red": 0.4}}}}}, "semanticColorPalette": {}}


def container(item_id, space_id, children):
    return {
        "id": item_id,
        "title": None,
        "parentID": None,
        "childrenIds": list(children),
        "createdAt": 700000000.0,
        "originatingDevice": ITEM_DEVICE,
        "isUnread": False,
        "data": {"itemContainer": {"containerType": {"spaceItems": {"_0": space_id}}}},
    }


def tab(item_id, parent_id, url, title=None):
    return {
        "id": item_id,
        "title": None,
        "parentID": parent_id,
        "childrenIds": [],
        "createdAt": 700000000.0,
        "originatingDevice": ITEM_DEVICE,
        "isUnread": False,
        "data": {"tab": {"savedURL": url, "savedTitle": title or url, "timeLastActiveAt": 700000000.0}},
    }


def folder(item_id, parent_id, title, children):
    return {
        "id": item_id,
        "title": title,
        "parentID": parent_id,
        "childrenIds": list(children),
        "createdAt": 700000000.0,
        "originatingDevice": ITEM_DEVICE,
        "isUnread": False,
        "data": {},
    }


def paired(records):
    raw = []
    for record in records:
        raw.append(record["id"])
        raw.append(record)
    return raw


def build_sidebar() -> dict:
    work = {
        "id": WORK,
        "title": "Work",
        "profile": {"default": True},
        "containerIDs": ["pinned", PINNED, "unpinned", UNPINNED],
        "newContainerIDs": [{"pinned": {}}, PINNED, {"unpinned": {"_0": {"shared": {}}}}, UNPINNED],
        "customInfo": {"iconType": {"emoji": "💼"}, "windowTheme": THEME},
    }
    items = [
        container(PINNED, WORK, [TAB_PINNED, FOLDER]),
        container(UNPINNED, WORK, [TAB_UNPINNED]),
        tab(TAB_PINNED, PINNED, "https://mail.example.com", "Mail"),
        folder(FOLDER, PINNED, "Docs", [TAB_IN_FOLDER]),
        tab(TAB_IN_FOLDER, FOLDER, "https://docs.example.com", "Handbook"),
        tab(TAB_UNPINNED, UNPINNED, "https://news.example.com"),
    ]

    return {
        "sidebar": {
            "containers": [
                {"global": {}},
                {"spaces": paired([work]), "items": paired(items), "topAppsContainerIDs": []},
            ]
        },
        "sidebarSyncState": {
            "container": {"value": {"orderedSpaceIDs": [WORK]}},
            "spaceModels": [WORK, {"encodedCKRecordFields": None, "value": copy.deepcopy(work)}],
        },
        "firebaseSyncState": {
            "syncData": {
                "orderedSpaceIDs": {
                    "value": [WORK],
                    "lastChangeDate": 700000000.0,
                    "lastChangedDevice": REMOTE_DEVICE,
                },
                "spaceModels": [
                    WORK,
                    {"id": WORK, "lastChangeDate": 700000000.0, "lastChangedDevice": REMOTE_DEVICE,
                     "value": copy.deepcopy(work)},
                ],
                "items": [
                    entry
                    for item in items
                    for entry in (
                        item["id"],
                        {"id": item["id"], "lastChangeDate": 700000000.0,
                         "lastChangedDevice": REMOTE_DEVICE, "value": copy.deepcopy(item)},
                    )
                ],
            }
        },
    }


@pytest.fixture
def sidebar_data() -> dict:
    return build_sidebar()


@pytest.fixture
def doc(sidebar_data) -> SidebarDocument:
    return SidebarDocument(sidebar_data)


@pytest.fixture
def sidebar_path(tmp_path: Path, sidebar_data) -> Path:
    path = tmp_path / "StorableSidebar.json"
    path.write_text(json.dumps(sidebar_data, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def store(sidebar_path) -> SidebarStore:
    return SidebarStore(sidebar_path)


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def backups(path: Path):
    return sorted(path.parent.glob("StorableSidebar.backup.*.json"))
