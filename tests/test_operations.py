"""End-to-end tests for the public operations against a sidebar file."""

import json

import pytest

from arc_mcp import operations
from arc_mcp.models import Space, TabNode
from arc_mcp.sidebar_store import SidebarStore, StorageUnavailable

from conftest import FOLDER, TAB_IN_FOLDER, TAB_PINNED, TAB_UNPINNED, UNPINNED, WORK, backups, read_json


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------


class TestListing:
    def test_list_spaces(self, store):
        assert operations.list_spaces(store) == [Space(id=WORK, title="Work", icon="💼")]

    def test_find_space(self, store):
        assert operations.find_space("Work", store).id == WORK
        assert operations.find_space("Nope", store) is None

    def test_list_tabs_defaults_to_first_space(self, store):
        tree = operations.list_tabs(store=store)
        assert tree.space_id == WORK
        assert [node.id for node in tree.pinned] == [TAB_PINNED, FOLDER]

    def test_list_tabs_unknown_space(self, store):
        assert operations.list_tabs("Nope", store=store) is None

    def test_list_all_tabs(self, store):
        tabs = operations.list_all_tabs(store=store)
        assert {t.location for t in tabs} == {"pinned", "unpinned"}
        assert operations.list_all_tabs("Nope", store=store) == []

    def test_reads_do_not_write_or_back_up(self, store, sidebar_path):
        before = sidebar_path.read_bytes()
        operations.list_spaces(store)
        operations.list_tabs("Work", store=store)
        operations.list_all_tabs(store=store)
        assert sidebar_path.read_bytes() == before
        assert backups(sidebar_path) == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(StorageUnavailable):
            operations.list_spaces(SidebarStore(tmp_path / "missing.json"))


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


class TestMutations:
    def test_create_space_persists(self, store, sidebar_path):
        result = operations.create_space("Personal", "🏠", store=store)
        assert result["success"] is True
        saved = read_json(sidebar_path)
        assert result["space_id"] in saved["sidebarSyncState"]["container"]["value"]["orderedSpaceIDs"]
        assert len(backups(sidebar_path)) == 1

    def test_failure_leaves_file_untouched(self, store, sidebar_path):
        before = sidebar_path.read_bytes()
        result = operations.delete_space("Nope", store=store)
        assert result == {"success": False, "error": "Space not found: Nope"}
        assert sidebar_path.read_bytes() == before

    def test_theme_missing_reported(self, tmp_path):
        path = tmp_path / "StorableSidebar.json"
        path.write_text(json.dumps({"sidebar": {"containers": [{"global": {}}, {"spaces": [], "items": []}]}}))
        result = operations.create_space("Personal", store=SidebarStore(path))
        assert result["success"] is False
        assert "theme template" in result["error"]

    def test_storage_failure_reported(self, tmp_path):
        result = operations.add_tab("Work", "https://example.com", store=SidebarStore(tmp_path / "missing.json"))
        assert result["success"] is False
        assert "File not found" in result["error"]

    def test_delete_tab_unknown(self, store):
        assert operations.delete_tab("NOPE", store=store) == {"success": False, "error": "Tab not found: NOPE"}

    def test_consecutive_creates_have_distinct_ids(self, store):
        first = operations.create_space("One", store=store)
        second = operations.create_space("Two", store=store)
        assert first["space_id"] != second["space_id"]

    def test_delete_space_recursive_option(self, store, sidebar_path):
        assert operations.delete_space("Work", recursive=True, store=store)["success"] is True
        items = read_json(sidebar_path)["sidebar"]["containers"][1]["items"]
        assert TAB_IN_FOLDER not in items

    def test_delete_space_single_level_default(self, store, sidebar_path):
        assert operations.delete_space(WORK, store=store)["success"] is True
        items = read_json(sidebar_path)["sidebar"]["containers"][1]["items"]
        assert TAB_IN_FOLDER in items


# ---------------------------------------------------------------------------
# Scenario: Work -> Personal round trip
# ---------------------------------------------------------------------------


def test_personal_space_scenario(store, sidebar_path):
    created = operations.create_space("Personal", "🏠", store=store)
    assert created["success"] is True
    space_id = created["space_id"]

    assert Space(id=space_id, title="Personal", icon="🏠") in operations.list_spaces(store)
    saved = read_json(sidebar_path)
    assert space_id in saved["sidebarSyncState"]["spaceModels"]
    assert space_id in saved["firebaseSyncState"]["syncData"]["spaceModels"]
    assert space_id in saved["firebaseSyncState"]["syncData"]["orderedSpaceIDs"]["value"]

    added = operations.add_tab("Personal", "https://example.com", "Example", pinned=False, store=store)
    assert added["success"] is True
    tree = operations.list_tabs("Personal", store=store)
    assert tree.pinned == []
    assert tree.unpinned == [TabNode(id=added["tab_id"], title="Example", url="https://example.com")]

    assert operations.delete_tab(added["tab_id"], store=store)["success"] is True
    assert operations.list_tabs("Personal", store=store).unpinned == []
    assert added["tab_id"] not in {t.id for t in operations.list_all_tabs(store=store)}

    assert operations.delete_space("Personal", store=store)["success"] is True
    assert "Personal" not in {s.title for s in operations.list_spaces(store)}

    saved = read_json(sidebar_path)
    assert space_id not in json.dumps(saved)
    assert len(backups(sidebar_path)) >= 1


def test_tab_mutations_with_null_container_children(tmp_path, sidebar_data):
    items = sidebar_data["sidebar"]["containers"][1]["items"]
    next(i for i in items if isinstance(i, dict) and i["id"] == UNPINNED)["childrenIds"] = None
    path = tmp_path / "StorableSidebar.json"
    path.write_text(json.dumps(sidebar_data), encoding="utf-8")
    store = SidebarStore(path)

    assert operations.delete_tab(TAB_UNPINNED, store=store) == {"success": True}
    added = operations.add_tab("Work", "https://example.com", store=store)
    assert added["success"] is True
    assert [node.id for node in operations.list_tabs("Work", store=store).unpinned] == [added["tab_id"]]
