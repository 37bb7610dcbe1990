#!/usr/bin/env python3
"""
Paired id/record lists and the sidebar document that holds them.

Arc stores spaces, items and both sync ledgers as flat lists where every
logical entry takes two consecutive slots: the id as a bare string, then the
full record. Ledger records may wrap the payload under "value".
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from .models import Entry, Record, Reference


def record_id(record: Any) -> Optional[str]:
    """Id of a stored record, looking through ledger wrappers."""
    if not isinstance(record, dict):
        return None
    if record.get("id"):
        return record["id"]
    value = record.get("value")
    if isinstance(value, dict):
        return value.get("id")
    return None


def dig(data: Any, *keys: str) -> Any:
    """Follow nested dict keys, returning None at the first missing level."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class PairedList:
    """View over a raw paired list. All edits happen in place."""

    def __init__(self, raw: List[Any]):
        self.raw = raw

    def entries(self) -> Iterator[Entry]:
        """Yield the list as tagged Reference/Record entries."""
        for entry in self.raw:
            if isinstance(entry, str):
                yield Reference(entry)
            else:
                rid = record_id(entry)
                if rid:
                    yield Record(rid, entry)

    def records(self) -> Iterator[Record]:
        for entry in self.entries():
            if isinstance(entry, Record):
                yield entry

    def find(self, item_id: str) -> Optional[Dict[str, Any]]:
        """Return the stored record for item_id, if any."""
        for record in self.records():
            if record.id == item_id:
                return record.data
        return None

    def append(self, item_id: str, record: Dict[str, Any]):
        self.raw.append(item_id)
        self.raw.append(record)

    def remove(self, ids: Iterable[str]) -> int:
        """Drop both the tokens and the records of ids. Returns slots removed."""
        doomed = set(ids)
        kept = []
        for entry in self.raw:
            if isinstance(entry, str):
                if entry in doomed:
                    continue
            elif record_id(entry) in doomed:
                continue
            kept.append(entry)

        removed = len(self.raw) - len(kept)
        self.raw[:] = kept
        return removed

    def pairing_violations(self) -> List[str]:
        """Describe every place where a token and its record are not adjacent."""
        problems = []
        entries = list(self.entries())
        i = 0
        while i < len(entries):
            entry = entries[i]
            following = entries[i + 1] if i + 1 < len(entries) else None
            if isinstance(entry, Reference):
                if isinstance(following, Record) and following.id == entry.id:
                    i += 2
                    continue
                problems.append(f"token {entry.id} has no record after it")
            else:
                problems.append(f"record {entry.id} has no token before it")
            i += 1
        return problems


class SidebarDocument:
    """
    In-memory StorableSidebar.json.

    Exposes the primary container (spaces and items) and the optional local
    (sidebarSyncState) and remote (firebaseSyncState) ledgers. Ledger
    accessors return None when the section is absent from the file.
    """

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    @property
    def primary(self) -> Optional[Dict[str, Any]]:
        """First sidebar container carrying spaces or items."""
        containers = dig(self.data, "sidebar", "containers") or []
        for container in containers:
            if isinstance(container, dict) and ("spaces" in container or "items" in container):
                return container
        return None

    @property
    def spaces(self) -> PairedList:
        return PairedList(self.primary.setdefault("spaces", []))

    @property
    def items(self) -> PairedList:
        return PairedList(self.primary.setdefault("items", []))

    # ============== Local ledger ==============

    @property
    def local_ordered_space_ids(self) -> Optional[List[str]]:
        ids = dig(self.data, "sidebarSyncState", "container", "value", "orderedSpaceIDs")
        return ids if isinstance(ids, list) else None

    @property
    def local_space_models(self) -> Optional[PairedList]:
        raw = dig(self.data, "sidebarSyncState", "spaceModels")
        return PairedList(raw) if isinstance(raw, list) else None

    # ============== Remote ledger ==============

    @property
    def remote_ordered_space_ids(self) -> Optional[Dict[str, Any]]:
        """The orderedSpaceIDs block: value, lastChangeDate, lastChangedDevice."""
        block = dig(self.data, "firebaseSyncState", "syncData", "orderedSpaceIDs")
        return block if isinstance(block, dict) else None

    @property
    def remote_space_models(self) -> Optional[PairedList]:
        raw = dig(self.data, "firebaseSyncState", "syncData", "spaceModels")
        return PairedList(raw) if isinstance(raw, list) else None

    @property
    def remote_items(self) -> Optional[PairedList]:
        raw = dig(self.data, "firebaseSyncState", "syncData", "items")
        return PairedList(raw) if isinstance(raw, list) else None
