#!/usr/bin/env python3
"""Identifier, timestamp and authoring-device helpers for new records."""

import time
import uuid

from .ledger import SidebarDocument


def new_id() -> str:
    """Generate a unique id in Arc format: uppercase UUID4."""
    return str(uuid.uuid4()).upper()


def timestamp() -> float:
    """Seconds since the epoch, as Arc stores createdAt and lastChangeDate."""
    return time.time()


def resolve_device_tag(doc: SidebarDocument) -> str:
    """
    Device tag to stamp on new records.

    Prefers the device recorded on the remote ordered space list, then the
    originatingDevice of the first primary item that has one, then "".
    """
    ordered = doc.remote_ordered_space_ids
    if ordered and ordered.get("lastChangedDevice"):
        return ordered["lastChangedDevice"]

    for record in doc.items.records():
        device = record.data.get("originatingDevice")
        if device:
            return device

    return ""
