"""Arc MCP server implementation using FastMCP."""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Optional, Union

from fastmcp import FastMCP
from pydantic import AnyUrl, Field, TypeAdapter, ValidationError

from . import operations
from .sidebar_store import ArcDataError, SidebarStore

# Global store instance
_store: Optional[SidebarStore] = None

_url_adapter = TypeAdapter(AnyUrl)


def configure(sidebar_path: Optional[Union[str, Path]] = None) -> SidebarStore:
    """Bind the tools to a sidebar file (default: Arc's own)."""
    global _store
    _store = SidebarStore(sidebar_path)
    logging.info(f"Using sidebar file {_store.path}")
    return _store


def get_store() -> SidebarStore:
    """Get the global sidebar store, configuring the default one on first use."""
    if _store is None:
        return configure()
    return _store


def _invalid_url(url: str) -> Optional[str]:
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return f"Invalid URL: {url}"
    return None


def _to_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


mcp = FastMCP(
    "arc-mcp",
    version="1.0.0",
    instructions="MCP server for managing Arc browser spaces and tabs",
)


def list_spaces() -> str:
    try:
        spaces = operations.list_spaces(get_store())
    except ArcDataError as e:
        return f"Failed to list spaces: {e}"
    return _to_json([asdict(space) for space in spaces])


def create_space(
    name: Annotated[str, Field(description="Name of the new space")],
    icon: Annotated[str, Field(
        description="Icon for the space - an emoji (e.g., '🚀') or SF Symbol name (e.g., 'star.fill')",
    )] = "star",
) -> str:
    result = operations.create_space(name, icon, store=get_store())
    if result["success"]:
        return f'Space "{name}" created successfully (ID: {result["space_id"]}). Restart Arc to see the new space.'
    return f"Failed to create space: {result['error']}"


def delete_space(
    space: Annotated[str, Field(description="Name or ID of the space to delete")],
    recursive: Annotated[bool, Field(
        description="Also delete tabs and folders nested inside the space's folders",
    )] = False,
) -> str:
    result = operations.delete_space(space, recursive=recursive, store=get_store())
    if result["success"]:
        return f'Space "{space}" deleted successfully. Restart Arc to see the changes.'
    return f"Failed to delete space: {result['error']}"


def focus_space(
    space: Annotated[str, Field(description="Name or ID of the space to focus")],
) -> str:
    result = operations.focus_space(space, store=get_store())
    if result["success"]:
        return f'Switched to space "{space}"'
    return f"Failed to focus space: {result['error']}"


def list_tabs(
    space: Annotated[Optional[str], Field(
        description="Name or ID of the space to list tabs from (optional, defaults to first space)",
    )] = None,
) -> str:
    try:
        tree = operations.list_tabs(space, store=get_store())
    except ArcDataError as e:
        return f"Failed to list tabs: {e}"
    if tree is None:
        return f"Space not found: {space}" if space else "No spaces found"
    return _to_json(asdict(tree))


def list_all_tabs(
    space: Annotated[Optional[str], Field(
        description="Name or ID of a space to filter by (optional, defaults to all spaces)",
    )] = None,
) -> str:
    try:
        tabs = operations.list_all_tabs(space, store=get_store())
    except ArcDataError as e:
        return f"Failed to list tabs: {e}"
    return _to_json([asdict(tab) for tab in tabs])


def add_tab(
    space: Annotated[str, Field(description="Name or ID of the space to add the tab to")],
    url: Annotated[str, Field(description="URL for the new tab")],
    title: Annotated[Optional[str], Field(description="Title for the tab (defaults to URL)")] = None,
    pinned: Annotated[bool, Field(description="Whether to add as a pinned tab")] = False,
) -> str:
    error = _invalid_url(url)
    if error:
        return f"Failed to add tab: {error}"

    result = operations.add_tab(space, url, title=title, pinned=pinned, store=get_store())
    if result["success"]:
        return f"Tab added successfully (ID: {result['tab_id']}). Restart Arc to see the tab in the sidebar."
    return f"Failed to add tab: {result['error']}"


def delete_tab(
    tabId: Annotated[str, Field(description="ID of the tab to delete")],  # noqa: N803 - tool argument name clients send
) -> str:
    result = operations.delete_tab(tabId, store=get_store())
    if result["success"]:
        return "Tab deleted successfully. Restart Arc to see the changes."
    return f"Failed to delete tab: {result['error']}"


def open_url(
    url: Annotated[str, Field(description="URL to open")],
    space: Annotated[Optional[str], Field(
        description="Name or ID of the space to open the URL in (optional)",
    )] = None,
) -> str:
    error = _invalid_url(url)
    if error:
        return f"Failed to open URL: {error}"

    result = operations.open_url(url, space, store=get_store())
    if result["success"]:
        return f'Opened {url} in space "{space}"' if space else f"Opened {url}"
    return f"Failed to open URL: {result['error']}"


# Tools are registered without rebinding the names so the plain functions
# stay callable.
mcp.tool(name="list_spaces", description="List all Arc browser spaces")(list_spaces)
mcp.tool(
    name="create_space",
    description=(
        "Create a new Arc browser space. Requires Arc restart to take effect. "
        "Note: Arc sync must be disabled for changes to persist."
    ),
)(create_space)
mcp.tool(
    name="delete_space",
    description="Delete an Arc browser space by name or ID. Requires Arc restart to take effect.",
)(delete_space)
mcp.tool(
    name="focus_space",
    description="Switch to a specific Arc browser space (uses AppleScript)",
)(focus_space)
mcp.tool(
    name="list_tabs",
    description=(
        "List tabs and folders in an Arc browser space with full hierarchy. "
        "Shows pinned and unpinned sections with nested folders."
    ),
)(list_tabs)
mcp.tool(
    name="list_all_tabs",
    description=(
        "List top-level tabs across all Arc browser spaces (or one space) as a flat list "
        "with pinned/unpinned location. Tabs inside folders are not included."
    ),
)(list_all_tabs)
mcp.tool(
    name="add_tab",
    description=(
        "Add a new tab to an Arc browser space. Requires Arc restart to see in sidebar. "
        "For immediate opening, use open_url instead."
    ),
)(add_tab)
mcp.tool(
    name="delete_tab",
    description="Delete a tab from Arc browser by its ID. Requires Arc restart to take effect.",
)(delete_tab)
mcp.tool(
    name="open_url",
    description="Open a URL in Arc browser immediately (uses AppleScript). Optionally specify a space.",
)(open_url)
