"""Tests for the rich renderables drawn by the terminal UI."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from rich.console import Console

from arangotui.browser.controller import BrowserController
from arangotui.browser.indexer import GraphRowIndex
from arangotui.browser.menu import MainMenu
from arangotui.browser.views import CollectionList, CollectionProperties, DocumentViewer, GraphList
from arangotui.config import ServerConfig
from arangotui.gateway.models import (
    CollectionDetail,
    EdgeDefinition,
    GaeVersion,
    GraphSummary,
    ServerVersion,
)
from arangotui.models import CollectionEntry, DatabaseSummary, DocumentSample
from cli.rendering import (
    format_graph_row,
    render_browser,
    render_header,
    render_menu,
    visible_window,
)

SERVER = ServerConfig(endpoint="http://arango.test:8529")


def _text(renderable) -> str:
    console = Console(record=True, width=140, color_system=None)
    console.print(renderable)
    return console.export_text()


def _coll(name: str, count: int | None, system: bool = False, ctype: int = 2) -> CollectionEntry:
    return CollectionEntry(name=name, id=name, globally_unique_id=name, collection_type=ctype, is_system=system, count=count)


@pytest.fixture()
def controller() -> BrowserController:
    ctrl = BrowserController(SERVER)
    ctrl.databases = [
        DatabaseSummary(name="shop", doc_collections=3, edge_collections=1, system_collections=9),
        DatabaseSummary(name="secret", accessible=False),
    ]
    return ctrl


def test_database_table(controller) -> None:
    out = _text(render_browser(controller.snapshot()))

    assert "Database Browser - Select a database" in out
    assert "shop" in out and "9" in out
    assert "secret" in out and "NO ACCESS" in out


def test_no_access_replaces_table(controller) -> None:
    controller.accessible = False
    out = _text(render_browser(controller.snapshot()))

    assert "NO ACCESS" in out
    assert "shop" not in out


async def test_collection_table_totals(controller) -> None:
    entries = [_coll("orders", 5), _coll("follows", None, ctype=3), _coll("_users", 2, system=True)]
    with patch("arangotui.gateway.client.load_collection_entries", new=AsyncMock(return_value=entries)):
        await controller.handle_key("enter")

    out = _text(render_browser(controller.snapshot()))

    assert "Database: shop | Collections: 3 | Total Documents: 7" in out
    assert "Edge" in out and "?" in out and "Yes" in out


async def test_empty_collection_list(controller) -> None:
    with patch("arangotui.gateway.client.load_collection_entries", new=AsyncMock(return_value=[])):
        await controller.handle_key("enter")

    assert "No collections found" in _text(render_browser(controller.snapshot()))


def test_properties_pane_scrolls(controller) -> None:
    detail = CollectionDetail.model_validate(
        {"name": "orders", "type": 2, "count": 5, "waitForSync": True, "writeConcern": 1}
    )
    controller.view = CollectionProperties("shop", "orders")
    controller.collection_detail = detail

    out = _text(render_browser(controller.snapshot()))
    assert "Collection Properties: shop.orders" in out
    assert '"waitForSync": true' in out

    controller.scroll_offset = 3
    scrolled = _text(render_browser(controller.snapshot()))
    assert '"name": "orders"' not in scrolled
    assert '"writeConcern": 1' in scrolled


def test_graph_rows() -> None:
    graphs = (
        GraphSummary(
            name="social",
            is_smart=True,
            edge_definitions=[
                EdgeDefinition(collection="knows", from_collections=["person"], to_collections=["person"]),
                EdgeDefinition(collection="likes", from_collections=["person"], to_collections=["post", "photo"]),
            ],
        ),
        GraphSummary(name="empty"),
    )

    rows = GraphRowIndex(graphs).rows
    lines = [format_graph_row(graphs, row) for row in rows]

    assert lines[0] == "social  (2 edge definitions)  [smart]"
    assert lines[1] == "├── knows: [person] → [person]"
    assert lines[2] == "└── likes: [person] → [post, photo]"
    assert lines[3] == ""
    assert lines[4] == "empty  (0 edge definitions)"



def test_visible_window_keeps_selection_in_view() -> None:
    assert visible_window(3, 2, 5) == range(3)
    assert visible_window(30, 0, 5) == range(0, 5)
    assert visible_window(30, 25, 5) == range(23, 28)
    assert visible_window(30, 29, 5) == range(25, 30)
    assert visible_window(30, 29, None) == range(30)


def test_long_collection_list_follows_selection(controller) -> None:
    controller.view = CollectionList("shop")
    controller.collections = [_coll(f"coll{i:02d}", i) for i in range(30)]
    controller.selected_coll_index = 27

    out = _text(render_browser(controller.snapshot(), height=10))
    assert "coll27" in out
    assert "coll00" not in out
    assert "Collections: 30" in out

    assert "coll00" in _text(render_browser(controller.snapshot()))


def test_long_graph_list_follows_selection(controller) -> None:
    graphs = [GraphSummary(name=f"graph{i:02d}") for i in range(12)]
    controller.view = GraphList("shop")
    controller.graphs = graphs
    controller.graph_rows = GraphRowIndex(graphs)
    controller.selected_graph_row = controller.graph_rows.position_of(11)

    out = _text(render_browser(controller.snapshot(), height=10))
    assert "graph11  (0 edge definitions)" in out
    assert "graph00" not in out

def test_document_viewer_and_modal(controller) -> None:
    controller.view = DocumentViewer("shop", "orders")
    controller.documents = DocumentSample(collection="orders", limit=10, documents=[{"_key": "k1"}])
    out = _text(render_browser(controller.snapshot()))
    assert "Showing 1 (limit 10)" in out
    assert '"_key": "k1"' in out

    controller.modal.open()
    controller.modal.handle_key("4")
    out = _text(render_browser(controller.snapshot()))
    assert "Number of documents: 4_" in out


def test_status_line_shows_error(controller) -> None:
    controller.error = "Failed to fetch graphs: 500"
    assert "Error: Failed to fetch graphs: 500" in _text(render_browser(controller.snapshot()))


def test_header_and_menu() -> None:
    server = ServerVersion(server="arango", license="enterprise", version="3.12.1")
    out = _text(render_header(server, None))
    assert "ArangoDB 3.12.1 (enterprise)" in out
    assert "GAE: Not connected" in out

    gae = GaeVersion(apiMaxVersion=1, apiMinVersion=1, version="0.9")
    assert "GAE 0.9" in _text(render_header(server, gae))

    menu = MainMenu()
    menu.up()
    out = _text(render_menu(menu))
    assert "Browse database" in out and "Quit" in out
