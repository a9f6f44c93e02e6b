"""Rich renderables for the terminal UI.

Every function here is pure: it reads a :class:`BrowserSnapshot` (or the
main menu) and returns something ``rich`` can draw.  Nothing is mutated.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from arangotui.browser.controller import BrowserSnapshot
from arangotui.browser.indexer import GraphRow, RowKind
from arangotui.browser.menu import MainMenu
from arangotui.browser.views import (
    CollectionList,
    CollectionProperties,
    DatabaseList,
    DocumentViewer,
    GraphList,
    GraphProperties,
)
from arangotui.gateway.models import GaeVersion, GraphSummary, ServerVersion

SELECTED = "bold black on cyan"
HEADING = "bold yellow"

# Panel borders, table header and status line around a list.
_LIST_CHROME = 4
_MODAL_HEIGHT = 3

_HELP = {
    DatabaseList: "↑/↓ select · Enter open · r reload · q back",
    CollectionList: "↑/↓ select · Enter properties · g graphs · d documents · q back",
    GraphList: "↑/↓ select · Enter open · v vertex collection · q back",
    CollectionProperties: "↑/↓ scroll · PgUp/PgDn page · q close",
    DocumentViewer: "↑/↓ scroll · PgUp/PgDn page · q close",
    GraphProperties: "↑/↓ scroll · PgUp/PgDn page · q close",
}


# ---------------------------------------------------------------------------
# Header / menu
# ---------------------------------------------------------------------------

def render_header(server: ServerVersion, gae: Optional[GaeVersion]) -> RenderableType:
    lines = [
        Text("arangotui", style="bold cyan", justify="center"),
        Text(f"ArangoDB {server.version} ({server.license})", style="green", justify="center"),
    ]
    if gae is not None:
        lines.append(Text(f"GAE {gae.version}", style="green", justify="center"))
    else:
        lines.append(Text("GAE: Not connected", style="yellow", justify="center"))
    return Panel(Group(*lines))


def render_menu(menu: MainMenu) -> RenderableType:
    items = [
        Text(item.value, style=SELECTED if i == menu.selected else "white")
        for i, item in enumerate(menu.items)
    ]
    return Panel(Group(*items), title="Main Menu", title_align="left")


# ---------------------------------------------------------------------------
# Browser views
# ---------------------------------------------------------------------------

def visible_window(total: int, selected: int, max_rows: Optional[int]) -> range:
    """Row positions to draw so that the selected row stays on screen."""
    if max_rows is None or max_rows <= 0 or total <= max_rows:
        return range(total)
    start = min(max(selected - max_rows // 2, 0), total - max_rows)
    return range(start, start + max_rows)


def render_database_list(snapshot: BrowserSnapshot, max_rows: Optional[int] = None) -> RenderableType:
    if not snapshot.accessible:
        return Panel(
            Text("NO ACCESS", style="bold red", justify="center"),
            title="Database Browser",
        )

    table = Table(expand=True, header_style=HEADING, box=None, padding=(0, 2))
    table.add_column("Database", ratio=2)
    table.add_column("Doc Collections", ratio=1)
    table.add_column("Edge Collections", ratio=1)
    table.add_column("System", ratio=1)

    for i in visible_window(len(snapshot.databases), snapshot.selected_db_index, max_rows):
        db = snapshot.databases[i]
        style = SELECTED if i == snapshot.selected_db_index else "white"
        if db.accessible:
            table.add_row(
                db.name,
                str(db.doc_collections),
                str(db.edge_collections),
                str(db.system_collections),
                style=style,
            )
        else:
            table.add_row(db.name, "NO ACCESS", "", "", style=f"{style} red")

    return Panel(table, title="Database Browser - Select a database", title_align="left")


def render_collection_list(
    snapshot: BrowserSnapshot, database: str, max_rows: Optional[int] = None
) -> RenderableType:
    if not snapshot.collections:
        return Panel(
            Text("No collections found", style="yellow", justify="center"),
            title=f"Database: {database}",
        )

    total_docs = sum(c.count for c in snapshot.collections if c.count is not None)
    title = (
        f"Database: {database} | Collections: {len(snapshot.collections)} "
        f"| Total Documents: {total_docs}"
    )

    table = Table(expand=True, header_style=HEADING, box=None, padding=(0, 2))
    table.add_column("Name", ratio=10)
    table.add_column("Type", ratio=3)
    table.add_column("System", ratio=2)
    table.add_column("Count", ratio=5)

    for i in visible_window(len(snapshot.collections), snapshot.selected_coll_index, max_rows):
        coll = snapshot.collections[i]
        table.add_row(
            coll.name,
            coll.type_label,
            "Yes" if coll.is_system else "No",
            "?" if coll.count is None else str(coll.count),
            style=SELECTED if i == snapshot.selected_coll_index else "white",
        )

    return Panel(table, title=title, title_align="left")


def format_graph_row(graphs: tuple[GraphSummary, ...], row: GraphRow) -> str:
    """One line of the flattened graph listing."""
    if row.kind is RowKind.SPACER:
        return ""

    graph = graphs[row.graph_index]
    if row.kind is RowKind.GRAPH:
        flags = [name for name, on in (("smart", graph.is_smart), ("disjoint", graph.is_disjoint)) if on]
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        return f"{graph.name}  ({len(graph.edge_definitions)} edge definitions){suffix}"

    edge = graph.edge_definitions[row.edge_index]
    is_last = row.edge_index == len(graph.edge_definitions) - 1
    connector = "└── " if is_last else "├── "
    sources = ", ".join(edge.from_collections)
    targets = ", ".join(edge.to_collections)
    return f"{connector}{edge.collection}: [{sources}] → [{targets}]"


def render_graph_list(
    snapshot: BrowserSnapshot, database: str, max_rows: Optional[int] = None
) -> RenderableType:
    if not snapshot.graphs:
        return Panel(
            Text("No graphs found", style="yellow", justify="center"),
            title=f"Graphs: {database}",
        )

    rows = snapshot.graph_rows.rows
    lines = []
    for pos in visible_window(len(rows), snapshot.selected_graph_row, max_rows):
        row = rows[pos]
        style = SELECTED if pos == snapshot.selected_graph_row else (
            "bold white" if row.kind is RowKind.GRAPH else "white"
        )
        lines.append(Text(format_graph_row(snapshot.graphs, row) or " ", style=style))

    return Panel(Group(*lines), title=f"Graphs: {database} | Graphs: {len(snapshot.graphs)}", title_align="left")


def json_lines(payload: Any) -> list[str]:
    return json.dumps(payload, indent=2, default=str).splitlines()


def render_json_pane(title: str, payload: Any, scroll_offset: int) -> RenderableType:
    if payload is None:
        return Panel(Text("Loading...", style="yellow", justify="center"), title=title)
    visible = json_lines(payload)[scroll_offset:]
    return Panel(Text("\n".join(visible)), title=title, title_align="left")


def render_modal(snapshot: BrowserSnapshot) -> RenderableType:
    return Panel(
        Text(f"{snapshot.modal_prompt}: {snapshot.modal_buffer}_", style="bold"),
        title="Enter to confirm · Esc to cancel",
        border_style="cyan",
    )


def render_status(snapshot: BrowserSnapshot) -> RenderableType:
    if snapshot.error:
        return Text(f"Error: {snapshot.error}", style="red")
    return Text(_HELP.get(type(snapshot.view), ""), style="dim")


def render_view(snapshot: BrowserSnapshot, max_rows: Optional[int] = None) -> RenderableType:
    view = snapshot.view
    if isinstance(view, DatabaseList):
        return render_database_list(snapshot, max_rows)
    if isinstance(view, CollectionList):
        return render_collection_list(snapshot, view.database, max_rows)
    if isinstance(view, GraphList):
        return render_graph_list(snapshot, view.database, max_rows)
    if isinstance(view, CollectionProperties):
        detail = snapshot.collection_detail
        return render_json_pane(
            f"Collection Properties: {view.database}.{view.collection}",
            detail.properties() if detail is not None else None,
            snapshot.scroll_offset,
        )
    if isinstance(view, DocumentViewer):
        sample = snapshot.documents
        title = f"Documents: {view.database}.{view.collection}"
        if sample is not None:
            title += f" | Showing {len(sample)} (limit {sample.limit})"
        return render_json_pane(
            title,
            sample.documents if sample is not None else None,
            snapshot.scroll_offset,
        )
    graph = snapshot.current_graph
    return render_json_pane(
        f"Graph: {view.database}.{view.graph}",
        graph.properties() if graph is not None else None,
        snapshot.scroll_offset,
    )


def render_browser(snapshot: BrowserSnapshot, height: Optional[int] = None) -> RenderableType:
    """The whole browser screen: current view, optional modal, status line.

    ``height`` is the number of terminal lines available; list views are
    windowed around their selection to fit it.
    """
    max_rows = None
    if height is not None:
        max_rows = max(height - _LIST_CHROME - (_MODAL_HEIGHT if snapshot.modal_active else 0), 1)
    parts: list[RenderableType] = [render_view(snapshot, max_rows)]
    if snapshot.modal_active:
        parts.append(render_modal(snapshot))
    parts.append(render_status(snapshot))
    return Group(*parts)
