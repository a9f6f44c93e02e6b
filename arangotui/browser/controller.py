"""The database browser's state machine.

:class:`BrowserController` owns the current view, every dataset loaded for
it, the selection indices, the navigation stack and the input modal.  Keys
arrive one at a time through :meth:`BrowserController.handle_key`; a key that
needs data awaits the gateway before returning, so two fetches never overlap.

A failed fetch never moves the browser: the view, its dataset and its cursor
stay exactly as they were.  The failure is logged and kept in
:attr:`BrowserController.error` until the next key press.  The one sticky
failure is an unreadable database list, which flips :attr:`accessible`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Optional, TypeVar

import structlog

from arangotui.browser.indexer import GraphRowIndex, RowKind
from arangotui.browser.modal import InputModal, ModalOutcome
from arangotui.browser.navigation import NavigationEntry, NavigationStack
from arangotui.browser.views import (
    DETAIL_VIEWS,
    CollectionList,
    CollectionProperties,
    DatabaseList,
    DocumentViewer,
    GraphList,
    GraphProperties,
    ViewState,
    breadcrumb,
    parent_of,
)
from arangotui.config import ServerConfig, settings
from arangotui.gateway import client
from arangotui.gateway.client import FetchError
from arangotui.gateway.models import CollectionDetail, GraphSummary
from arangotui.models import (
    CollectionEntry,
    DatabaseSummary,
    DocumentSample,
    index_of_collection,
)

logger = structlog.get_logger(__name__)

_T = TypeVar("_T")

UP_KEYS = frozenset({"up", "k"})
DOWN_KEYS = frozenset({"down", "j"})
BACK_KEYS = frozenset({"escape", "q"})
ACTIVATE_KEY = "enter"
GRAPHS_KEY = "g"
DOCUMENTS_KEY = "d"
VERTEX_KEY = "v"
RELOAD_KEY = "r"


def _wrap_next(cursor: int, total: int) -> int:
    return (cursor + 1) % total if total else 0


def _wrap_prev(cursor: int, total: int) -> int:
    if not total:
        return 0
    return total - 1 if cursor == 0 else cursor - 1


def _clamp(cursor: int, total: int) -> int:
    return min(max(cursor, 0), total - 1) if total else 0


@dataclass(frozen=True)
class BrowserSnapshot:
    """Read-only state handed to the renderer once per frame."""

    view: ViewState
    accessible: bool
    databases: tuple[DatabaseSummary, ...]
    selected_db_index: int
    collections: tuple[CollectionEntry, ...]
    selected_coll_index: int
    collection_detail: Optional[CollectionDetail]
    graphs: tuple[GraphSummary, ...]
    graph_rows: GraphRowIndex
    selected_graph_row: int
    documents: Optional[DocumentSample]
    scroll_offset: int
    modal_active: bool
    modal_prompt: str
    modal_buffer: str
    error: Optional[str]
    stack_depth: int

    @property
    def breadcrumb(self) -> str:
        return breadcrumb(self.view)

    @property
    def current_graph(self) -> Optional[GraphSummary]:
        if not isinstance(self.view, GraphProperties):
            return None
        for graph in self.graphs:
            if graph.name == self.view.graph:
                return graph
        return None


class BrowserController:
    def __init__(
        self,
        server: ServerConfig,
        page_size: Optional[int] = None,
    ) -> None:
        self.server = server
        self.page_size = page_size or settings.page_size

        self.view: ViewState = DatabaseList()
        self.accessible = True
        self.closed = False
        self.error: Optional[str] = None

        self.databases: list[DatabaseSummary] = []
        self.selected_db_index = 0
        self.collections: list[CollectionEntry] = []
        self.selected_coll_index = 0
        self.collection_detail: Optional[CollectionDetail] = None
        self.graphs: list[GraphSummary] = []
        self.graph_rows = GraphRowIndex([])
        self.selected_graph_row = 0
        self.documents: Optional[DocumentSample] = None
        self.scroll_offset = 0

        self.modal = InputModal()
        self.stack = NavigationStack()
        self._sample_target: Optional[tuple[str, str]] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Load the database list for the initial view."""
        await self.load_databases()

    async def load_databases(self) -> bool:
        try:
            databases = await client.load_database_summaries(self.server)
        except FetchError as exc:
            logger.warning("database_list_unavailable", endpoint=self.server.base_url, error=str(exc))
            self.accessible = False
            return False

        self.accessible = True
        self.databases = databases
        self.selected_db_index = 0
        return True

    async def handle_key(self, key: str) -> None:
        """Process one key press.  The modal, when open, sees it first."""
        self.error = None

        if self.modal.active:
            result = self.modal.handle_key(key)
            if result.outcome is ModalOutcome.CONFIRMED:
                await self._sample_documents(result.value)
            elif result.outcome is ModalOutcome.CANCELLED:
                self._sample_target = None
            return

        view = self.view
        if isinstance(view, DatabaseList):
            await self._on_database_list(key)
        elif isinstance(view, CollectionList):
            await self._on_collection_list(view, key)
        elif isinstance(view, GraphList):
            await self._on_graph_list(view, key)
        elif isinstance(view, DETAIL_VIEWS):
            self._on_detail(view, key)

    def snapshot(self) -> BrowserSnapshot:
        return BrowserSnapshot(
            view=self.view,
            accessible=self.accessible,
            databases=tuple(self.databases),
            selected_db_index=self.selected_db_index,
            collections=tuple(self.collections),
            selected_coll_index=self.selected_coll_index,
            collection_detail=self.collection_detail,
            graphs=tuple(self.graphs),
            graph_rows=self.graph_rows,
            selected_graph_row=self.selected_graph_row,
            documents=self.documents,
            scroll_offset=self.scroll_offset,
            modal_active=self.modal.active,
            modal_prompt=self.modal.prompt,
            modal_buffer=self.modal.buffer,
            error=self.error,
            stack_depth=len(self.stack),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch(self, what: str, call: Awaitable[_T]) -> Optional[_T]:
        """Await *call*; on failure record the error and return ``None``."""
        try:
            return await call
        except FetchError as exc:
            logger.warning("fetch_failed", what=what, view=breadcrumb(self.view), error=str(exc))
            self.error = str(exc)
            return None

    def _set_view(self, view: ViewState) -> None:
        logger.debug("view_changed", source=breadcrumb(self.view), target=breadcrumb(view))
        self.view = view

    def _show_collections(self, database: str, entries: list[CollectionEntry], index: int) -> None:
        self.collections = entries
        self.selected_coll_index = _clamp(index, len(entries))
        self.scroll_offset = 0
        self._set_view(CollectionList(database))

    def _show_graphs(self, database: str, graphs: list[GraphSummary], index: int) -> None:
        self.graphs = graphs
        self.graph_rows = GraphRowIndex(graphs)
        self.selected_graph_row = self.graph_rows.clamp(index)
        self.scroll_offset = 0
        self._set_view(GraphList(database))

    def _clear_graphs(self) -> None:
        self.graphs = []
        self.graph_rows = GraphRowIndex([])
        self.selected_graph_row = 0

    # ------------------------------------------------------------------
    # DatabaseList
    # ------------------------------------------------------------------

    async def _on_database_list(self, key: str) -> None:
        total = len(self.databases)
        if key in BACK_KEYS:
            self.closed = True
        elif key in DOWN_KEYS:
            self.selected_db_index = _wrap_next(self.selected_db_index, total)
        elif key in UP_KEYS:
            self.selected_db_index = _wrap_prev(self.selected_db_index, total)
        elif key == RELOAD_KEY:
            await self.load_databases()
        elif key == ACTIVATE_KEY:
            await self._open_database()

    async def _open_database(self) -> None:
        if not self.accessible or self.selected_db_index >= len(self.databases):
            return
        summary = self.databases[self.selected_db_index]
        if not summary.accessible:
            return

        entries = await self._fetch(
            "collections", client.load_collection_entries(self.server, summary.name)
        )
        if entries is None:
            return
        self._show_collections(summary.name, entries, 0)

    # ------------------------------------------------------------------
    # CollectionList
    # ------------------------------------------------------------------

    async def _on_collection_list(self, view: CollectionList, key: str) -> None:
        total = len(self.collections)
        if key in BACK_KEYS:
            await self._leave_collection_list()
        elif key in DOWN_KEYS:
            self.selected_coll_index = _wrap_next(self.selected_coll_index, total)
        elif key in UP_KEYS:
            self.selected_coll_index = _wrap_prev(self.selected_coll_index, total)
        elif key == ACTIVATE_KEY:
            await self._open_collection_properties(view)
        elif key == GRAPHS_KEY:
            await self._open_graphs(view)
        elif key == DOCUMENTS_KEY and total:
            self._sample_target = (view.database, self.collections[self.selected_coll_index].name)
            self.modal.open()

    async def _open_collection_properties(self, view: CollectionList) -> None:
        if self.selected_coll_index >= len(self.collections):
            return
        name = self.collections[self.selected_coll_index].name
        detail = await self._fetch(
            "collection detail", client.get_collection_detail(self.server, view.database, name)
        )
        if detail is None:
            return
        self.collection_detail = detail
        self.scroll_offset = 0
        self._set_view(CollectionProperties(view.database, name))

    async def _open_graphs(self, view: CollectionList) -> None:
        graphs = await self._fetch("graphs", client.list_graphs(self.server, view.database))
        if graphs is None:
            return
        self._show_graphs(view.database, graphs, 0)

    async def _leave_collection_list(self) -> None:
        entry = self.stack.peek()
        if entry is None:
            self.collections = []
            self.selected_coll_index = 0
            self._set_view(DatabaseList())
            return

        # Only drop the entry once its view could be rebuilt.
        if await self._restore(entry):
            self.stack.pop()

    async def _restore(self, entry: NavigationEntry) -> bool:
        """Re-fetch the dataset behind *entry* and make its view current."""
        view = entry.view
        if isinstance(view, GraphList):
            graphs = await self._fetch("graphs", client.list_graphs(self.server, view.database))
            if graphs is None:
                return False
            self._show_graphs(view.database, graphs, entry.index)
            return True
        if isinstance(view, CollectionList):
            entries = await self._fetch(
                "collections", client.load_collection_entries(self.server, view.database)
            )
            if entries is None:
                return False
            self._show_collections(view.database, entries, entry.index)
            return True
        raise ValueError(f"cannot restore {view!r} from the navigation stack")

    # ------------------------------------------------------------------
    # GraphList
    # ------------------------------------------------------------------

    async def _on_graph_list(self, view: GraphList, key: str) -> None:
        if key in BACK_KEYS:
            self._clear_graphs()
            self.scroll_offset = 0
            # The collection list of this database is still loaded.
            self._set_view(CollectionList(view.database))
        elif key in DOWN_KEYS:
            self.selected_graph_row = self.graph_rows.next(self.selected_graph_row)
        elif key in UP_KEYS:
            self.selected_graph_row = self.graph_rows.prev(self.selected_graph_row)
        elif key == ACTIVATE_KEY:
            await self._activate_graph_row(view)
        elif key == VERTEX_KEY:
            await self._jump_to_vertex(view)

    async def _activate_graph_row(self, view: GraphList) -> None:
        if not self.graph_rows.total:
            return
        row = self.graph_rows.locate(self.selected_graph_row)
        if row.kind is RowKind.GRAPH:
            graph = self.graphs[row.graph_index]
            self.scroll_offset = 0
            self._set_view(GraphProperties(view.database, graph.name))
        elif row.kind is RowKind.EDGE:
            edge = self.graph_rows.edge_definition_at(self.selected_graph_row)
            await self._jump_to_collection(view, edge.collection)

    async def _jump_to_vertex(self, view: GraphList) -> None:
        if not self.graph_rows.total:
            return
        edge = self.graph_rows.edge_definition_at(self.selected_graph_row)
        if edge is None or not edge.from_collections:
            return
        await self._jump_to_collection(view, edge.from_collections[0])

    async def _jump_to_collection(self, view: GraphList, target: str) -> None:
        entries = await self._fetch(
            "collections", client.load_collection_entries(self.server, view.database)
        )
        if entries is None:
            return

        self.stack.push(view, self.selected_graph_row)
        index = index_of_collection(entries, target)
        if index is None:
            logger.info("jump_target_missing", database=view.database, collection=target)
            index = 0
        self._clear_graphs()
        self._show_collections(view.database, entries, index)

    # ------------------------------------------------------------------
    # Detail views
    # ------------------------------------------------------------------

    def _on_detail(self, view: ViewState, key: str) -> None:
        if key in BACK_KEYS:
            if isinstance(view, CollectionProperties):
                self.collection_detail = None
            elif isinstance(view, DocumentViewer):
                self.documents = None
            self.scroll_offset = 0
            self._set_view(parent_of(view))
        elif key in DOWN_KEYS:
            self.scroll_offset += 1
        elif key in UP_KEYS:
            self.scroll_offset = max(self.scroll_offset - 1, 0)
        elif key == "pagedown":
            self.scroll_offset += self.page_size
        elif key == "pageup":
            self.scroll_offset = max(self.scroll_offset - self.page_size, 0)

    async def _sample_documents(self, limit: int) -> None:
        target, self._sample_target = self._sample_target, None
        if target is None:
            return
        database, collection = target
        sample = await self._fetch(
            "documents", client.sample_documents(self.server, database, collection, limit)
        )
        if sample is None:
            return
        self.documents = sample
        self.scroll_offset = 0
        self._set_view(DocumentViewer(database, collection))
