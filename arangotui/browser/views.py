"""The browser's views, one frozen dataclass per screen.

``ViewState`` is a closed union: each variant carries exactly the addressing
context its screen needs and is replaced as a whole on every transition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class DatabaseList:
    pass


@dataclass(frozen=True)
class CollectionList:
    database: str


@dataclass(frozen=True)
class CollectionProperties:
    database: str
    collection: str


@dataclass(frozen=True)
class DocumentViewer:
    database: str
    collection: str


@dataclass(frozen=True)
class GraphList:
    database: str


@dataclass(frozen=True)
class GraphProperties:
    database: str
    graph: str


ViewState = Union[
    DatabaseList,
    CollectionList,
    CollectionProperties,
    DocumentViewer,
    GraphList,
    GraphProperties,
]

# Views whose body is a scrollable text pane rather than a selectable list.
DETAIL_VIEWS = (CollectionProperties, DocumentViewer, GraphProperties)


def parent_of(view: ViewState) -> ViewState:
    """The view a plain "back" from *view* returns to."""
    if isinstance(view, (CollectionProperties, DocumentViewer, GraphList)):
        return CollectionList(view.database)
    if isinstance(view, GraphProperties):
        return GraphList(view.database)
    return DatabaseList()


def breadcrumb(view: ViewState) -> str:
    if isinstance(view, DatabaseList):
        return "Databases"
    if isinstance(view, CollectionList):
        return view.database
    if isinstance(view, CollectionProperties):
        return f"{view.database} > {view.collection} > properties"
    if isinstance(view, DocumentViewer):
        return f"{view.database} > {view.collection} > documents"
    if isinstance(view, GraphList):
        return f"{view.database} > graphs"
    return f"{view.database} > graphs > {view.graph}"
