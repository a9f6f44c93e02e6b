"""Dataclass models for the browser's loaded datasets.

These are plain Python objects built from the gateway's decoded payloads.
The controller owns every instance; the renderer only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

DOCUMENT_COLLECTION = 2
EDGE_COLLECTION = 3


@dataclass
class DatabaseSummary:
    name: str
    doc_collections: int = 0
    edge_collections: int = 0
    system_collections: int = 0
    accessible: bool = True


@dataclass
class CollectionEntry:
    name: str
    id: str
    globally_unique_id: str
    collection_type: int
    is_system: bool
    count: int | None = None

    @property
    def is_edge(self) -> bool:
        return self.collection_type == EDGE_COLLECTION

    @property
    def type_label(self) -> str:
        return "Edge" if self.is_edge else "Document"


@dataclass
class DocumentSample:
    """A bounded sample of documents, in server-determined order."""

    collection: str
    limit: int
    documents: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.documents)


def sort_collections(entries: Iterable[CollectionEntry]) -> list[CollectionEntry]:
    """Non-system collections first, then system ones; each group by name."""
    return sorted(entries, key=lambda e: (e.is_system, e.name))


def index_of_collection(entries: list[CollectionEntry], name: str) -> int | None:
    for i, entry in enumerate(entries):
        if entry.name == name:
            return i
    return None
