"""Flattening of the graph listing into one cursor-addressable row list.

The graph view shows every graph as a header row followed by one row per
edge definition, with a single spacer row between consecutive graphs::

    g1            row 0
      e1          row 1
      e2          row 2
                  row 3  (spacer)
    g2            row 4

Spacers are ordinary cursor stops; they just select nothing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Sequence

from arangotui.gateway.models import EdgeDefinition, GraphSummary


class RowKind(str, enum.Enum):
    GRAPH = "graph"
    EDGE = "edge"
    SPACER = "spacer"


@dataclass(frozen=True)
class GraphRow:
    kind: RowKind
    graph_index: Optional[int] = None
    edge_index: Optional[int] = None


def build_rows(graphs: Sequence[GraphSummary]) -> list[GraphRow]:
    rows: list[GraphRow] = []
    for gi, graph in enumerate(graphs):
        if gi > 0:
            rows.append(GraphRow(RowKind.SPACER))
        rows.append(GraphRow(RowKind.GRAPH, graph_index=gi))
        for ei in range(len(graph.edge_definitions)):
            rows.append(GraphRow(RowKind.EDGE, graph_index=gi, edge_index=ei))
    return rows


class GraphRowIndex:
    """Maps flat cursor positions onto a loaded graph list and back."""

    def __init__(self, graphs: Sequence[GraphSummary]) -> None:
        self._graphs = list(graphs)
        self._rows = build_rows(self._graphs)

    @property
    def rows(self) -> tuple[GraphRow, ...]:
        return tuple(self._rows)

    @property
    def total(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def locate(self, cursor: int) -> GraphRow:
        """Return the row at *cursor*.

        Raises:
            IndexError: If *cursor* is outside ``[0, total)``.
        """
        if not 0 <= cursor < len(self._rows):
            raise IndexError(f"cursor {cursor} outside 0..{len(self._rows) - 1}")
        return self._rows[cursor]

    def graph_at(self, cursor: int) -> Optional[GraphSummary]:
        row = self.locate(cursor)
        if row.graph_index is None:
            return None
        return self._graphs[row.graph_index]

    def edge_definition_at(self, cursor: int) -> Optional[EdgeDefinition]:
        row = self.locate(cursor)
        if row.kind is not RowKind.EDGE:
            return None
        return self._graphs[row.graph_index].edge_definitions[row.edge_index]

    def position_of(self, graph_index: int, edge_index: Optional[int] = None) -> int:
        for pos, row in enumerate(self._rows):
            if row.graph_index == graph_index and row.edge_index == edge_index:
                return pos
        raise IndexError(f"no row for graph {graph_index}, edge {edge_index}")

    def next(self, cursor: int) -> int:
        if not self._rows:
            return 0
        return (cursor + 1) % len(self._rows)

    def prev(self, cursor: int) -> int:
        if not self._rows:
            return 0
        return len(self._rows) - 1 if cursor == 0 else cursor - 1

    def clamp(self, cursor: int) -> int:
        if not self._rows:
            return 0
        return min(max(cursor, 0), len(self._rows) - 1)
