"""Tests for the flattened graph / edge-definition row index."""

from __future__ import annotations

import pytest

from arangotui.browser.indexer import GraphRow, GraphRowIndex, RowKind, build_rows
from arangotui.gateway.models import EdgeDefinition, GraphSummary


def _graph(name: str, *edges: str) -> GraphSummary:
    return GraphSummary(
        name=name,
        edge_definitions=[
            EdgeDefinition(collection=e, from_collections=[f"{e}_from"], to_collections=[f"{e}_to"])
            for e in edges
        ],
    )


def test_rows_for_two_graphs() -> None:
    index = GraphRowIndex([_graph("g1", "e1", "e2"), _graph("g2")])

    assert index.total == 5
    assert index.rows == (
        GraphRow(RowKind.GRAPH, 0),
        GraphRow(RowKind.EDGE, 0, 0),
        GraphRow(RowKind.EDGE, 0, 1),
        GraphRow(RowKind.SPACER),
        GraphRow(RowKind.GRAPH, 1),
    )
    assert index.graph_at(4).name == "g2"
    assert index.edge_definition_at(2).collection == "e2"
    assert index.graph_at(3) is None
    assert index.edge_definition_at(0) is None


@pytest.mark.parametrize(
    "edge_counts",
    [[0], [3], [0, 0], [2, 0, 1], [1, 1, 1, 1], [5, 0, 0, 2]],
)
def test_total_and_every_position_resolves(edge_counts: list[int]) -> None:
    graphs = [_graph(f"g{i}", *[f"e{i}_{j}" for j in range(n)]) for i, n in enumerate(edge_counts)]
    index = GraphRowIndex(graphs)

    expected = sum(1 + n for n in edge_counts) + max(len(edge_counts) - 1, 0)
    assert index.total == expected
    kinds = [index.locate(pos).kind for pos in range(index.total)]
    assert kinds.count(RowKind.GRAPH) == len(edge_counts)
    assert kinds.count(RowKind.EDGE) == sum(edge_counts)
    assert kinds.count(RowKind.SPACER) == len(edge_counts) - 1
    assert kinds[-1] is not RowKind.SPACER


def test_locate_out_of_range_raises() -> None:
    index = GraphRowIndex([_graph("g1", "e1")])
    with pytest.raises(IndexError):
        index.locate(2)
    with pytest.raises(IndexError):
        index.locate(-1)


def test_wraparound() -> None:
    index = GraphRowIndex([_graph("g1", "e1", "e2"), _graph("g2")])

    assert index.next(index.total - 1) == 0
    assert index.prev(0) == index.total - 1
    assert index.next(2) == 3  # spacer is a cursor stop
    assert index.prev(4) == 3


def test_empty_listing() -> None:
    index = GraphRowIndex([])

    assert index.total == 0
    assert build_rows([]) == []
    assert index.next(0) == 0
    assert index.prev(0) == 0
    assert index.clamp(7) == 0


def test_position_of_round_trips_locate() -> None:
    index = GraphRowIndex([_graph("g1", "e1"), _graph("g2", "e2", "e3")])

    assert index.position_of(1) == 3
    assert index.position_of(1, 1) == 5
    with pytest.raises(IndexError):
        index.position_of(2)


def test_clamp_after_shrink() -> None:
    index = GraphRowIndex([_graph("only", "e1")])
    assert index.clamp(9) == 1
    assert index.clamp(-3) == 0
