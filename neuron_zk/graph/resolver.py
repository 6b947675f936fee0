# neuron_zk/graph/resolver.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from neuron_zk.core.ids import format_zettel_id
from neuron_zk.core.queries import (
    BacklinksOf,
    FullGraph,
    Query,
    SortOrder,
    ZettelByID,
    ZettelsByTag,
)
from neuron_zk.graph.builder import Edge, ZettelGraph
from neuron_zk.vault.notes import Zettel


@dataclass(frozen=True)
class GraphSnapshot:
    zettels: tuple[Zettel, ...]
    edges: tuple[Edge, ...]


QueryResult = Union[Zettel, None, list[Zettel], GraphSnapshot, frozenset[Edge]]


class GraphResolver:
    """
    Evaluates queries against a built ``ZettelGraph``.

    - ZettelByID   -> Zettel or None
    - ZettelsByTag -> list of zettels, sorted and limited as asked
    - FullGraph    -> GraphSnapshot
    - BacklinksOf  -> frozenset of edges (no order)

    The graph is never mutated, so one resolver can serve several threads.
    """

    def __init__(self, graph: ZettelGraph):
        self.graph = graph

    def evaluate(self, query: Query) -> QueryResult:
        if isinstance(query, ZettelByID):
            return self.graph.zettels.get(query.zettel_id)

        if isinstance(query, ZettelsByTag):
            found = [z for z in self.graph.zettels.values() if query.tag_query.matches(z.tags)]
            found = sort_zettels(found, query.sort)
            if query.limit is not None:
                found = found[: query.limit]
            return found

        if isinstance(query, FullGraph):
            return GraphSnapshot(
                zettels=tuple(sort_zettels(self.graph.zettels.values(), SortOrder.ID)),
                edges=self.graph.edges,
            )

        if isinstance(query, BacklinksOf):
            return self.graph.backlinks(query.zettel_id, query.connection)

        raise TypeError(f"not a query: {query!r}")


def sort_zettels(zettels, order: SortOrder) -> list[Zettel]:
    by_id = sorted(zettels, key=lambda z: z.id.value)
    if order is SortOrder.ID:
        return by_id
    if order is SortOrder.TITLE:
        return sorted(by_id, key=lambda z: z.title.lower())

    dated = sorted((z for z in by_id if z.date), key=lambda z: z.date, reverse=True)
    return dated + [z for z in by_id if not z.date]


# ───────────────────────── JSON ─────────────────────────

def zettel_to_json(z: Zettel) -> dict[str, Any]:
    return {
        "id": format_zettel_id(z.id),
        "title": z.title,
        "tags": [str(t) for t in z.tags],
        "date": z.date,
        "path": str(z.path) if z.path is not None else None,
    }


def edge_to_json(e: Edge) -> dict[str, Any]:
    return {
        "from": format_zettel_id(e.source),
        "to": format_zettel_id(e.target),
        "connection": e.connection.label,
    }


def _edge_key(e: Edge) -> tuple[str, str, str]:
    return (e.source.value, e.target.value, e.connection.label)


def result_to_json(result: QueryResult) -> Any:
    if result is None:
        return None
    if isinstance(result, Zettel):
        return zettel_to_json(result)
    if isinstance(result, list):
        return [zettel_to_json(z) for z in result]
    if isinstance(result, GraphSnapshot):
        return {
            "zettels": [zettel_to_json(z) for z in result.zettels],
            "edges": [edge_to_json(e) for e in sorted(result.edges, key=_edge_key)],
        }
    if isinstance(result, frozenset):
        return [edge_to_json(e) for e in sorted(result, key=_edge_key)]
    raise TypeError(f"not a query result: {result!r}")
