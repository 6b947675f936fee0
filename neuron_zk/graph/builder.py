from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable

from neuron_zk.core.connection import Connection
from neuron_zk.core.ids import ZettelID
from neuron_zk.core.queries import ZettelByID, ZettelsByTag, link_connection
from neuron_zk.core.query_links import extract_links
from neuron_zk.logging_setup import get_logger
from neuron_zk.vault.notes import Zettel

log = get_logger("graph")


@dataclass(frozen=True)
class Edge:
    source: ZettelID
    target: ZettelID
    connection: Connection


@dataclass(frozen=True)
class ZettelGraph:
    zettels: dict[ZettelID, Zettel]
    edges: tuple[Edge, ...]
    errors: dict[ZettelID, tuple[str, ...]] = field(default_factory=dict)

    def has(self, zettel_id: ZettelID) -> bool:
        return zettel_id in self.zettels

    def backlinks(self, zettel_id: ZettelID, connection: Connection | None = None) -> frozenset[Edge]:
        return frozenset(
            e for e in self.edges
            if e.target == zettel_id and (connection is None or e.connection == connection)
        )

    def uplinks(self, zettel_id: ZettelID) -> frozenset[Edge]:
        return self.backlinks(zettel_id, Connection.FOLGEZETTEL)

    def outgoing(self, zettel_id: ZettelID) -> frozenset[Edge]:
        return frozenset(e for e in self.edges if e.source == zettel_id)


def build_zettel_graph(zettels: Iterable[Zettel]) -> ZettelGraph:
    """
    Turn the links found in each zettel into connection-tagged edges.

    Links to missing zettels are recorded as errors of the linking zettel.
    Self links are dropped, and a pair linked twice keeps one edge whose
    kind is the merge of both.
    """
    t0 = time.perf_counter()

    by_id = {z.id: z for z in zettels}
    pairs: dict[tuple[ZettelID, ZettelID], Connection] = {}
    errors: dict[ZettelID, list[str]] = {}

    def add(src: ZettelID, dst: ZettelID, conn: Connection) -> None:
        if src == dst:
            return
        old = pairs.get((src, dst))
        pairs[(src, dst)] = conn if old is None else Connection.merge(old, conn)

    for z in by_id.values():
        scan = extract_links(z.content)
        for err in scan.errors:
            errors.setdefault(z.id, []).append(str(err))

        for q in scan.queries:
            if isinstance(q, ZettelByID):
                if q.zettel_id in by_id:
                    add(z.id, q.zettel_id, link_connection(q))
                else:
                    errors.setdefault(z.id, []).append(f"Links to missing zettel {q.zettel_id}")
            elif isinstance(q, ZettelsByTag):
                for other in by_id.values():
                    if q.tag_query.matches(other.tags):
                        add(z.id, other.id, link_connection(q))

    for zid, errs in errors.items():
        for msg in errs:
            log.warning("zettel %s: %s", zid, msg)

    edges = tuple(Edge(src, dst, conn) for (src, dst), conn in pairs.items())
    log.debug(
        "Graph built: zettels=%d edges=%d errors=%d time_ms=%.1f",
        len(by_id), len(edges), len(errors), (time.perf_counter() - t0) * 1000.0,
    )
    return ZettelGraph(
        zettels=by_id,
        edges=edges,
        errors={zid: tuple(errs) for zid, errs in errors.items()},
    )
