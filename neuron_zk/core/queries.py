# neuron_zk/core/queries.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Union

from .connection import Connection
from .ids import ZettelID
from .tags import TagQuery


class ResultShape(Enum):
    SINGLE_ZETTEL = "single-zettel"
    ZETTEL_SET = "zettel-set"
    EDGE_SET = "edge-set"
    GRAPH_SNAPSHOT = "graph-snapshot"


class SortOrder(Enum):
    DATE = "date"    # newest first, undated last
    TITLE = "title"
    ID = "id"


# ───────────────────────── zettel queries ─────────────────────────

@dataclass(frozen=True)
class ZettelByID:
    """
    One zettel by ID.

    ``connection`` is not a filter. It tells the graph builder which kind of
    edge a link carrying this query creates; ``None`` means the link did not
    say, and the edge is ordinary.
    """

    zettel_id: ZettelID
    connection: Optional[Connection] = None

    shape: ClassVar[ResultShape] = ResultShape.SINGLE_ZETTEL


@dataclass(frozen=True)
class ZettelsByTag:
    tag_query: TagQuery
    connection: Optional[Connection] = None
    sort: SortOrder = SortOrder.DATE
    limit: Optional[int] = None

    shape: ClassVar[ResultShape] = ResultShape.ZETTEL_SET

    def __post_init__(self):
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be >= 0, got {self.limit}")


# ───────────────────────── graph queries ─────────────────────────

@dataclass(frozen=True)
class FullGraph:
    """Every zettel and every connection-tagged edge."""

    shape: ClassVar[ResultShape] = ResultShape.GRAPH_SNAPSHOT


@dataclass(frozen=True)
class BacklinksOf:
    """Edges pointing at ``zettel_id``, optionally of one connection kind only."""

    zettel_id: ZettelID
    connection: Optional[Connection] = None

    shape: ClassVar[ResultShape] = ResultShape.EDGE_SET


def uplinks_of(zettel_id: ZettelID) -> BacklinksOf:
    return BacklinksOf(zettel_id, Connection.FOLGEZETTEL)


ZettelQuery = Union[ZettelByID, ZettelsByTag]
GraphQuery = Union[FullGraph, BacklinksOf]
Query = Union[ZettelByID, ZettelsByTag, FullGraph, BacklinksOf]

ZETTEL_QUERY_TYPES = (ZettelByID, ZettelsByTag)
GRAPH_QUERY_TYPES = (FullGraph, BacklinksOf)


def link_connection(query: ZettelQuery) -> Connection:
    """Edge kind created by a link that carries ``query``."""
    return query.connection or Connection.ORDINARY
