# neuron_zk/graph/cache.py
"""
On-disk copy of the last built graph, in ``<notes>/.neuron/cache.json``.

The cache holds the full-graph JSON (zettels without their bodies, edges)
plus per-zettel link errors. Loading it gives a ``ZettelGraph`` good enough
for every query; a missing or unreadable cache loads as ``None`` so callers
rebuild.
"""

from __future__ import annotations

import json
from pathlib import Path

from neuron_zk.core.connection import Connection
from neuron_zk.core.ids import format_zettel_id, parse_zettel_id
from neuron_zk.core.queries import FullGraph
from neuron_zk.core.tags import Tag
from neuron_zk.graph.builder import Edge, ZettelGraph
from neuron_zk.graph.resolver import GraphResolver, result_to_json
from neuron_zk.logging_setup import get_logger
from neuron_zk.settings import NOTES_CACHE_FILE, NOTES_STATE_DIR
from neuron_zk.vault.notes import Zettel
from neuron_zk.vault.repo import atomic_write_text

log = get_logger("cache")


def cache_path(notes_dir: Path) -> Path:
    return Path(notes_dir) / NOTES_STATE_DIR / NOTES_CACHE_FILE


def save_graph_cache(notes_dir: Path, graph: ZettelGraph) -> Path:
    data = result_to_json(GraphResolver(graph).evaluate(FullGraph()))
    data["errors"] = {
        format_zettel_id(zid): list(errs)
        for zid, errs in sorted(graph.errors.items(), key=lambda kv: kv[0].value)
    }

    path = cache_path(notes_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(path, json.dumps(data, indent=2, ensure_ascii=False))
    log.debug("Graph cache written: %s", path)
    return path


def load_graph_cache(notes_dir: Path) -> ZettelGraph | None:
    path = cache_path(notes_dir)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        log.info("No graph cache at %s", path)
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        log.warning("Unreadable graph cache %s: %s", path, e)
        return None

    try:
        return graph_from_json(data)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        log.warning("Bad graph cache %s: %s", path, e)
        return None


def graph_from_json(data: dict) -> ZettelGraph:
    zettels = {}
    for item in data["zettels"]:
        zid = parse_zettel_id(item["id"])
        zettels[zid] = Zettel(
            id=zid,
            title=item["title"],
            tags=tuple(Tag(t) for t in item["tags"]),
            date=item.get("date"),
            path=Path(item["path"]) if item.get("path") else None,
        )

    edges = []
    for item in data["edges"]:
        edges.append(Edge(
            parse_zettel_id(item["from"]),
            parse_zettel_id(item["to"]),
            Connection(item["connection"]),
        ))

    errors = {
        parse_zettel_id(zid): tuple(msgs)
        for zid, msgs in data.get("errors", {}).items()
    }
    return ZettelGraph(zettels=zettels, edges=tuple(edges), errors=errors)
