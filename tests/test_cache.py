import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json

from neuron_zk.core.connection import Connection
from neuron_zk.core.ids import ZettelID
from neuron_zk.core.queries import BacklinksOf, ZettelByID, ZettelsByTag
from neuron_zk.core.tags import Tag, default_tag_query
from neuron_zk.graph.builder import build_zettel_graph
from neuron_zk.graph.cache import cache_path, load_graph_cache, save_graph_cache
from neuron_zk.graph.resolver import GraphResolver
from neuron_zk.vault.notes import Zettel

A, B, C = (ZettelID(x) for x in "abc")


def sample():
    return build_zettel_graph([
        Zettel(id=A, title="Alpha", tags=(Tag("science"),), date="2020-01-01", content="[[[b]]] [[missing]]"),
        Zettel(id=B, title="Beta", tags=(Tag("project/x"),), content="[[c]]"),
        Zettel(id=C, title="Gamma"),
    ])


def test_save_then_load(tmp_path):
    graph = sample()
    path = save_graph_cache(tmp_path, graph)
    assert path == cache_path(tmp_path)
    assert path == tmp_path / ".neuron" / "cache.json"

    loaded = load_graph_cache(tmp_path)
    assert set(loaded.edges) == set(graph.edges)
    assert loaded.errors == graph.errors
    assert loaded.zettels[A].title == "Alpha"
    assert loaded.zettels[A].tags == (Tag("science"),)

    before, after = GraphResolver(graph), GraphResolver(loaded)
    for q in (BacklinksOf(B), BacklinksOf(C, Connection.FOLGEZETTEL), ZettelsByTag(default_tag_query(["**"]))):
        got = after.evaluate(q)
        want = before.evaluate(q)
        if isinstance(want, list):
            assert [z.id for z in got] == [z.id for z in want]
        else:
            assert got == want
    assert after.evaluate(ZettelByID(A)).date == "2020-01-01"


def test_missing_cache_is_none(tmp_path):
    assert load_graph_cache(tmp_path) is None


def test_bad_cache_is_none(tmp_path):
    path = cache_path(tmp_path)
    path.parent.mkdir()
    path.write_text(json.dumps({"zettels": [{"id": "bad id"}], "edges": []}), encoding="utf-8")
    assert load_graph_cache(tmp_path) is None
    path.write_text(json.dumps({"zettels": [], "edges": [{"from": "a", "to": "b", "connection": "odd"}]}), encoding="utf-8")
    assert load_graph_cache(tmp_path) is None
