import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from PySide6.QtCore import QThreadPool

from neuron_zk.core.connection import Connection
from neuron_zk.core.ids import ZettelID
from neuron_zk.core.queries import BacklinksOf, ZettelByID
from neuron_zk.graph.builder import Edge, build_zettel_graph
from neuron_zk.graph.resolver import GraphResolver
from neuron_zk.graph.worker import QueryService, QueryWorker
from neuron_zk.vault.notes import Zettel

A, B = ZettelID("a"), ZettelID("b")


def resolver():
    return GraphResolver(build_zettel_graph([
        Zettel(id=A, title="A", content="[[[b]]]"),
        Zettel(id=B, title="B"),
    ]))


class ExplodingResolver:
    def evaluate(self, query):
        raise RuntimeError("boom")


def test_worker_emits_result():
    got = []
    w = QueryWorker(req_id=7, resolver=resolver(), query=BacklinksOf(B))
    w.signals.finished.connect(lambda rid, res: got.append((rid, res)))
    w.run()
    assert got == [(7, frozenset({Edge(A, B, Connection.FOLGEZETTEL)}))]


def test_worker_reports_failure():
    failed = []
    w = QueryWorker(req_id=1, resolver=ExplodingResolver(), query=ZettelByID(A))
    w.signals.failed.connect(lambda rid, err: failed.append((rid, err)))
    w.run()
    assert failed == [(1, "boom")]


def test_service_drops_stale_results():
    done = []
    svc = QueryService(
        thread_pool=QThreadPool(),
        resolver=resolver(),
        on_finished=lambda rid, res: done.append(rid),
        on_failed=lambda rid, err: done.append(-rid),
        latest_only=True,
    )
    first = svc.prepare(ZettelByID(A))
    second = svc.prepare(ZettelByID(B))
    first.run()
    second.run()
    assert done == [2]


def test_service_keeps_all_results():
    done = []
    svc = QueryService(
        thread_pool=QThreadPool(),
        resolver=resolver(),
        on_finished=lambda rid, res: done.append((rid, res.id)),
        on_failed=lambda rid, err: done.append((rid, err)),
    )
    first = svc.prepare(ZettelByID(A))
    second = svc.prepare(ZettelByID(B))
    second.run()
    first.run()
    assert done == [(2, B), (1, A)]
