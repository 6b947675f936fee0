# neuron_zk/graph/worker.py

from __future__ import annotations

import time
from typing import Callable

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from neuron_zk.core.queries import Query
from neuron_zk.graph.resolver import GraphResolver
from neuron_zk.logging_setup import get_logger

log = get_logger("worker")


class QuerySignals(QObject):
    finished = Signal(int, object)   # req_id, result
    failed = Signal(int, str)        # req_id, error


class QueryWorker(QRunnable):
    """
    Background worker that evaluates one query.

    The resolver and the query are immutable, so any number of workers can
    share them.
    """

    def __init__(self, *, req_id: int, resolver: GraphResolver, query: Query):
        super().__init__()

        self.req_id = req_id
        self.resolver = resolver
        self.query = query

        self.signals = QuerySignals()

    def run(self) -> None:
        t0 = time.perf_counter()
        try:
            result = self.resolver.evaluate(self.query)
        except Exception as exc:
            log.exception("Query %d failed: %r", self.req_id, self.query)
            self.signals.failed.emit(self.req_id, str(exc))
            return

        log.debug("Query %d done in %.1f ms", self.req_id, (time.perf_counter() - t0) * 1000.0)
        self.signals.finished.emit(self.req_id, result)


class QueryService(QObject):
    """
    Orchestrates query requests.

    Responsibilities:
    - hand out req_id
    - start QueryWorker on the pool
    - drop results of requests that were superseded (latest_only=True)
    """

    def __init__(
        self,
        *,
        thread_pool: QThreadPool,
        resolver: GraphResolver,
        on_finished: Callable[[int, object], None],
        on_failed: Callable[[int, str], None],
        latest_only: bool = False,
    ):
        super().__init__()

        self._pool = thread_pool
        self._resolver = resolver
        self._on_finished = on_finished
        self._on_failed = on_failed
        self._latest_only = latest_only

        self._req_id = 0

    def set_resolver(self, resolver: GraphResolver) -> None:
        self._resolver = resolver

    def submit(self, query: Query) -> int:
        worker = self.prepare(query)
        self._pool.start(worker)
        return worker.req_id

    def prepare(self, query: Query) -> QueryWorker:
        self._req_id += 1
        worker = QueryWorker(req_id=self._req_id, resolver=self._resolver, query=query)
        worker.signals.finished.connect(self._handle_finished)
        worker.signals.failed.connect(self._handle_failed)
        return worker

    @Slot(int, object)
    def _handle_finished(self, req_id: int, result: object) -> None:
        if self._is_stale(req_id):
            return
        self._on_finished(req_id, result)

    @Slot(int, str)
    def _handle_failed(self, req_id: int, error: str) -> None:
        if self._is_stale(req_id):
            return
        self._on_failed(req_id, error)

    def _is_stale(self, req_id: int) -> bool:
        return self._latest_only and req_id != self._req_id
