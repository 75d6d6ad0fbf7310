"""Concurrent producer/worker/aggregator schema inference."""

from __future__ import annotations

import logging
import os
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import List

from radcliffe.config import AppConfig
from radcliffe.errors import UnsupportedShapeError
from radcliffe.inference.aggregator import PRODUCER_FINISHED, Aggregator, CompletionSignal
from radcliffe.inference.classifier import classify
from radcliffe.inference.paths import build_path
from radcliffe.inference.walker import walk
from radcliffe.models import DataType, JsonObject, Metadata, Pair

LOGGER = logging.getLogger(__name__)

_STOP = None


def classify_pair(pair: Pair) -> Metadata:
    """Build the metadata record for a single pair.

    A failure is confined to this pair, which is reported as ``unknown``.
    """
    path = build_path(pair.root_path, pair.key)
    try:
        data_type, fmt = classify(pair.value)
    except Exception:
        LOGGER.exception("Failed to classify %s", path)
        return Metadata(path=path, type=DataType.UNKNOWN)
    LOGGER.debug("Classified %s as %s %s", path, data_type.value, fmt.value if fmt else "")
    return Metadata(path=path, type=data_type, format=fmt)


class SchemaInferrer:
    """Walks a document on one thread and classifies its pairs on a worker pool."""

    def __init__(self, *, workers: int | None = None, queue_size: int = 1024) -> None:
        if workers is not None and workers < 1:
            raise ValueError("workers must be at least 1")
        if queue_size < 0:
            raise ValueError("queue_size must not be negative")
        self.workers = workers or os.cpu_count() or 1
        self.queue_size = queue_size

    @classmethod
    def from_config(cls, config: AppConfig) -> "SchemaInferrer":
        return cls(workers=config.resolve_workers(), queue_size=config.queue_size)

    def infer(self, document: JsonObject) -> List[Metadata]:
        """Return one metadata record per key, at every depth, of ``document``."""
        if not isinstance(document, JsonObject):
            raise UnsupportedShapeError()

        pairs: "queue.Queue[Pair | None]" = queue.Queue(maxsize=self.queue_size)
        results: "queue.Queue[object]" = queue.Queue()
        signal = CompletionSignal()

        with ThreadPoolExecutor(
            max_workers=self.workers + 1, thread_name_prefix="radcliffe"
        ) as executor:
            producer = executor.submit(self._produce, document, pairs, results, signal)
            workers = [executor.submit(self._work, pairs, results) for _ in range(self.workers)]

            records = Aggregator(results, signal).collect()

            producer.result()
            for worker in workers:
                worker.result()

        LOGGER.info("Inferred %d paths using %d workers", len(records), self.workers)
        return records

    def _produce(
        self,
        document: JsonObject,
        pairs: "queue.Queue[Pair | None]",
        results: "queue.Queue[object]",
        signal: CompletionSignal,
    ) -> None:
        def emit(pair: Pair) -> None:
            signal.add()
            pairs.put(pair)

        try:
            emitted = walk(document, emit)
            LOGGER.debug("Producer emitted %d pairs", emitted)
        finally:
            signal.finish()
            results.put(PRODUCER_FINISHED)
            for _ in range(self.workers):
                pairs.put(_STOP)

    @staticmethod
    def _work(pairs: "queue.Queue[Pair | None]", results: "queue.Queue[object]") -> None:
        while True:
            pair = pairs.get()
            if pair is _STOP:
                return
            results.put(classify_pair(pair))


def infer_schema(
    document: JsonObject, *, workers: int | None = None, queue_size: int = 1024
) -> List[Metadata]:
    """Convenience wrapper running a one-off :class:`SchemaInferrer`."""
    return SchemaInferrer(workers=workers, queue_size=queue_size).infer(document)
