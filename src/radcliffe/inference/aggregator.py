"""Result collection and completion tracking for one inference run."""

from __future__ import annotations

import logging
import queue
import threading
from typing import List

from radcliffe.models import Metadata

LOGGER = logging.getLogger(__name__)

# Posted on the metadata queue once the producer will not add more work.
PRODUCER_FINISHED = object()


class CompletionSignal:
    """Counter of outstanding pairs plus a producer-finished flag.

    The run is complete only after :meth:`finish` has been called and every
    pair counted by :meth:`add` has been matched by :meth:`done`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outstanding = 0
        self._produced = 0
        self._finished = False

    def add(self) -> None:
        with self._lock:
            if self._finished:
                raise RuntimeError("cannot add work after the producer finished")
            self._outstanding += 1
            self._produced += 1

    def done(self) -> None:
        with self._lock:
            if self._outstanding == 0:
                raise RuntimeError("more results than produced pairs")
            self._outstanding -= 1

    def finish(self) -> None:
        with self._lock:
            self._finished = True

    @property
    def outstanding(self) -> int:
        with self._lock:
            return self._outstanding

    @property
    def produced(self) -> int:
        with self._lock:
            return self._produced

    @property
    def complete(self) -> bool:
        with self._lock:
            return self._finished and self._outstanding == 0


class Aggregator:
    """Drains the metadata queue until the completion signal is satisfied."""

    def __init__(self, results: "queue.Queue[object]", signal: CompletionSignal) -> None:
        self.results = results
        self.signal = signal

    def collect(self) -> List[Metadata]:
        records: List[Metadata] = []
        while not self.signal.complete:
            item = self.results.get()
            if item is PRODUCER_FINISHED:
                continue
            records.append(item)  # type: ignore[arg-type]
            self.signal.done()
        LOGGER.debug("Aggregated %d records", len(records))
        return records
