"""Tests for completion tracking and result aggregation."""

from __future__ import annotations

import queue
import threading

import pytest

from radcliffe.inference.aggregator import PRODUCER_FINISHED, Aggregator, CompletionSignal
from radcliffe.models import DataType, Metadata


class TestCompletionSignal:
    """Test CompletionSignal counter."""

    def test_initial_state(self) -> None:
        """A fresh signal is neither finished nor complete."""
        signal = CompletionSignal()

        assert signal.outstanding == 0
        assert signal.produced == 0
        assert signal.complete is False

    def test_finished_without_work_is_complete(self) -> None:
        signal = CompletionSignal()

        signal.finish()

        assert signal.complete is True

    def test_outstanding_work_blocks_completion(self) -> None:
        """Finishing the producer is not enough while pairs are in flight."""
        signal = CompletionSignal()
        signal.add()
        signal.add()
        signal.finish()

        assert signal.complete is False
        signal.done()
        assert signal.complete is False
        signal.done()
        assert signal.complete is True
        assert signal.produced == 2

    def test_zero_outstanding_before_finish_is_not_complete(self) -> None:
        """The counter alone is only trusted once the producer has finished."""
        signal = CompletionSignal()
        signal.add()
        signal.done()

        assert signal.outstanding == 0
        assert signal.complete is False

    def test_add_after_finish_rejected(self) -> None:
        signal = CompletionSignal()
        signal.finish()

        with pytest.raises(RuntimeError):
            signal.add()

    def test_done_without_add_rejected(self) -> None:
        with pytest.raises(RuntimeError):
            CompletionSignal().done()

    def test_concurrent_updates(self) -> None:
        """Counter updates from many threads are not lost."""
        signal = CompletionSignal()

        def produce() -> None:
            for _ in range(1000):
                signal.add()

        threads = [threading.Thread(target=produce) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert signal.outstanding == 8000
        assert signal.produced == 8000


class TestAggregator:
    """Test Aggregator."""

    def test_collects_all_records(self) -> None:
        results: "queue.Queue[object]" = queue.Queue()
        signal = CompletionSignal()
        records = [Metadata(path=str(i), type=DataType.BOOLEAN) for i in range(3)]
        for record in records:
            signal.add()
            results.put(record)
        signal.finish()
        results.put(PRODUCER_FINISHED)

        collected = Aggregator(results, signal).collect()

        assert collected == records
        assert signal.complete is True

    def test_empty_run_returns_immediately(self) -> None:
        """The finished marker wakes the aggregator when nothing was produced."""
        results: "queue.Queue[object]" = queue.Queue()
        signal = CompletionSignal()
        signal.finish()
        results.put(PRODUCER_FINISHED)

        assert Aggregator(results, signal).collect() == []

    def test_waits_for_late_records(self) -> None:
        """Does not return before in-flight records arrive."""
        results: "queue.Queue[object]" = queue.Queue()
        signal = CompletionSignal()
        signal.add()
        signal.finish()
        results.put(PRODUCER_FINISHED)
        record = Metadata(path="late", type=DataType.STRING)

        timer = threading.Timer(0.05, results.put, args=(record,))
        timer.start()
        try:
            collected = Aggregator(results, signal).collect()
        finally:
            timer.join()

        assert collected == [record]
