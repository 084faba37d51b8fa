"""Bounded-concurrency extraction pool.

This module provides the WorkerPool class, which runs a MetadataExtractor
over a stream of file paths on a fixed number of threads and hands the
resulting Records back to the calling thread.

Layout of a run:
    feeder thread  --(path queue)-->  N worker threads  --(record queue)-->  caller

Both queues are bounded, so neither a fast walker nor a slow consumer can
grow memory without limit. Records arrive in completion order, not in
traversal order.

Example:
    >>> from folder2csv.processing import WorkerPool
    >>> from folder2csv.scanning import MetadataExtractor, TreeWalker
    >>> pool = WorkerPool(MetadataExtractor(), concurrency=4)
    >>> for record in pool.run(TreeWalker().walk("/data")):
    ...     print(record.path, record.content_hash)
"""

import logging
import os
import queue
import threading
from typing import Any, Iterable, Iterator, List, Optional

from folder2csv.models import Record
from folder2csv.scanning import MetadataExtractor

logger = logging.getLogger(__name__)

# How often blocked queue operations re-check the stop event (seconds)
POLL_INTERVAL = 0.1

# Default capacity of the path and record queues
QUEUE_SIZE = 1024

# Marks the end of a stream on either queue
_DONE = object()


class _Failure:
    """Carries an unexpected exception from a pool thread to the consumer."""

    def __init__(self, exc: BaseException) -> None:
        self.exc = exc


def default_concurrency() -> int:
    """Number of worker threads to use when none is configured.

    Returns:
        Available processing units minus one, never less than 1.
    """
    return max((os.cpu_count() or 1) - 1, 1)


class WorkerPool:
    """Runs metadata extraction on a fixed-size pool of threads.

    Extraction is I/O bound (stat, open, read), so threads overlap the
    waiting. The degree of parallelism is capped to keep open file handles
    and disk contention in check.

    Attributes:
        concurrency: Number of worker threads, at least 1.
        queue_size: Capacity of each internal queue.
    """

    def __init__(
        self,
        extractor: MetadataExtractor,
        concurrency: Optional[int] = None,
        queue_size: int = QUEUE_SIZE,
    ) -> None:
        """Initialize the WorkerPool.

        Args:
            extractor: Extractor invoked once per path.
            concurrency: Number of worker threads. Defaults to
                default_concurrency(); values below 1 are clamped to 1.
            queue_size: Capacity of the path and record queues.

        Raises:
            ValueError: If queue_size is not positive.
        """
        if queue_size <= 0:
            raise ValueError(f"queue_size must be positive, got {queue_size}")

        if concurrency is None:
            concurrency = default_concurrency()

        self._extractor = extractor
        self.concurrency = max(int(concurrency), 1)
        self.queue_size = queue_size

    def run(self, paths: Iterable[str]) -> Iterator[Record]:
        """Extract a Record for every path, concurrently.

        The iterator is exhausted only after the path stream has been fully
        consumed and every worker has finished its last file. Paths whose
        extraction returns None (vanished files) produce no Record.

        If the consumer stops early (closes the generator, or an exception
        such as KeyboardInterrupt is raised while iterating) the pool threads
        are told to stop and exit within POLL_INTERVAL.

        Args:
            paths: Stream of file paths, typically TreeWalker.walk().

        Yields:
            Records in completion order.

        Raises:
            Exception: Any unexpected exception raised by the path stream or
                by the extractor is re-raised here.
        """
        path_queue: "queue.Queue[Any]" = queue.Queue(maxsize=self.queue_size)
        record_queue: "queue.Queue[Any]" = queue.Queue(maxsize=self.queue_size)
        stop = threading.Event()

        threads: List[threading.Thread] = [
            threading.Thread(
                target=self._feed,
                args=(paths, path_queue, record_queue, stop),
                name="folder2csv-feeder",
                daemon=True,
            )
        ]
        threads.extend(
            threading.Thread(
                target=self._work,
                args=(path_queue, record_queue, stop),
                name=f"folder2csv-worker-{i}",
                daemon=True,
            )
            for i in range(self.concurrency)
        )

        logger.debug("Starting %d extraction worker(s)", self.concurrency)
        for thread in threads:
            thread.start()

        finished = 0
        try:
            while finished < self.concurrency:
                item = record_queue.get()
                if item is _DONE:
                    finished += 1
                elif isinstance(item, _Failure):
                    raise item.exc
                else:
                    yield item
        finally:
            stop.set()
            for thread in threads:
                thread.join(timeout=POLL_INTERVAL * 10)

    def _feed(
        self,
        paths: Iterable[str],
        path_queue: "queue.Queue[Any]",
        record_queue: "queue.Queue[Any]",
        stop: threading.Event,
    ) -> None:
        try:
            for path in paths:
                if not _put(path_queue, path, stop):
                    return
        except Exception as exc:
            logger.error("Directory traversal failed: %s", exc)
            _put(record_queue, _Failure(exc), stop)
        finally:
            for _ in range(self.concurrency):
                if not _put(path_queue, _DONE, stop):
                    break

    def _work(
        self,
        path_queue: "queue.Queue[Any]",
        record_queue: "queue.Queue[Any]",
        stop: threading.Event,
    ) -> None:
        try:
            while not stop.is_set():
                try:
                    path = path_queue.get(timeout=POLL_INTERVAL)
                except queue.Empty:
                    continue
                if path is _DONE:
                    break

                record = self._extractor.extract(path)
                if record is not None and not _put(record_queue, record, stop):
                    return
        except Exception as exc:
            logger.error("Metadata extraction failed: %s", exc)
            _put(record_queue, _Failure(exc), stop)
        finally:
            _put(record_queue, _DONE, stop)


def _put(target: "queue.Queue[Any]", item: Any, stop: threading.Event) -> bool:
    """Put item on a bounded queue, giving up once stop is set.

    Returns:
        True if the item was queued, False if the pool is stopping.
    """
    while not stop.is_set():
        try:
            target.put(item, timeout=POLL_INTERVAL)
            return True
        except queue.Full:
            continue
    return False
