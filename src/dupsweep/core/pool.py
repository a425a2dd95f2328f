"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pool.py
Bounded pool of hashing threads.

PROTOCOL
--------
• `workers` long-lived threads pull jobs from one shared work queue and push
  exactly one HashResult per job onto one shared results queue
• Each batch gets an id; the collector counts results of its own batch until
  it has one per submitted path, so completion never depends on a queue
  being closed
• Results of an abandoned batch are dropped by id, never attributed to the
  paths of a later batch
• close() sends one sentinel per worker and joins them all
• A stop request (cancel() or the caller's stopped_flag) turns every pending
  job into a CANCELLED result, the batch still completes by count and the
  collector raises OperationCancelled
"""

import itertools
import logging
import os
import queue
import threading
from typing import List, Optional, Callable

from dupsweep.core.exceptions import OperationCancelled
from dupsweep.core.hasher import HasherImpl
from dupsweep.core.interfaces import DigestPool, HashAlgorithm
from dupsweep.core.models import HashResult, ErrorKind

logger = logging.getLogger(__name__)

_CLOSE = object()


class ThreadDigestPool(DigestPool):
    """
    Usage:
        with ThreadDigestPool(workers=4) as pool:
            results = pool.hash_paths(paths)
    """

    def __init__(self, workers: Optional[int] = None, hasher: HasherImpl = None, poll_interval: float = 0.1):
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")
        self.hasher = hasher or HasherImpl()
        self.poll_interval = poll_interval

        self._jobs: queue.Queue = queue.Queue()
        self._results: queue.Queue = queue.Queue()
        self._stop = threading.Event()
        self._threads: List[threading.Thread] = []
        self._batch_ids = itertools.count(1)
        self._lock = threading.Lock()
        self._closed = False

    # ---- lifecycle ----

    def start(self) -> "ThreadDigestPool":
        with self._lock:
            if self._closed:
                raise RuntimeError("Digest pool is closed")
            if not self._threads:
                logger.debug(f"Starting {self.workers} hashing workers")
                for i in range(self.workers):
                    thread = threading.Thread(target=self._work, name=f"dupsweep-hasher-{i}", daemon=True)
                    thread.start()
                    self._threads.append(thread)
        return self

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            threads, self._threads = self._threads, []

        for _ in threads:
            self._jobs.put(_CLOSE)
        for thread in threads:
            thread.join()
        logger.debug(f"Stopped {len(threads)} hashing workers")

    def cancel(self) -> None:
        self._stop.set()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    @property
    def alive_workers(self) -> int:
        return sum(1 for t in self._threads if t.is_alive())

    def __enter__(self) -> "ThreadDigestPool":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.cancel()
        self.close()

    # ---- work ----

    def hash_paths(
        self,
        paths: List[str],
        algorithm: Optional[HashAlgorithm] = None,
        limit: Optional[int] = None,
        stopped_flag: Optional[Callable[[], bool]] = None,
    ) -> List[HashResult]:
        """
        Hashes every path on the pool and returns one result per path, in
        arrival order.
        Raises:
            OperationCancelled: a stop was requested before the batch finished
        """
        self.start()
        batch_id = next(self._batch_ids)
        for index, path in enumerate(paths):
            self._jobs.put((batch_id, index, path, algorithm, limit))

        submitted = len(paths)
        results: List[HashResult] = []
        while len(results) < submitted:
            if stopped_flag and stopped_flag():
                self.cancel()
            try:
                received_batch, result = self._results.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if received_batch != batch_id:
                logger.debug(f"Dropping result of abandoned batch {received_batch}: {result.path}")
                continue
            results.append(result)

        logger.debug(f"Batch {batch_id}: submitted {submitted}, consumed {len(results)}")
        if self.cancelled:
            raise OperationCancelled("Hashing cancelled")
        return results

    def _work(self) -> None:
        while True:
            job = self._jobs.get()
            if job is _CLOSE:
                return
            batch_id, index, path, algorithm, limit = job
            if self._stop.is_set():
                result = HashResult(
                    path=path, index=index,
                    error=OperationCancelled("Hashing cancelled"), error_kind=ErrorKind.CANCELLED
                )
            else:
                try:
                    result = self.hasher.hash_file(path, index=index, algorithm=algorithm, limit=limit)
                except Exception as e:
                    # one result per job, whatever happens
                    logger.exception(f"Unexpected error while hashing {path}")
                    result = HashResult(path=path, index=index, error=e, error_kind=ErrorKind.READ)
            self._results.put((batch_id, result))
