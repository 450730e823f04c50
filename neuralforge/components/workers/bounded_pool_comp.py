"""
Bounded worker pool component.

A fixed set of worker threads pulls items from a bounded input queue and
pushes results onto a bounded result queue drained by a single collector
thread. The caller's thread is the producer, so a slow pool parks the
producer instead of buffering.

Close semantics:
- The producer closes the input queue with one sentinel per worker
- Each worker exits on its sentinel and posts a done marker
- The collector exits after every worker's done marker
- A handler that raises a non-Exception (SystemExit, KeyboardInterrupt)
  aborts the run; the worker keeps draining its queue and run() re-raises
"""

from __future__ import annotations

import contextvars
import logging
import queue
import threading
from collections.abc import Callable, Iterable
from typing import Any

logger = logging.getLogger(__name__)

_CLOSE = object()
_WORKER_DONE = object()


class BoundedWorkerPool:
    """
    Run ``handler`` over a stream of items with bounded concurrency.

    Args:
        name: Thread name prefix, used in logs
        workers: Number of worker threads; also the depth of both queues
        handler: Called once per item in a worker thread
        on_result: Called in the collector thread with (item, result)
        on_error: Called in the collector thread with (item, exception) when
            ``handler`` raised
        stop_event: When set, the producer stops feeding and workers skip any
            item they have not started yet

    Callbacks never run concurrently with each other, so they may mutate
    shared aggregates without extra locking.
    """

    def __init__(
        self,
        name: str,
        workers: int,
        handler: Callable[[Any], Any],
        on_result: Callable[[Any, Any], None],
        on_error: Callable[[Any, Exception], None],
        stop_event: threading.Event | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self.name = name
        self.workers = workers
        self.handler = handler
        self.on_result = on_result
        self.on_error = on_error
        self.stop_event = stop_event or threading.Event()
        self._callback_error: BaseException | None = None
        self._fatal_error: BaseException | None = None
        self._aborted = threading.Event()

    def run(self, items: Iterable[Any]) -> int:
        """
        Feed ``items`` through the pool and block until all are handled.

        Returns:
            Number of items handed to workers

        Raises:
            Whatever the item iterable raised (after the pool drained), or the
            first exception raised by a callback, or the first non-Exception
            raised by the handler
        """
        self._callback_error = None
        self._fatal_error = None
        self._aborted.clear()
        inbox: queue.Queue[Any] = queue.Queue(maxsize=self.workers)
        outbox: queue.Queue[Any] = queue.Queue(maxsize=self.workers)

        threads = [
            self._start_thread(f"{self.name}-worker-{i}", self._worker_loop, inbox, outbox)
            for i in range(self.workers)
        ]
        collector = self._start_thread(f"{self.name}-collector", self._collector_loop, outbox)

        produced = 0
        try:
            for item in items:
                if self.stop_event.is_set() or self._aborted.is_set():
                    logger.info("[pool] %s: stop requested, no longer feeding", self.name)
                    break
                inbox.put(item)
                produced += 1
        finally:
            for _ in threads:
                inbox.put(_CLOSE)
            for thread in threads:
                thread.join()
            collector.join()

        if self._fatal_error is not None:
            raise self._fatal_error
        if self._callback_error is not None:
            raise self._callback_error
        logger.debug("[pool] %s: %d item(s) processed", self.name, produced)
        return produced

    # ------------------------------------------------------------------
    # Threads
    # ------------------------------------------------------------------

    @staticmethod
    def _start_thread(name: str, target: Callable[..., None], *args: Any) -> threading.Thread:
        # Each thread runs in a copy of the caller's context so log context propagates
        ctx = contextvars.copy_context()
        thread = threading.Thread(target=ctx.run, args=(target, *args), daemon=True, name=name)
        thread.start()
        return thread

    def _worker_loop(self, inbox: queue.Queue[Any], outbox: queue.Queue[Any]) -> None:
        try:
            while True:
                item = inbox.get()
                if item is _CLOSE:
                    break
                if self.stop_event.is_set() or self._aborted.is_set():
                    continue
                try:
                    result = self.handler(item)
                except Exception as e:
                    outbox.put((item, None, e))
                except BaseException as e:
                    # Keep consuming until the sentinel so the producer never blocks on a dead worker
                    logger.error("[pool] %s: handler aborted on %r: %r", self.name, item, e)
                    if self._fatal_error is None:
                        self._fatal_error = e
                    self._aborted.set()
                else:
                    outbox.put((item, result, None))
        finally:
            outbox.put(_WORKER_DONE)

    def _collector_loop(self, outbox: queue.Queue[Any]) -> None:
        remaining = self.workers
        while remaining:
            message = outbox.get()
            if message is _WORKER_DONE:
                remaining -= 1
                continue
            if self._callback_error is not None:
                continue
            item, result, error = message
            try:
                if error is None:
                    self.on_result(item, result)
                else:
                    self.on_error(item, error)
            except Exception as e:
                logger.exception("[pool] %s: callback failed for %r", self.name, item)
                self._callback_error = e
