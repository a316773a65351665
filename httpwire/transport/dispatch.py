"""Worker dispatch strategies for accepted connections.

The accept loop only talks to ``WorkerDispatcher``; swapping the
unbounded thread-per-connection model for a bounded pool does not touch
the protocol code.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from httpwire.domain.correlation_id import get_logger

DISPATCH_LOGGER = get_logger("transport.dispatch")


class WorkerDispatcher:
    """Runs connection handlers somewhere other than the accept loop."""

    def submit(self, target: Callable[..., Any], *args: Any) -> None:
        raise NotImplementedError

    def active_count(self) -> int:
        raise NotImplementedError

    def close(self, timeout: float) -> bool:
        """Stop taking work and wait up to ``timeout`` seconds; True if drained."""
        raise NotImplementedError


class ThreadPerConnectionDispatcher(WorkerDispatcher):
    """Starts one thread per submitted job, with no upper bound."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._workers: set[threading.Thread] = set()

    def submit(self, target: Callable[..., Any], *args: Any) -> None:
        thread = threading.Thread(target=self._run, args=(target, args), daemon=True)
        with self._lock:
            self._workers.add(thread)
        thread.start()

    def _run(self, target: Callable[..., Any], args: tuple) -> None:
        try:
            target(*args)
        finally:
            with self._lock:
                self._workers.discard(threading.current_thread())

    def active_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def close(self, timeout: float) -> bool:
        deadline = time.monotonic() + timeout
        while True:
            with self._lock:
                active_workers = [w for w in self._workers if w.is_alive()]
            if not active_workers:
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                DISPATCH_LOGGER.warning(
                    "Shutdown timeout exceeded",
                    extra={"event": "shutdown_timeout", "workers": len(active_workers)},
                )
                return False
            for worker in active_workers:
                worker.join(timeout=min(0.1, remaining))
                if time.monotonic() >= deadline:
                    break


class PooledDispatcher(WorkerDispatcher):
    """Runs jobs on a fixed-size thread pool; excess connections queue."""

    def __init__(self, max_workers: int) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="httpwire-worker"
        )
        self._lock = threading.Lock()
        self._pending = 0

    def submit(self, target: Callable[..., Any], *args: Any) -> None:
        with self._lock:
            self._pending += 1
        future = self._executor.submit(target, *args)
        future.add_done_callback(self._job_done)

    def _job_done(self, _future) -> None:
        with self._lock:
            self._pending -= 1

    def active_count(self) -> int:
        with self._lock:
            return self._pending

    def close(self, timeout: float) -> bool:
        self._executor.shutdown(wait=False)
        deadline = time.monotonic() + timeout
        while self.active_count() > 0:
            if time.monotonic() >= deadline:
                DISPATCH_LOGGER.warning(
                    "Shutdown timeout exceeded",
                    extra={"event": "shutdown_timeout", "workers": self.active_count()},
                )
                return False
            time.sleep(0.05)
        return True


def create_dispatcher(workers: int) -> WorkerDispatcher:
    """Return a pool of ``workers`` threads, or thread-per-connection for 0."""
    if workers > 0:
        return PooledDispatcher(workers)
    return ThreadPerConnectionDispatcher()
