"""
Progress sinks: one-way receivers of short phase messages during discovery.

Sinks are called through emit_safely(); a failing sink never fails discovery.
ProgressDispatcher runs those calls on a background worker so a slow sink
never holds up discovery either.
"""

import concurrent.futures
from threading import Lock
from typing import Optional, Protocol

from official_finder.logger import logger

PHASE_CONNECTING = "Connecting to search providers"
PHASE_ANALYZING = "Analyzing search results"
PHASE_FALLBACK = "No external results found, showing local samples"
PHASE_DONE = "Done"


class ProgressSink(Protocol):
    def emit(self, message: str) -> None: ...


class NullProgress:
    def emit(self, message: str) -> None:
        pass


class LoggingProgress:
    def emit(self, message: str) -> None:
        logger.info("progress: %s", message)


class CollectingProgress:
    """Keeps messages in order, for API responses and tests."""

    def __init__(self):
        self.messages: list[str] = []

    def emit(self, message: str) -> None:
        self.messages.append(message)


def emit_safely(sink: Optional[ProgressSink], message: str) -> None:
    if sink is None:
        return
    try:
        sink.emit(message)
    except Exception as e:
        logger.warning("Progress sink failed on %r: %s", message, e)


class ProgressDispatcher:
    """Fire-and-forget delivery of progress messages, in emit order."""

    def __init__(self):
        self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="progress")
        self._pending: set[concurrent.futures.Future] = set()
        self._lock = Lock()

    def emit(self, sink: Optional[ProgressSink], message: str) -> None:
        if sink is None:
            return
        future = self._executor.submit(emit_safely, sink, message)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._discard)

    def _discard(self, future: concurrent.futures.Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for messages emitted so far; False if some are still pending."""
        with self._lock:
            pending = list(self._pending)
        _, not_done = concurrent.futures.wait(pending, timeout=timeout)
        return not not_done

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
