"""HTTP mirror adapter - fire-and-forget POST of new entries."""

import logging
import threading

import requests

from microjournal.core.entries import Entry
from microjournal.core.errors import TransportError

logger = logging.getLogger(__name__)


class NullMirror:
    """Mirror that does nothing. Used when no endpoint is configured."""

    def mirror(self, entry: Entry) -> None:
        pass


class HttpMirror:
    """
    HTTP collector adapter.

    Implements EntryMirror protocol. Each entry is POSTed as JSON from a
    background thread, once, with no retry. The response is ignored and
    failures are only logged. Threads are non-daemon so an in-flight
    request still completes if the caller returns or the CLI exits.
    """

    def __init__(self, url: str, timeout: float = 10.0, session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()

    def mirror(self, entry: Entry) -> None:
        """Dispatch the entry and return immediately."""
        record = entry.to_record()
        thread = threading.Thread(
            target=self._deliver,
            args=(record,),
            name=f"mirror-{entry.id}",
        )
        try:
            thread.start()
        except RuntimeError as e:
            logger.warning(f"Could not start mirror request for {entry.id}: {e}")
            return
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)

    def flush(self, timeout: float | None = None) -> None:
        """Wait for in-flight requests to finish."""
        with self._lock:
            pending = list(self._threads)
        for thread in pending:
            thread.join(timeout)

    def _post(self, record: dict) -> None:
        """Send one record. Raises TransportError on network failure."""
        try:
            self._session.post(
                self.url,
                json=record,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

    def _deliver(self, record: dict) -> None:
        try:
            self._post(record)
            logger.debug(f"Mirrored entry {record.get('id')}")
        except TransportError as e:
            logger.warning(f"Mirror failed for entry {record.get('id')} (kept locally): {e}")
