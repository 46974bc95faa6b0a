import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass(frozen=True)
class Notice:
    message: str
    created_at: float


class FeedbackQueue:
    """Short-lived, auto-dismissing notifications shown above the dashboard."""

    def __init__(self, ttl_seconds: float = 3.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._notices: List[Notice] = []

    def push(self, message: str) -> None:
        with self._lock:
            self._notices.append(Notice(message, self._clock()))

    def active(self, now: Optional[float] = None) -> List[str]:
        now = self._clock() if now is None else now
        with self._lock:
            self._notices = [n for n in self._notices if now - n.created_at < self.ttl_seconds]
            return [n.message for n in self._notices]

    def drain(self) -> List[str]:
        """Return the live notices and forget them (each is painted once)."""
        now = self._clock()
        with self._lock:
            messages = [n.message for n in self._notices if now - n.created_at < self.ttl_seconds]
            self._notices.clear()
        return messages
