import math
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from server.utils import iso_timestamp, utc_now


class RequestStats:
    """Process-local request counters.

    One instance is owned by each application built with ``create_app``.
    Increments are lock-guarded because sync handlers and the counting
    middleware can run on different worker threads.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, now: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._now = now
        self._lock = threading.Lock()
        self._started = clock()
        self.start_time: datetime = now()
        self.requests = 0
        self.last_request: Optional[datetime] = None

    def record(self) -> int:
        """Count one inbound request and return the new total."""
        with self._lock:
            self.requests += 1
            stamp = self._now()
            # wall clock may step backwards; keep last_request >= start_time
            self.last_request = max(stamp, self.start_time)
            return self.requests

    def uptime_seconds(self) -> int:
        elapsed = self._clock() - self._started
        return max(0, math.floor(elapsed))

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            requests = self.requests
            last_request = self.last_request
        return {
            'requests': requests,
            'uptime': self.uptime_seconds(),
            'start_time': iso_timestamp(self.start_time),
            'last_request': iso_timestamp(last_request) if last_request else None,
        }
