"""
Fixed-window request counter keyed by client address.

Each client gets `limit` requests per `window_seconds`; the window starts at
the client's first request and resets atomically once it has elapsed.
Expired windows are swept at most once per window length and the table is
capped at `max_clients`, evicting the least recently seen client first.
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_at: float


class FixedWindowRateLimiter:
    def __init__(self, limit=100, window_seconds=60, max_clients=10000, clock=time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self.max_clients = max(1, max_clients)
        self._clock = clock
        # client_id -> [count, reset_at], ordered by last seen
        self._windows = OrderedDict()
        self._last_sweep = clock()
        self._lock = threading.Lock()

    def now(self):
        return self._clock()

    def hit(self, client_id):
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)

            window = self._windows.get(client_id)
            if window is None or now >= window[1]:
                window = [1, now + self.window_seconds]
                self._windows[client_id] = window
                self._windows.move_to_end(client_id)
                self._enforce_capacity()
                return RateLimitDecision(True, self.limit - 1, window[1])

            self._windows.move_to_end(client_id)
            if window[0] >= self.limit:
                return RateLimitDecision(False, 0, window[1])

            window[0] += 1
            return RateLimitDecision(True, self.limit - window[0], window[1])

    def _maybe_sweep(self, now):
        if now - self._last_sweep < self.window_seconds:
            return
        expired = [cid for cid, (_, reset_at) in self._windows.items() if now >= reset_at]
        for cid in expired:
            del self._windows[cid]
        self._last_sweep = now

    def _enforce_capacity(self):
        while len(self._windows) > self.max_clients:
            self._windows.popitem(last=False)

    def __len__(self):
        with self._lock:
            return len(self._windows)
