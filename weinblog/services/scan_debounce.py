"""Suppression of repeated scans of the same code."""

import threading
import time
from collections.abc import Callable, Hashable


class ScanDebouncer:
    """Drop a code that the same scanner sent within the debounce window.

    A continuous camera decode loop reports the same code many times per
    second; only the first report in each window is passed on. State is kept
    per scanner, so one client never suppresses another client's scan.
    """

    def __init__(
        self,
        window_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        max_scanners: int = 1024,
    ) -> None:
        self.window_seconds = window_seconds
        self.max_scanners = max_scanners
        self._clock = clock
        # scanner -> (last code, time it was accepted)
        self._last: dict[Hashable, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def should_process(self, code: str, scanner: Hashable = None) -> bool:
        """Record a scan from ``scanner`` and tell whether it should reach the matcher."""
        with self._lock:
            now = self._clock()
            last = self._last.get(scanner)
            if last is not None and last[0] == code and now - last[1] < self.window_seconds:
                return False

            if scanner not in self._last and len(self._last) >= self.max_scanners:
                self._prune(now)
            self._last[scanner] = (code, now)
            return True

    def _prune(self, now: float) -> None:
        """Forget scanners outside the window, or the oldest one if all are recent."""
        expired = [
            scanner
            for scanner, (_, seen) in self._last.items()
            if now - seen >= self.window_seconds
        ]
        for scanner in expired:
            del self._last[scanner]
        if len(self._last) >= self.max_scanners:
            oldest = min(self._last, key=lambda scanner: self._last[scanner][1])
            del self._last[oldest]
