"""Call counters and latency tracking for the engine operations.

One ``MetricsService`` is created per application and stored on
``app.state``.
"""

import threading
import time
from contextlib import contextmanager
from typing import Dict, Iterator


class _OperationStats:
    def __init__(self) -> None:
        self.count = 0
        self.errors = 0
        self.total_latency_ms = 0.0
        self.min_latency_ms = float("inf")
        self.max_latency_ms = 0.0

    def as_dict(self) -> Dict:
        avg_latency = self.total_latency_ms / self.count if self.count > 0 else 0.0
        return {
            "count": self.count,
            "errors": self.errors,
            "average_latency_ms": round(avg_latency, 2),
            "min_latency_ms": (
                round(self.min_latency_ms, 2) if self.count > 0 else 0.0
            ),
            "max_latency_ms": round(self.max_latency_ms, 2),
        }


class MetricsService:
    """Thread-safe per-operation counters and latency stats."""

    def __init__(self):
        self._lock = threading.Lock()
        self._stats: Dict[str, _OperationStats] = {}

    def record(self, operation: str, latency_ms: float, failed: bool = False) -> None:
        """Record one call of an operation.

        Args:
            operation: Operation name, e.g. "search"
            latency_ms: Latency in milliseconds
            failed: Whether the call raised
        """
        with self._lock:
            stats = self._stats.setdefault(operation, _OperationStats())
            stats.count += 1
            if failed:
                stats.errors += 1
            stats.total_latency_ms += latency_ms
            stats.min_latency_ms = min(stats.min_latency_ms, latency_ms)
            stats.max_latency_ms = max(stats.max_latency_ms, latency_ms)

    @contextmanager
    def track(self, operation: str) -> Iterator[None]:
        """Time the wrapped block and record it, counting exceptions as errors."""
        start_time = time.time()
        failed = False
        try:
            yield
        except Exception:
            failed = True
            raise
        finally:
            self.record(operation, (time.time() - start_time) * 1000, failed=failed)

    def get_metrics(self) -> Dict[str, Dict]:
        """Snapshot of the stats of every operation seen so far."""
        with self._lock:
            return {name: stats.as_dict() for name, stats in self._stats.items()}

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._stats.clear()
