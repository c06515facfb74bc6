"""
Phase timing for backend kernels.

Every backend wraps its kernel phases (factor, solve, sweeps) in
Timer.section so the Result it returns can say where the time went.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Wall-clock timer with named, accumulating phases.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('hessenberg'):
            H = hessenberg(a)
        with timer.section('shifted_qr'):
            w, iterations = hessenberg_eigenvalues(H)
        timer.stop()
        timer.result()
        # {'total_seconds': ..., 'hessenberg': ..., 'shifted_qr': ...}

    A phase entered more than once accumulates. Phases are not required
    to cover the whole interval between start() and stop().
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._started_at: float | None = None
        self._elapsed: float | None = None

    def start(self) -> None:
        self._started_at = time.perf_counter()
        self._elapsed = None

    def stop(self) -> None:
        """
        Raises:
            RuntimeError: If start() was never called
        """
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Add the time spent inside the block to phase ``name``."""
        entered = time.perf_counter()
        try:
            yield
        finally:
            spent = time.perf_counter() - entered
            self._phases[name] = self._phases.get(name, 0.0) + spent

    def result(self) -> dict[str, float]:
        """
        'total_seconds' plus one entry per phase.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._phases}
