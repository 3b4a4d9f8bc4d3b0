"""
Execution timing utilities.

Backends time each phase (decomposition, substitution, inversion) into
named sections; the result dict ends up in Result.timing.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator


class Timer:
    """
    Accumulating section timer.

    GPU work is asynchronous, so a backend running on a device passes a
    ``sync`` callable (e.g. torch.cuda.synchronize) that is invoked before
    every clock reading.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('decomposition'):
            decomposition = decompose(matrix)

        with timer.section('back_substitution'):
            back_substitute(matrix, decomposition, rhs)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'decomposition': 0.03, 'back_substitution': 0.02}
    """

    def __init__(self, sync: Callable[[], None] | None = None):
        self._sync_fn = sync
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _clock(self) -> float:
        if self._sync_fn is not None:
            self._sync_fn()
        return time.perf_counter()

    def start(self) -> None:
        """Start the overall timer."""
        self._start_time = self._clock()

    def stop(self) -> None:
        """Stop the overall timer."""
        now = self._clock()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = now - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section. Re-entering a name accumulates its time.
        """
        begin = self._clock()
        try:
            yield
        finally:
            elapsed = self._clock() - begin
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    @property
    def sections(self) -> tuple[str, ...]:
        """Names of the sections timed so far, in first-use order."""
        return tuple(self._sections)

    def result(self) -> dict[str, float]:
        """
        Get timing results.

        Returns:
            Dictionary with 'total_seconds' and all section timings

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed(sync: Callable[[], None] | None = None) -> Iterator[Timer]:
    """
    Context manager for simple timing.

    Usage:
        with timed() as timer:
            invert(matrix)
        print(f"Took {timer.result()['total_seconds']:.3f}s")
    """
    timer = Timer(sync=sync)
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
