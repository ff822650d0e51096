import time


class MonotonicClock:
    """Elapsed microseconds since the clock was created (or last reset)."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._start_ns = time.monotonic_ns()

    def elapsed_us(self) -> int:
        return (time.monotonic_ns() - self._start_ns) // 1000
