import time


class Stopwatch:
    """Accumulates elapsed ticks of a monotonic integer clock between start() and stop()."""

    __slots__ = ('clock', 'started_at', 'elapsed_ticks')

    def __init__(self, clock=time.perf_counter_ns):
        self.clock = clock
        self.started_at = None
        self.elapsed_ticks = 0

    @property
    def running(self) -> bool:
        return self.started_at is not None

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = self.clock()

    def stop(self) -> None:
        if self.started_at is not None:
            self.elapsed_ticks += self.clock() - self.started_at
            self.started_at = None

    def reset(self) -> None:
        self.started_at = None
        self.elapsed_ticks = 0
