import pytest


class FakeClock:
    """Millisecond clock that only moves when a workload advances it."""

    def __init__(self, start: int = 0):
        self.now = start
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms

    def workload(self, cost_ms: int):
        """A workload costing ``cost_ms`` per call on this clock."""
        def run():
            self.advance(cost_ms)
        return run


@pytest.fixture
def clock():
    return FakeClock()
