"""Clock — источник текущего времени (UNIX seconds) для проверки expiry."""

import time


class SystemClock:
    """Wall-clock время."""

    def now(self) -> int:
        return int(time.time())


class ManualClock:
    """
    Управляемые часы для тестов и симуляций.

    Args:
        start: Начальное время (UNIX seconds)
    """

    def __init__(self, start: int = 1_700_000_000):
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError(f"Clock cannot move backwards: {seconds}")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> None:
        self._now = timestamp
