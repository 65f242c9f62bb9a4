# token_kernel/core/clock.py
"""
Clock used for iat/exp/nbf
──────────────────────────────────────────────
• Any zero-argument callable returning Unix seconds
• system_clock reads the wall clock (time.time)
• FixedClock pins "now" for tests and replays
"""
from __future__ import annotations

import time
from typing import Callable, Optional

Clock = Callable[[], float]


def system_clock() -> float:
    return time.time()


class FixedClock:
    def __init__(self, now: float):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def now_seconds(clock: Optional[Clock] = None) -> int:
    """Current Unix time in whole seconds."""
    return int((clock or system_clock)())
