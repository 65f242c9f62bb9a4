# token_kernel/core/duration.py
"""
Relative durations for exp/nbf
──────────────────────────────────────────────
parse(3600)  → 3600
parse("30s") → 30
parse("5m")  → 300
parse("2h")  → 7200
parse("1d")  → 86400
"""
from __future__ import annotations

import re
from typing import Union

from token_kernel.core.errors import ErrorKind, TokenError

_PATTERN = re.compile(r"^(\d+)([smhd])$")

UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}

Duration = Union[int, str]


def parse(value: Duration) -> int:
    # ints pass through untouched, zero and negatives included
    if isinstance(value, bool):
        raise TokenError(ErrorKind.INVALID_DURATION)
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise TokenError(ErrorKind.INVALID_DURATION)

    match = _PATTERN.match(value)
    if not match:
        raise TokenError(
            ErrorKind.INVALID_DURATION,
            'Invalid duration format. Use seconds or a string like "60s", "30m", "1h", "7d"',
        )
    amount, unit = match.groups()
    return int(amount) * UNIT_SECONDS[unit]
