"""Parser for compact delay strings such as ``30m`` or ``1h``."""

import re
from datetime import datetime, timedelta
from typing import Optional

UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
}

DELAY_PATTERN = re.compile(r"^(\d+)([smh])$")


class DelayFormatError(ValueError):
    """Raised when a delay string is not ``<integer><s|m|h>``."""


def delay_to_seconds(delay: str) -> int:
    """Return the number of seconds a delay string stands for."""
    match = DELAY_PATTERN.match(delay.strip()) if isinstance(delay, str) else None
    if not match:
        raise DelayFormatError(
            f"Invalid delay format: {delay!r}. Use a number followed by s, m or h (e.g. 10s, 30m, 1h)."
        )
    amount, unit = match.groups()
    return int(amount) * UNIT_SECONDS[unit]


def parse_delay(delay: str, now: Optional[datetime] = None) -> datetime:
    """
    Compute the absolute time a delay string points at.

    Args:
        delay: Delay string, e.g. "10s", "30m" or "2h"
        now: Reference time; defaults to the current local time

    Returns:
        ``now`` plus the delay

    Raises:
        DelayFormatError: If the string is not a valid delay
    """
    seconds = delay_to_seconds(delay)
    if now is None:
        now = datetime.now().astimezone()
    try:
        return now + timedelta(seconds=seconds)
    except OverflowError:
        raise DelayFormatError(f"Delay is too large: {delay!r}") from None
