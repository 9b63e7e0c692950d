"""Position keys for callers that must never fail to reorder.

These wrap :func:`lexpos.keys.generate_key_between`. When a stored neighbour
key is corrupt or the bounds are inverted, a warning is logged and a key that
keeps order against whichever neighbours are still well-formed is returned.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, List, Optional

from .config import FallbackSettings, get_settings
from .errors import FallbackOrderError, OrderKeyError
from .keys import (
    DIGITS,
    INTEGER_ZERO,
    SMALLEST_INTEGER,
    generate_key_between,
    generate_n_keys_between,
    midpoint,
    split_integer_part,
    validate_order_key,
)

logger = logging.getLogger(__name__)

BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _to_base36(value: int) -> str:
    if value == 0:
        return BASE36[0]
    out = []
    while value:
        value, rem = divmod(value, 36)
        out.append(BASE36[rem])
    return "".join(reversed(out))


def timestamp_suffix(settings: Optional[FallbackSettings] = None) -> str:
    """Return the tail of the current time in base 36 plus a few random digits.

    The last digit is never ``"0"`` so the suffix can end a canonical key.
    """
    settings = settings or get_settings()
    stamp = _to_base36(_now_ms())[-settings.timestamp_digits:]
    noise = [random.choice(BASE36) for _ in range(settings.random_digits - 1)]
    noise.append(random.choice(BASE36[1:]))
    return stamp + "".join(noise)


def is_valid_position_key(key: Any) -> bool:
    if not isinstance(key, str) or not key:
        return False
    try:
        validate_order_key(key)
    except OrderKeyError:
        return False
    return True


def compare_position_keys(a: Optional[str], b: Optional[str]) -> int:
    """Three-way comparison; ``None`` sorts before every key."""
    if a == b:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    return -1 if a < b else 1


def _parses(key: Any) -> bool:
    """True when ``key`` is structurally a key, even if not canonical."""
    if not isinstance(key, str) or not key:
        return False
    try:
        split_integer_part(key)
    except OrderKeyError:
        return False
    return all(ch in DIGITS for ch in key)


def _fallback(before: Optional[str], after: Optional[str], settings: FallbackSettings) -> str:
    lower = before if _parses(before) else None
    upper = after if _parses(after) else None
    if lower is not None and upper is not None:
        candidate = lower + settings.digit
        if candidate < upper:
            return candidate
        if upper.startswith(lower) and upper != lower and is_valid_position_key(upper):
            return lower + midpoint("", upper[len(lower):])
        logger.warning(
            "Corrupted position data between %r and %r; using timestamp suffix", before, after
        )
        return lower + timestamp_suffix(settings)
    if lower is not None:
        return lower + settings.digit
    if upper is not None:
        candidate = SMALLEST_INTEGER + timestamp_suffix(settings)
        if candidate < upper or not is_valid_position_key(upper):
            return candidate
        return generate_key_between(None, upper)
    return INTEGER_ZERO


def _check_fallback(key: str, before: Optional[str], after: Optional[str]) -> None:
    lower = before if is_valid_position_key(before) else None
    upper = after if is_valid_position_key(after) else None
    if upper is not None and _parses(before) and before >= upper:
        # inverted bounds: only the lower one can still be honoured
        upper = None
    if (lower is not None and key <= lower) or (upper is not None and key >= upper):
        logger.error(
            "Fallback position %r breaks order between %r and %r", key, before, after
        )
        raise FallbackOrderError(f"fallback key {key!r} not between {before!r} and {after!r}")


def _generate(before: Optional[str], after: Optional[str], where: str) -> str:
    try:
        return generate_key_between(before, after)
    except OrderKeyError as exc:
        logger.warning(
            "Fallback position generation (%s): before=%r after=%r: %s", where, before, after, exc
        )
    key = _fallback(before, after, get_settings())
    _check_fallback(key, before, after)
    return key


def generate_position_at_start(first_key: Optional[str]) -> str:
    """Return a key that sorts before ``first_key`` (``None`` for an empty list)."""
    return _generate(None, first_key, "start")


def generate_position_at_end(last_key: Optional[str]) -> str:
    """Return a key that sorts after ``last_key`` (``None`` for an empty list)."""
    return _generate(last_key, None, "end")


def generate_position_between(before_key: Optional[str], after_key: Optional[str]) -> str:
    """Return a key between two neighbours; either may be ``None`` for an open end."""
    return _generate(before_key, after_key, "between")


def generate_positions_between(
    start_key: Optional[str], end_key: Optional[str], count: int
) -> List[str]:
    """Return ``count`` ascending keys between ``start_key`` and ``end_key``."""
    try:
        return generate_n_keys_between(start_key, end_key, count)
    except OrderKeyError as exc:
        logger.warning(
            "Fallback position generation (%d keys): start=%r end=%r: %s",
            count,
            start_key,
            end_key,
            exc,
        )
    keys: List[str] = []
    prev = start_key
    for _ in range(count):
        prev = generate_position_between(prev, end_key)
        keys.append(prev)
    return keys
