from __future__ import annotations

from typing import Optional


class OrderKeyError(ValueError):
    """Base class for inputs that violate the order-key algebra."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class InvalidHead(OrderKeyError):
    pass


class MalformedKey(OrderKeyError):
    pass


class ReservedSentinel(OrderKeyError):
    pass


class NonCanonicalTrailingZero(OrderKeyError):
    pass


class InvertedBounds(OrderKeyError):
    def __init__(self, lower: str, upper: str) -> None:
        super().__init__(f"{lower!r} >= {upper!r}", key=lower)
        self.lower = lower
        self.upper = upper


class IntegerOverflow(OrderKeyError):
    """No larger integer part exists (head ``z`` carried out)."""


class IntegerUnderflow(OrderKeyError):
    """No smaller integer part exists (head ``A`` borrowed out)."""


class FallbackOrderError(RuntimeError):
    """The degraded-mode heuristic broke ordering against a well-formed bound.

    This is an internal bug, not a data problem, and is never recovered from.
    """
