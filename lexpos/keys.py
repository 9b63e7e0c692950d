"""Fractional order keys over a base-62 alphabet.

A key is an integer part followed by an optional fractional tail. The integer
part is self-delimiting: its first character (the head) fixes its length, so
``a0 < a1 < ... < az < b10 < ...`` and, mirrored below zero,
``... < Zy < Zz < a0``. The tail lets any number of keys fit between two
integer-equal keys. Plain string comparison orders keys correctly because the
alphabet below is already in ASCII order.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import (
    IntegerOverflow,
    IntegerUnderflow,
    InvalidHead,
    InvertedBounds,
    MalformedKey,
    NonCanonicalTrailingZero,
    ReservedSentinel,
)

DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
A2I = {ch: i for i, ch in enumerate(DIGITS)}
I2A = {i: ch for i, ch in enumerate(DIGITS)}
BASE = len(DIGITS)
MIN_DIGIT = DIGITS[0]
MAX_DIGIT = DIGITS[-1]

SMALLEST_INTEGER = "A" + MIN_DIGIT * 26
INTEGER_ZERO = "a0"


def _digit(ch: str, key: str) -> int:
    try:
        return A2I[ch]
    except KeyError:
        raise MalformedKey(f"invalid digit {ch!r} in order key {key!r}", key=key) from None


def integer_length(head: str) -> int:
    """Return the length of an integer part starting with ``head``."""
    if "a" <= head <= "z":
        return ord(head) - ord("a") + 2
    if "A" <= head <= "Z":
        return ord("Z") - ord(head) + 2
    raise InvalidHead(f"invalid order key head: {head!r}", key=head)


def split_integer_part(key: str) -> Tuple[str, str]:
    """Split ``key`` into ``(integer_part, fractional_tail)``."""
    if not key:
        raise MalformedKey("empty order key", key=key)
    length = integer_length(key[0])
    if length > len(key):
        raise MalformedKey(f"invalid order key: {key!r}", key=key)
    return key[:length], key[length:]


def integer_part(key: str) -> str:
    return split_integer_part(key)[0]


def validate_order_key(key: str) -> None:
    """Raise an :class:`OrderKeyError` unless ``key`` is a canonical order key."""
    if key == SMALLEST_INTEGER:
        raise ReservedSentinel(f"reserved order key: {key!r}", key=key)
    _, tail = split_integer_part(key)
    for ch in key:
        _digit(ch, key)
    if tail.endswith(MIN_DIGIT):
        raise NonCanonicalTrailingZero(f"trailing zero in order key: {key!r}", key=key)


def increment_integer(x: str) -> str:
    """Return the integer part that follows ``x``.

    Raises :class:`IntegerOverflow` when ``x`` is the largest ``z`` integer.
    """
    head = x[0]
    digs = list(x[1:])
    carry = True
    i = len(digs) - 1
    while carry and i >= 0:
        d = _digit(digs[i], x) + 1
        if d == BASE:
            digs[i] = MIN_DIGIT
        else:
            digs[i] = I2A[d]
            carry = False
        i -= 1
    if not carry:
        return head + "".join(digs)
    if head == "Z":
        return INTEGER_ZERO
    if head == "z":
        raise IntegerOverflow(f"cannot increment {x!r}", key=x)
    h = chr(ord(head) + 1)
    if h > "a":
        digs.append(MIN_DIGIT)
    else:
        digs.pop(0)
    return h + "".join(digs)


def decrement_integer(x: str) -> str:
    """Return the integer part that precedes ``x``.

    Raises :class:`IntegerUnderflow` when ``x`` is the smallest ``A`` integer.
    """
    head = x[0]
    digs = list(x[1:])
    borrow = True
    i = len(digs) - 1
    while borrow and i >= 0:
        d = _digit(digs[i], x) - 1
        if d == -1:
            digs[i] = MAX_DIGIT
        else:
            digs[i] = I2A[d]
            borrow = False
        i -= 1
    if not borrow:
        return head + "".join(digs)
    if head == "a":
        return "Z" + MAX_DIGIT
    if head == "A":
        raise IntegerUnderflow(f"cannot decrement {x!r}", key=x)
    h = chr(ord(head) - 1)
    if h < "Z":
        digs.append(MAX_DIGIT)
    else:
        digs.pop(0)
    return h + "".join(digs)


def midpoint(lo: str, hi: Optional[str] = None) -> str:
    """Return a fractional tail strictly between ``lo`` and ``hi``.

    ``hi`` may be ``None`` to indicate no upper bound. Neither tail may end
    in ``"0"``, and the result never does either.
    """
    if hi is not None and lo >= hi:
        raise InvertedBounds(lo, hi)
    if lo.endswith(MIN_DIGIT) or (hi is not None and hi.endswith(MIN_DIGIT)):
        raise NonCanonicalTrailingZero(
            f"trailing zero in fractional tail: {lo!r}, {hi!r}", key=lo
        )
    out: List[str] = []
    while True:
        if hi is not None:
            # copy the common prefix, reading a missing lo digit as "0"
            n = 0
            while (lo[n] if n < len(lo) else MIN_DIGIT) == hi[n]:
                n += 1
            out.append(hi[:n])
            lo, hi = lo[n:], hi[n:]
        lo_digit = _digit(lo[0], lo) if lo else 0
        hi_digit = _digit(hi[0], hi) if hi is not None else BASE
        if hi_digit - lo_digit > 1:
            out.append(I2A[(lo_digit + hi_digit + 1) // 2])
            return "".join(out)
        if hi is not None and len(hi) > 1:
            out.append(hi[0])
            return "".join(out)
        out.append(I2A[lo_digit])
        lo = lo[1:]
        hi = None


def generate_key_between(a: Optional[str], b: Optional[str]) -> str:
    """Return a key strictly between ``a`` and ``b``.

    Either bound may be ``None`` for an open end. Raises an
    :class:`OrderKeyError` subclass if a bound is not a canonical key or if
    ``a >= b``.
    """
    if a is not None:
        validate_order_key(a)
    if b is not None:
        validate_order_key(b)
    if a is not None and b is not None and a >= b:
        raise InvertedBounds(a, b)

    if a is None:
        if b is None:
            return INTEGER_ZERO
        ib, fb = split_integer_part(b)
        if ib == SMALLEST_INTEGER:
            return ib + midpoint("", fb)
        if fb:
            return ib
        res = decrement_integer(ib)
        if res == SMALLEST_INTEGER:
            return res + midpoint("", None)
        return res

    ia, fa = split_integer_part(a)
    if b is None:
        try:
            return increment_integer(ia)
        except IntegerOverflow:
            return ia + midpoint(fa, None)

    ib, fb = split_integer_part(b)
    if ia == ib:
        return ia + midpoint(fa, fb)
    try:
        i = increment_integer(ia)
    except IntegerOverflow:
        i = None
    if i is not None and i < b:
        return i
    return ia + midpoint(fa, None)


def generate_n_keys_between(a: Optional[str], b: Optional[str], n: int) -> List[str]:
    """Return ``n`` ascending keys strictly between ``a`` and ``b``.

    With both bounds present the range is bisected so the keys stay short;
    with an open end keys are generated one after another away from the
    closed bound.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if n == 0:
        return []
    if n == 1:
        return [generate_key_between(a, b)]
    if b is None:
        c = generate_key_between(a, b)
        result = [c]
        for _ in range(n - 1):
            c = generate_key_between(c, b)
            result.append(c)
        return result
    if a is None:
        c = generate_key_between(a, b)
        result = [c]
        for _ in range(n - 1):
            c = generate_key_between(a, c)
            result.append(c)
        result.reverse()
        return result
    mid = n // 2
    c = generate_key_between(a, b)
    return [
        *generate_n_keys_between(a, c, mid),
        c,
        *generate_n_keys_between(c, b, n - mid - 1),
    ]


__all__ = [
    "BASE",
    "DIGITS",
    "INTEGER_ZERO",
    "SMALLEST_INTEGER",
    "decrement_integer",
    "generate_key_between",
    "generate_n_keys_between",
    "increment_integer",
    "integer_length",
    "integer_part",
    "midpoint",
    "split_integer_part",
    "validate_order_key",
]
