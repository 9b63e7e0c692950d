"""Lexicographic position keys for ordered collections."""

from .errors import FallbackOrderError, OrderKeyError
from .keys import INTEGER_ZERO, generate_key_between, generate_n_keys_between
from .positions import (
    compare_position_keys,
    generate_position_at_end,
    generate_position_at_start,
    generate_position_between,
    generate_positions_between,
    is_valid_position_key,
)

__version__ = "1.0.0"

__all__ = [
    "FallbackOrderError",
    "INTEGER_ZERO",
    "OrderKeyError",
    "compare_position_keys",
    "generate_key_between",
    "generate_n_keys_between",
    "generate_position_at_end",
    "generate_position_at_start",
    "generate_position_between",
    "generate_positions_between",
    "is_valid_position_key",
]
