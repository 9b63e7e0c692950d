from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator

from .keys import DIGITS, MIN_DIGIT

ENV_PREFIX = "LEXPOS_"


class FallbackSettings(BaseModel):
    """Tunables for keys produced when normal generation fails."""

    digit: str = Field(default="V", min_length=1, max_length=1)
    timestamp_digits: int = Field(default=4, ge=1, le=13)
    random_digits: int = Field(default=2, ge=1, le=8)

    @field_validator("digit")
    @classmethod
    def _digit_in_alphabet(cls, value: str) -> str:
        if value not in DIGITS or value == MIN_DIGIT:
            raise ValueError(f"fallback digit must be a non-zero order key digit, got {value!r}")
        return value

    @classmethod
    def from_env(cls) -> "FallbackSettings":
        values = {}
        digit = os.environ.get(f"{ENV_PREFIX}FALLBACK_DIGIT")
        if digit:
            values["digit"] = digit
        timestamp_digits = os.environ.get(f"{ENV_PREFIX}FALLBACK_TIMESTAMP_DIGITS")
        if timestamp_digits:
            values["timestamp_digits"] = int(timestamp_digits)
        random_digits = os.environ.get(f"{ENV_PREFIX}FALLBACK_RANDOM_DIGITS")
        if random_digits:
            values["random_digits"] = int(random_digits)
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> FallbackSettings:
    return FallbackSettings.from_env()


def reset_settings() -> None:
    get_settings.cache_clear()
