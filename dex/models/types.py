"""Shared type definitions for API models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from dex.safe_int import U64_MAX


def validate_uint64(value: Any) -> int:
    """Validate that a value is a u64, given as an int or decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        The value as an int

    Raises:
        ValueError: If value is not a non-negative integer within u64 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint64 must be string or int, got bool")

    if isinstance(value, str):
        if not value.isdigit():
            raise ValueError(f"Uint64 must be a decimal integer string: '{value}'")
        value = int(value)
    elif not isinstance(value, int):
        raise ValueError(f"Uint64 must be string or int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"Uint64 cannot be negative: {value}")
    if value > U64_MAX:
        raise ValueError(f"Uint64 overflow: {value} > 2^64-1")
    return value


# 64-bit unsigned integer, accepted as int or decimal string
Uint64 = Annotated[
    int,
    BeforeValidator(validate_uint64),
    Field(description="64-bit unsigned integer"),
]

# Canonical asset name
AssetName = Annotated[str, Field(min_length=1, max_length=256, pattern=r"^[A-Za-z0-9_:.]+$")]

# Account identifier
AccountId = Annotated[str, Field(min_length=1, max_length=128)]
