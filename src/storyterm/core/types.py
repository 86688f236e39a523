"""Shared type aliases and integer helpers for the core and domain layers."""
from typing import Literal

Severity = Literal["ERROR", "WARNING"]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT64_SPAN = 2**64


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range (two's complement)."""
    return (value - INT64_MIN) % _INT64_SPAN + INT64_MIN


def is_int64(value: int) -> bool:
    """Return True when value fits in a signed 64-bit integer."""
    return INT64_MIN <= value <= INT64_MAX


__all__ = ["INT64_MAX", "INT64_MIN", "Severity", "is_int64", "wrap_int64"]
