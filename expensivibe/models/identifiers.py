"""
Identifier generation.

Identifiers are the current time in milliseconds (base-36) followed by a
random base-36 fragment. Unique within a process with overwhelming
probability; nothing is guaranteed across processes.
"""

import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_LENGTH = 11


def to_base36(value: int) -> str:
    """Render a non-negative integer in lowercase base-36."""
    if value < 0:
        raise ValueError("value must be non-negative")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a new locally-unique string identifier."""
    timestamp = to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_RANDOM_LENGTH))
    return timestamp + suffix
