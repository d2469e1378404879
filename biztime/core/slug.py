from __future__ import annotations

import re


def make_code(value: str, max_len: int = 60) -> str:
    """
    Derive an identifier-safe code from a display name.

    "Apple Computer, Inc." -> "apple-computer-inc"

    Returns "" when the name holds no letters or digits.
    """
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    value = value.strip("-")
    if len(value) > max_len:
        value = value[:max_len].rstrip("-")
    return value
