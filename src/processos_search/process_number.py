"""CNJ process number mask: NNNNNNN-DD.AAAA.J.TR.OOOO (e.g. 5000918-41.2021.8.13.0487)."""

from __future__ import annotations

import re

PROCESS_NUMBER_PATTERN = re.compile(r"^\d{7}-\d{2}\.\d{4}\.\d\.\d{2}\.\d{4}$")
PROCESS_NUMBER_LENGTH = 25
MAX_DIGITS = 20

# (start, end, separator placed before the group)
_GROUPS = [(0, 7, ""), (7, 9, "-"), (9, 13, "."), (13, 14, "."), (14, 16, "."), (16, 20, ".")]


def apply_process_number_mask(value: str) -> str:
    digits = re.sub(r"\D", "", value)[:MAX_DIGITS]
    masked = ""
    for start, end, sep in _GROUPS:
        if len(digits) <= start:
            break
        masked += sep + digits[start:end]
    return masked


def is_complete_process_number(value: str) -> bool:
    value = value.strip()
    if not value:
        return False
    return bool(PROCESS_NUMBER_PATTERN.fullmatch(value))


def is_valid_process_number(value: str) -> bool:
    """Empty input is valid (no filter); anything else must match the full pattern."""
    value = value.strip()
    if not value:
        return True
    return bool(PROCESS_NUMBER_PATTERN.fullmatch(value))
