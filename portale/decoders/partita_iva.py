"""Italian Partita IVA (VAT number) check-digit validation.

11 digits: 7 taxpayer digits, 3 office digits, 1 check digit (Luhn variant).
"""

from __future__ import annotations

import re

_PIVA_PATTERN = re.compile(r"^[0-9]{11}$")
_WHITESPACE = re.compile(r"\s+")


def normalize_piva(raw: str) -> str:
    """Remove whitespace and an optional leading "IT" country prefix."""
    piva = _WHITESPACE.sub("", raw).upper()
    if piva.startswith("IT"):
        piva = piva[2:]
    return piva


def is_valid_piva(raw: str) -> bool:
    """Validate the check digit (11th) of a partita IVA."""
    piva = normalize_piva(raw)
    if not _PIVA_PATTERN.match(piva):
        return False

    digits = [int(d) for d in piva]
    total = 0
    for i in range(10):
        if i % 2 == 0:
            total += digits[i]
        else:
            doubled = digits[i] * 2
            total += doubled - 9 if doubled > 9 else doubled

    return (10 - total % 10) % 10 == digits[10]
