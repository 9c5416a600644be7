"""Italian Codice Fiscale (CF) validator and decoder.

Pure Python with no I/O and no clock. Validates the check character and extracts
birth date, sex, and birthplace code from the 16-character Italian tax code.

CF format: AAABBB 00C00 D000 E
  - AAA:  surname consonants (then vowels, then X)
  - BBB:  name consonants (then vowels, then X)
  - 00:   year of birth (last 2 digits)
  - C:    month of birth (letter A–T, non-sequential)
  - 00:   day of birth (1–31 male, 41–71 female)
  - D000: birthplace code (codice catastale / Belfiore)
  - E:    check character

Reference: DPR 605/1973, Decreto MEF 12/03/1974.
"""

from __future__ import annotations

import re
import string
from types import MappingProxyType

from portale.schemas.codice_fiscale import DecodedFiscalCode, Sex

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CF_LENGTH = 16

_CHARSET_PATTERN = re.compile(r"^[A-Z0-9]{16}$")
_PREFIX_PATTERN = re.compile(r"^[A-Z0-9]{15}$")
_CADASTRAL_PATTERN = re.compile(r"^[A-Z][0-9]{3}$")
_TWO_DIGITS = re.compile(r"^[0-9]{2}$")
_WHITESPACE = re.compile(r"\s+")

MONTH_MAP = MappingProxyType({
    "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "H": 6,
    "L": 7, "M": 8, "P": 9, "R": 10, "S": 11, "T": 12,
})

FEMALE_DAY_OFFSET = 40

# Checksum tables per Decreto MEF 12/03/1974. Not derivable arithmetically.
ODD_MAP = MappingProxyType({
    "0": 1, "1": 0, "2": 5, "3": 7, "4": 9, "5": 13, "6": 15,
    "7": 17, "8": 19, "9": 21,
    "A": 1, "B": 0, "C": 5, "D": 7, "E": 9, "F": 13, "G": 15,
    "H": 17, "I": 19, "J": 21, "K": 2, "L": 4, "M": 18, "N": 20,
    "O": 11, "P": 3, "Q": 6, "R": 8, "S": 12, "T": 14, "U": 16,
    "V": 10, "W": 22, "X": 25, "Y": 24, "Z": 23,
})

EVEN_MAP = MappingProxyType({
    "0": 0, "1": 1, "2": 2, "3": 3, "4": 4, "5": 5, "6": 6,
    "7": 7, "8": 8, "9": 9,
    "A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5, "G": 6,
    "H": 7, "I": 8, "J": 9, "K": 10, "L": 11, "M": 12, "N": 13,
    "O": 14, "P": 15, "Q": 16, "R": 17, "S": 18, "T": 19, "U": 20,
    "V": 21, "W": 22, "X": 23, "Y": 24, "Z": 25,
})

CHECK_CHARS = string.ascii_uppercase


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize(raw: str) -> str:
    """Remove every whitespace character and uppercase."""
    return _WHITESPACE.sub("", raw).upper()


def mask(raw: str) -> str:
    """Log-safe form of a CF: keeps the name code, hides the personal data."""
    cf = normalize(raw)
    return cf[:6] + "X" * max(len(cf) - 6, 0)


def _normalize_ascii(raw: str) -> str | None:
    # Uppercasing maps some non-ASCII letters onto A-Z ("ı" -> "I", "ß" -> "SS")
    stripped = _WHITESPACE.sub("", raw)
    if not stripped.isascii():
        return None
    return stripped.upper()


def _check_character(prefix: str) -> str:
    total = 0
    for i, char in enumerate(prefix):
        if i % 2 == 0:  # odd position (1-indexed)
            total += ODD_MAP[char]
        else:  # even position (1-indexed)
            total += EVEN_MAP[char]
    return CHECK_CHARS[total % 26]


def compute_check_character(prefix: str) -> str:
    """Compute the check character for the first 15 characters of a CF.

    Raises:
        ValueError: if the normalized prefix is not 15 characters in [A-Z0-9].
    """
    cf = _normalize_ascii(prefix)
    if cf is None or not _PREFIX_PATTERN.match(cf):
        msg = f"Expected 15 alphanumeric characters, got {len(prefix)}: {mask(prefix)!r}"
        raise ValueError(msg)
    return _check_character(cf)


def is_valid(raw: str) -> bool:
    """Validate length, charset, and the check character (position 16)."""
    cf = _normalize_ascii(raw)
    if cf is None or not _CHARSET_PATTERN.match(cf):
        return False
    return cf[15] == _check_character(cf[:15])


def decode(raw: str, reference_year: int) -> DecodedFiscalCode | None:
    """Decode birth date, sex, and birthplace code from a codice fiscale.

    The check character is not verified here; call :func:`is_valid` for that.

    Args:
        raw: The codice fiscale, any case, whitespace allowed.
        reference_year: Current year, used to pick the century. A two-digit
            year greater than ``reference_year % 100`` is read as 19xx,
            otherwise as 20xx.

    Returns:
        DecodedFiscalCode, or None when any field is malformed.
    """
    cf = _normalize_ascii(raw)
    if cf is None or len(cf) != CF_LENGTH:
        return None

    # Letters in numeric fields (omocodia) are not decoded
    if not (_TWO_DIGITS.match(cf[6:8]) and _TWO_DIGITS.match(cf[9:11])):
        return None
    year_part = int(cf[6:8])
    day = int(cf[9:11])

    month = MONTH_MAP.get(cf[8])
    if month is None:
        return None

    if day < 1:
        return None

    sex = Sex.MALE
    if day > FEMALE_DAY_OFFSET:
        sex = Sex.FEMALE
        day -= FEMALE_DAY_OFFSET
    if day < 1 or day > 31:
        return None

    if year_part > reference_year % 100:
        year = 1900 + year_part
    else:
        year = 2000 + year_part

    cadastral_code = cf[11:15]
    if not _CADASTRAL_PATTERN.match(cadastral_code):
        return None

    return DecodedFiscalCode(
        birth_date=f"{day:02d}/{month:02d}/{year}",
        sex=sex,
        cadastral_code=cadastral_code,
    )
