"""Italian locale date parsing and formatting (GG/MM/AAAA)."""

from __future__ import annotations

import re
from datetime import date, datetime

DATE_FORMAT_IT = "%d/%m/%Y"

_IT_DATE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def parse_italian_date(value: str | None) -> date | None:
    """Parse "DD/MM/YYYY" (or "D/M/YYYY", or ISO "YYYY-MM-DD...") into a date."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    if _IT_DATE.match(value):
        try:
            return datetime.strptime(value, DATE_FORMAT_IT).date()
        except ValueError:
            return None

    if _ISO_DATE.match(value):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None

    return None


def format_italian_date(value: date | datetime | None) -> str:
    """Format as DD/MM/YYYY; empty string for None."""
    if value is None:
        return ""
    return value.strftime(DATE_FORMAT_IT)


def is_valid_italian_date(value: str) -> bool:
    """True for a real calendar date written as D/M/YYYY or DD/MM/YYYY."""
    if not value or not _IT_DATE.match(value):
        return False
    return parse_italian_date(value) is not None
