"""Pydantic schemas for the fiscal code codec and the cadastral registry.

Pure data classes, no I/O and no clock.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel


class Sex(str, Enum):
    """Sex as encoded in the day field of a codice fiscale."""

    MALE = "M"
    FEMALE = "F"


# ---------------------------------------------------------------------------
# Codec output
# ---------------------------------------------------------------------------


class DecodedFiscalCode(BaseModel):
    """Fields extracted from a 16-character codice fiscale."""

    birth_date: str          # DD/MM/YYYY, zero padded
    sex: Sex
    cadastral_code: str      # Belfiore code, e.g. "H501"

    def as_date(self) -> date | None:
        """Birth date as a date, or None if day/month is not a real calendar day."""
        try:
            return datetime.strptime(self.birth_date, "%d/%m/%Y").date()
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Cadastral registry
# ---------------------------------------------------------------------------


class Comune(BaseModel):
    """Italian municipality as stored in the cadastral registry."""

    nome: str
    provincia: str = ""      # sigla, e.g. "RM"
    cap: str = ""            # first postal code of the comune

    @property
    def label(self) -> str:
        """Display label: "Roma (RM)", or just the name without a province."""
        if self.provincia:
            return f"{self.nome} ({self.provincia})"
        return self.nome


class ComuneMatch(Comune):
    """A registry entry together with its cadastral code."""

    codice: str


# ---------------------------------------------------------------------------
# Service output
# ---------------------------------------------------------------------------


class CfAnalysis(BaseModel):
    """Checksum validity plus decoded data for one codice fiscale.

    ``valid`` and ``decoded`` are independent: a code with a wrong check
    character can still decode to plausible personal data.
    """

    codice_fiscale: str
    valid: bool
    decoded: DecodedFiscalCode | None = None
    birthplace: Comune | None = None
    birthplace_label: str | None = None
