"""Employee registration record (anagrafica dipendente) and CF-driven prefill.

Client companies submit one record per employee enrolled in a course edition.
Messages are in Italian because they are shown to portal users as-is.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portale.decoders.cadastral import CadastralRegistry
from portale.decoders.codice_fiscale import CF_LENGTH, decode, is_valid, normalize
from portale.formatters import parse_italian_date
from portale.schemas.codice_fiscale import Sex

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Form keys filled from the codice fiscale when left blank
PREFILL_FIELDS = ("data_nascita", "sesso", "luogo_nascita")


class EmployeeRecord(BaseModel):
    """Validated employee anagrafica."""

    model_config = ConfigDict(str_strip_whitespace=True)

    nome: str = Field(min_length=1, max_length=100)
    cognome: str = Field(min_length=1, max_length=100)
    codice_fiscale: str
    sesso: Sex
    data_nascita: date
    luogo_nascita: str = Field(min_length=1, max_length=100)
    email: str
    telefono: str | None = Field(default=None, max_length=30)
    cellulare: str | None = Field(default=None, max_length=30)
    indirizzo: str | None = Field(default=None, max_length=255)
    comune_residenza: str = Field(min_length=1, max_length=100)
    cap: str = Field(min_length=1, max_length=5)
    mansione: str | None = Field(default=None, max_length=100)
    note: str | None = Field(default=None, max_length=500)

    @field_validator("codice_fiscale")
    @classmethod
    def validate_codice_fiscale(cls, v: str) -> str:
        """Normalize, then require 16 characters and a correct check character."""
        cf = normalize(v)
        if len(cf) != CF_LENGTH:
            msg = "Il codice fiscale deve essere di 16 caratteri"
            raise ValueError(msg)
        if not is_valid(v):
            msg = "Codice Fiscale non valido"
            raise ValueError(msg)
        return cf

    @field_validator("sesso", mode="before")
    @classmethod
    def upper_sesso(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("data_nascita", mode="before")
    @classmethod
    def parse_data_nascita(cls, v: Any) -> Any:
        """Accept GG/MM/AAAA and ISO strings as well as date objects."""
        if isinstance(v, date):
            return v
        if v is None or (isinstance(v, str) and not v.strip()):
            msg = "Data di nascita obbligatoria"
            raise ValueError(msg)
        if isinstance(v, str):
            parsed = parse_italian_date(v)
            if parsed is None:
                msg = "Data non valida. Usa il formato GG/MM/AAAA"
                raise ValueError(msg)
            return parsed
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not v:
            msg = "Email obbligatoria"
            raise ValueError(msg)
        if not _EMAIL_PATTERN.match(v):
            msg = "Email non valida"
            raise ValueError(msg)
        return v

    @field_validator("telefono", "cellulare", "indirizzo", "mansione", "note", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def prefill_from_codice_fiscale(
    form: Mapping[str, Any],
    registry: CadastralRegistry | None,
    reference_year: int,
) -> dict[str, Any]:
    """Fill blank birth date, sex, and birthplace from the form's codice fiscale.

    Values the user already typed are never overwritten. A CF that does not
    decode leaves the form unchanged. The check character is not required to
    be correct, so a typo in the last letter still prefills the form.

    Args:
        form: Partial employee form (keys as in EmployeeRecord).
        registry: Cadastral registry for the birthplace label, or None to skip it.
        reference_year: Current year, for the CF century window.

    Returns:
        A new dict; the input mapping is not modified.
    """
    result = dict(form)
    decoded = decode(str(form.get("codice_fiscale") or ""), reference_year)
    if decoded is None:
        return result

    if _is_blank(result.get("data_nascita")):
        result["data_nascita"] = decoded.birth_date
    if _is_blank(result.get("sesso")):
        result["sesso"] = decoded.sex.value
    if _is_blank(result.get("luogo_nascita")) and registry is not None:
        label = registry.describe(decoded.cadastral_code)
        if label is not None:
            result["luogo_nascita"] = label

    return result
