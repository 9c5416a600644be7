"""Pydantic schemas for the upstream comuni-json dataset."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ComuneSource(BaseModel):
    """One record of comuni.json (matteocontrini/comuni-json). Extra keys are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    codice_catastale: str = Field(default="", alias="codiceCatastale")
    nome: str = ""
    sigla: str = ""  # province abbreviation
    cap: list[str] | str = Field(default_factory=list)

    @property
    def first_cap(self) -> str:
        """First postal code; large comuni list several."""
        if isinstance(self.cap, list):
            return self.cap[0] if self.cap else ""
        return self.cap
