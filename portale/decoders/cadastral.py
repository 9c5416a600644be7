"""Cadastral code (codice catastale / Belfiore) → comune registry.

Loads the mapping from data/codici_catastali.json, a flat object keyed by
cadastral code:

    {"H501": {"nome": "Roma", "provincia": "RM", "cap": "00118"}, ...}

The file is regenerated from the public comuni dataset by
``python -m portale.integrations.comuni``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from portale.config import settings
from portale.schemas.codice_fiscale import Comune, ComuneMatch

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class CadastralDataError(Exception):
    """The cadastral data file exists but cannot be parsed."""


class CadastralRegistry:
    """Read-only lookup over the cadastral code table."""

    def __init__(self, entries: Mapping[str, Comune]) -> None:
        self._entries: dict[str, Comune] = {
            code.strip().upper(): comune for code, comune in entries.items()
        }

    @classmethod
    def from_file(cls, path: Path) -> CadastralRegistry:
        """Load a registry from a JSON file. A missing file gives an empty registry."""
        if not path.exists():
            logger.warning("Cadastral data file not found: %s (birthplace lookup disabled)", path)
            return cls({})

        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
            entries = {code: Comune.model_validate(info) for code, info in raw.items()}
        except (UnicodeDecodeError, json.JSONDecodeError, AttributeError, ValidationError) as exc:
            msg = f"Invalid cadastral data file {path}: {exc}"
            raise CadastralDataError(msg) from exc

        logger.info("Loaded %d cadastral codes from %s", len(entries), path)
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, codice: object) -> bool:
        return isinstance(codice, str) and codice.strip().upper() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def lookup(self, codice: str) -> Comune | None:
        """Return the comune for a cadastral code, or None if unknown."""
        return self._entries.get(codice.strip().upper())

    def describe(self, codice: str) -> str | None:
        """Birthplace label for a cadastral code, e.g. "Roma (RM)"."""
        comune = self.lookup(codice)
        if comune is None:
            return None
        return comune.label

    def search(self, query: str, limit: int | None = None) -> list[ComuneMatch]:
        """Find comuni by name, case-insensitive.

        Names starting with the query come first (registry order), then names
        that merely contain it. Queries shorter than two characters return
        nothing.
        """
        if limit is None:
            limit = settings.cadastral.search_limit
        q = query.strip().lower()
        if len(q) < MIN_QUERY_LENGTH or limit < 1:
            return []

        results: list[ComuneMatch] = []
        for codice, comune in self._entries.items():
            if comune.nome.lower().startswith(q):
                results.append(ComuneMatch(codice=codice, **comune.model_dump()))
                if len(results) >= limit:
                    return results

        for codice, comune in self._entries.items():
            name = comune.nome.lower()
            if not name.startswith(q) and q in name:
                results.append(ComuneMatch(codice=codice, **comune.model_dump()))
                if len(results) >= limit:
                    break

        return results


# ---------------------------------------------------------------------------
# Process-wide registry (cached)
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def load_registry() -> CadastralRegistry:
    """Load the configured cadastral registry once per process."""
    return CadastralRegistry.from_file(settings.cadastral.data_path)
