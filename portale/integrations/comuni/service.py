"""Cadastral registry regeneration from the upstream comuni dataset."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from portale.config import settings
from portale.decoders.cadastral import load_registry
from portale.integrations.comuni.client import ComuniClient
from portale.integrations.comuni.schemas import ComuneSource
from portale.schemas.codice_fiscale import Comune

logger = logging.getLogger(__name__)


def build_cadastral_map(sources: Iterable[ComuneSource]) -> dict[str, Comune]:
    """Key upstream records by cadastral code; records without a code are skipped."""
    result: dict[str, Comune] = {}
    for source in sources:
        codice = source.codice_catastale.strip().upper()
        if not codice:
            continue
        result[codice] = Comune(nome=source.nome, provincia=source.sigla, cap=source.first_cap)
    return result


async def refresh_cadastral_data(
    path: Path | None = None,
    client: ComuniClient | None = None,
) -> int:
    """Regenerate the cadastral data file and return the number of comuni written.

    Steps:
    1. Download the upstream dataset
    2. Build the code → comune map
    3. Write JSON to a temporary sibling and move it over the old file
    4. Clear the cached registry so the next lookup reloads it
    """
    path = path or settings.cadastral.data_path
    client = client or ComuniClient()

    sources = await client.fetch()
    mapping = build_cadastral_map(sources)

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {codice: comune.model_dump() for codice, comune in mapping.items()}
    # Readers see either the old file or the complete new one
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise

    load_registry.cache_clear()
    logger.info("Wrote %d comuni to %s", len(mapping), path)
    return len(mapping)
