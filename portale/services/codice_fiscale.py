"""Codice fiscale analysis: codec, cadastral registry and clock combined.

The codec is pure and takes the reference year as an argument; this module
is where "today" is read and where birthplace enrichment happens.
"""

from __future__ import annotations

import logging
from datetime import date

from portale.decoders.cadastral import CadastralRegistry, load_registry
from portale.decoders.codice_fiscale import decode, is_valid, mask, normalize
from portale.schemas.codice_fiscale import CfAnalysis

logger = logging.getLogger(__name__)


def analyze_codice_fiscale(
    raw: str,
    registry: CadastralRegistry | None = None,
    today: date | None = None,
) -> CfAnalysis:
    """Validate and decode a codice fiscale, resolving the birthplace.

    Args:
        raw: Codice fiscale as typed by the user.
        registry: Cadastral registry; defaults to the process-wide one.
        today: Reference date for the century window; defaults to today.
    """
    cf = normalize(raw)
    if registry is None:
        registry = load_registry()
    if today is None:
        today = date.today()

    valid = is_valid(raw)
    decoded = decode(raw, today.year)

    birthplace = None
    birthplace_label = None
    if decoded is not None:
        birthplace = registry.lookup(decoded.cadastral_code)
        if birthplace is not None:
            birthplace_label = birthplace.label

    logger.debug(
        "CF %s analyzed: valid=%s decoded=%s birthplace_found=%s",
        mask(cf), valid, decoded is not None, birthplace is not None,
    )

    return CfAnalysis(
        codice_fiscale=cf,
        valid=valid,
        decoded=decoded,
        birthplace=birthplace,
        birthplace_label=birthplace_label,
    )
