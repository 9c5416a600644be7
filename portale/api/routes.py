"""JSON API for identifier validation and employee form prefill.

Used by the employee registration forms: CF validation/decoding on blur,
birthplace autocomplete, partita IVA check on client companies.
"""
# ruff: noqa: B008  Depends() in function defaults is standard FastAPI

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from portale.decoders.cadastral import CadastralRegistry, load_registry
from portale.decoders.partita_iva import is_valid_piva, normalize_piva
from portale.schemas.codice_fiscale import CfAnalysis, ComuneMatch
from portale.schemas.employee import EmployeeRecord, prefill_from_codice_fiscale
from portale.services.codice_fiscale import analyze_codice_fiscale

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["identificativi"])


# ── Dependencies ─────────────────────────────────────────────────────


def get_registry() -> CadastralRegistry:
    """Process-wide cadastral registry."""
    return load_registry()


def get_today() -> date:
    """Reference date for the CF century window."""
    return date.today()


# ── Codice fiscale ───────────────────────────────────────────────────


@router.get("/codice-fiscale/{cf}", response_model=CfAnalysis)
async def codice_fiscale_detail(
    cf: str,
    registry: CadastralRegistry = Depends(get_registry),
    today: date = Depends(get_today),
) -> CfAnalysis:
    """Checksum validity, decoded birth data, and birthplace for a CF."""
    return analyze_codice_fiscale(cf, registry=registry, today=today)


# ── Partita IVA ──────────────────────────────────────────────────────


@router.get("/partita-iva/{piva}")
async def partita_iva_detail(piva: str) -> dict[str, Any]:
    """Check-digit validation of a partita IVA."""
    return {"partita_iva": normalize_piva(piva), "valid": is_valid_piva(piva)}


# ── Comuni ───────────────────────────────────────────────────────────


@router.get("/comuni", response_model=list[ComuneMatch])
async def comuni_search(
    q: str = Query("", max_length=100),
    limit: int | None = Query(None, ge=1, le=100),
    registry: CadastralRegistry = Depends(get_registry),
) -> list[ComuneMatch]:
    """Birthplace autocomplete: prefix matches first, then substring matches."""
    return registry.search(q, limit=limit)


@router.get("/comuni/{codice}", response_model=ComuneMatch)
async def comune_detail(
    codice: str,
    registry: CadastralRegistry = Depends(get_registry),
) -> ComuneMatch:
    """Comune for a cadastral code."""
    comune = registry.lookup(codice)
    if comune is None:
        logger.debug("Unknown cadastral code requested: %s", codice)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Codice catastale non trovato",
        )
    return ComuneMatch(codice=codice.strip().upper(), **comune.model_dump())


# ── Dipendenti ───────────────────────────────────────────────────────


@router.post("/dipendenti/prefill")
async def dipendente_prefill(
    form: dict[str, Any] = Body(...),
    registry: CadastralRegistry = Depends(get_registry),
    today: date = Depends(get_today),
) -> dict[str, Any]:
    """Fill blank birth date, sex, and birthplace from the form's CF."""
    if not str(form.get("codice_fiscale") or "").strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Codice fiscale obbligatorio",
        )
    return prefill_from_codice_fiscale(form, registry, today.year)


@router.post("/dipendenti/validate", response_model=EmployeeRecord)
async def dipendente_validate(record: EmployeeRecord) -> EmployeeRecord:
    """Validate an employee anagrafica; errors come back as 422."""
    return record
