"""Shared fixtures: a small cadastral registry written to a temp file."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from portale.decoders.cadastral import CadastralRegistry

COMUNI = {
    "F205": {"nome": "Milano", "provincia": "MI", "cap": "20121"},
    "F206": {"nome": "Milazzo", "provincia": "ME", "cap": "98057"},
    "C895": {"nome": "Cologno Monzese", "provincia": "MI", "cap": "20093"},
    "F704": {"nome": "Monza", "provincia": "MB", "cap": "20900"},
    "H501": {"nome": "Roma", "provincia": "RM", "cap": "00118"},
    "I690": {"nome": "Sesto San Giovanni", "provincia": "MI", "cap": "20099"},
    "X001": {"nome": "Senza Provincia", "provincia": "", "cap": ""},
}


@pytest.fixture()
def comuni_file(tmp_path: Path) -> Path:
    path = tmp_path / "codici_catastali.json"
    path.write_text(json.dumps(COMUNI), encoding="utf-8")
    return path


@pytest.fixture()
def registry(comuni_file: Path) -> CadastralRegistry:
    return CadastralRegistry.from_file(comuni_file)
