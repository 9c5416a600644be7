"""Deterministic identifier decoders for codice fiscale, partita IVA and cadastral codes."""

from portale.decoders.cadastral import CadastralRegistry, load_registry
from portale.decoders.codice_fiscale import compute_check_character, decode, is_valid, normalize
from portale.decoders.partita_iva import is_valid_piva, normalize_piva

__all__ = [
    "CadastralRegistry",
    "compute_check_character",
    "decode",
    "is_valid",
    "is_valid_piva",
    "load_registry",
    "normalize",
    "normalize_piva",
]
