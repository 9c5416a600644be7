"""Comuni dataset sync, the source of the cadastral registry."""

from portale.integrations.comuni.client import ComuniClient, ComuniDownloadError
from portale.integrations.comuni.service import build_cadastral_map, refresh_cadastral_data

__all__ = ["ComuniClient", "ComuniDownloadError", "build_cadastral_map", "refresh_cadastral_data"]
