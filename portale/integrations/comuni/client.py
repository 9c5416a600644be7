"""Async httpx client for the public comuni-json dataset."""

from __future__ import annotations

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from portale.config import settings
from portale.integrations.comuni.schemas import ComuneSource

logger = logging.getLogger(__name__)

_SOURCES = TypeAdapter(list[ComuneSource])


class ComuniDownloadError(Exception):
    """The comuni dataset could not be downloaded or parsed."""


class ComuniClient:
    """Thin async wrapper around a GET of the comuni.json file.

    Unlike lookups on the request path, a failed download must not be
    ignored: the registry would silently shrink.
    """

    def __init__(self, source_url: str | None = None, timeout: float | None = None) -> None:
        self._source_url = source_url or settings.cadastral.source_url
        self._timeout = httpx.Timeout(timeout or settings.cadastral.fetch_timeout, connect=5.0)

    async def fetch(self) -> list[ComuneSource]:
        """Download and parse the dataset."""
        logger.info("Downloading comuni dataset from %s", self._source_url)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._source_url)
                response.raise_for_status()
                payload = response.json()

        except httpx.TimeoutException as exc:
            logger.error("Comuni dataset download timed out")
            msg = f"Download fallito: timeout ({self._source_url})"
            raise ComuniDownloadError(msg) from exc

        except httpx.HTTPStatusError as exc:
            logger.error("Comuni dataset download HTTP error %s", exc.response.status_code)
            msg = f"Download fallito: {exc.response.status_code}"
            raise ComuniDownloadError(msg) from exc

        except httpx.HTTPError as exc:
            logger.error("Comuni dataset download failed: %s", exc)
            msg = f"Download fallito: {exc}"
            raise ComuniDownloadError(msg) from exc

        except ValueError as exc:
            msg = "Formato dataset comuni non valido: risposta non JSON"
            raise ComuniDownloadError(msg) from exc

        try:
            return _SOURCES.validate_python(payload)
        except ValidationError as exc:
            msg = f"Formato dataset comuni non valido: {exc.error_count()} errori"
            raise ComuniDownloadError(msg) from exc
