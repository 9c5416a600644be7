"""Regenerate data/codici_catastali.json.

Usage:
    python -m portale.integrations.comuni [output_path]
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from portale.config import settings
from portale.integrations.comuni.client import ComuniDownloadError
from portale.integrations.comuni.service import refresh_cadastral_data

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    path = Path(args[0]) if args else None

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stdout,
    )

    try:
        count = asyncio.run(refresh_cadastral_data(path))
    except ComuniDownloadError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Generati %d comuni", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
