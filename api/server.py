"""Process bootstrap: configuration, storage, and the HTTP listener.

Run with ``python -m api.server`` or the ``memos`` console script.
"""

from __future__ import annotations

import logging
import sys

import uvicorn

from api.main import create_app
from core.config import Settings
from core.logging_setup import configure_logging
from core.memo.errors import StorageError
from db.memo_store import MemoStore

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the memos server. Exits non-zero if storage cannot be opened."""
    configure_logging()
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        logger.critical("Invalid configuration: %s", exc)
        sys.exit(2)
    configure_logging(settings.log_level)

    try:
        store = MemoStore.from_settings(settings)
    except StorageError as exc:
        logger.critical("Cannot open storage %s: %s", settings.db_file, exc)
        sys.exit(1)

    app = create_app(store, settings)
    logger.info("Serving memos from %s on %s:%d", settings.db_file, settings.host, settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
