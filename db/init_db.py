"""Create or upgrade the memos schema in ``DB_FILE`` and print its version."""

import logging
import sys

from core.config import Settings
from core.memo.errors import StorageError
from db.migrations import run_migrations
from db.session import create_storage_engine

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    settings = Settings.from_env()
    engine = create_storage_engine(settings.db_file)
    try:
        version = run_migrations(engine)
    except StorageError as exc:
        print(f"Migration failed: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        engine.dispose()
    print(f"DB schema at version {version}")
