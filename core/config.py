"""
Process configuration for the memos server.

An immutable ``Settings`` object is built once at startup from the
environment and passed explicitly to everything that needs it.

Environment variables
---------------------
``DB_FILE``
    Path to the SQLite database file.  Default: ``memos.db``

``PORT``
    TCP port the HTTP listener binds.  Default: ``3000``

``HOST``
    Interface the HTTP listener binds.  Default: ``0.0.0.0``

``LOG_LEVEL``
    Root logging level name.  Default: ``INFO``
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

VALID_LOG_LEVELS: frozenset[str] = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
)


@dataclass(frozen=True)
class Settings:
    """
    Server configuration.

    Attributes:
        db_file: Path to the SQLite file. Created on first start.
        port: TCP port for the HTTP listener, 1..65535.
        host: Bind address.
        log_level: One of the stdlib logging level names.

    Example:
        >>> settings = Settings.from_env({"PORT": "8080"})
        >>> settings.port
        8080
    """

    db_file: str = "memos.db"
    port: int = 3000
    host: str = "0.0.0.0"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.db_file.strip():
            raise ValueError("db_file must not be empty")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"port must be in 1..65535, got {self.port}")
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log_level {self.log_level!r}, "
                f"valid options: {sorted(VALID_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ValueError: If ``PORT`` is not an integer or any value is invalid.
        """
        env = os.environ if environ is None else environ
        raw_port = env.get("PORT", "3000")
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ValueError(f"PORT must be an integer, got {raw_port!r}") from exc
        return cls(
            db_file=env.get("DB_FILE", "memos.db"),
            port=port,
            host=env.get("HOST", "0.0.0.0"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


DEFAULT_SETTINGS = Settings()
"""Defaults: ``memos.db`` on port 3000, all interfaces, INFO logging."""
