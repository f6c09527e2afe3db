"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from spendflix.domain.errors import ValidationError

DEFAULT_HOME = Path.home() / ".spendflix"
DEFAULT_IMPORT_CONCURRENCY = 4
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_concurrency(value: str) -> int:
    try:
        concurrency = int(value)
    except ValueError:
        raise ValidationError(
            f"SPENDFLIX_IMPORT_CONCURRENCY must be an integer, got '{value}'"
        ) from None
    if concurrency < 1:
        raise ValidationError(f"SPENDFLIX_IMPORT_CONCURRENCY must be at least 1, got {concurrency}")
    return concurrency


@dataclass(frozen=True)
class Settings:
    """Paths and tunables shared by the CLI and the services it builds."""

    db_path: Path
    storage_dir: Path
    import_concurrency: int = DEFAULT_IMPORT_CONCURRENCY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from SPENDFLIX_* variables, falling back to defaults.

        Raises:
            ValidationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        log_level = env.get("SPENDFLIX_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValidationError(
                f"SPENDFLIX_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'"
            )

        return cls(
            db_path=Path(env.get("SPENDFLIX_DB_PATH", DEFAULT_HOME / "spendflix.db")).expanduser(),
            storage_dir=Path(env.get("SPENDFLIX_STORAGE_DIR", DEFAULT_HOME / "objects")).expanduser(),
            import_concurrency=_parse_concurrency(
                env.get("SPENDFLIX_IMPORT_CONCURRENCY", str(DEFAULT_IMPORT_CONCURRENCY))
            ),
            log_level=log_level,
        )
