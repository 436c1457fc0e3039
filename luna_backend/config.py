from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "luna-secret-change-in-production")
    data_dir: str = os.getenv("LUNA_DATA_DIR", "")
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_origins(os.getenv("CORS_ORIGINS", "*"))
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def data_path(self) -> Path | None:
        """Directory holding the interaction CSVs, or ``None`` for demo data."""
        return Path(self.data_dir) if self.data_dir else None


DEFAULT_APP_CONFIG = AppConfig()
