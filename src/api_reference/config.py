"""Server settings, with environment overrides."""

import os
from dataclasses import dataclass, field
from pathlib import Path

ENV_PREFIX = "API_REFERENCE_"


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    catalog_path: Path | None = None  # None: bundled catalog
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from API_REFERENCE_* environment variables."""
        catalog = os.getenv(f"{ENV_PREFIX}CATALOG")
        return cls(
            host=os.getenv(f"{ENV_PREFIX}HOST", "0.0.0.0"),
            port=int(os.getenv(f"{ENV_PREFIX}PORT", "8000")),
            debug=os.getenv(f"{ENV_PREFIX}DEBUG", "false").lower() == "true",
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper(),
            catalog_path=Path(catalog) if catalog else None,
        )
