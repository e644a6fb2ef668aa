"""Configuration for the catalog explorer."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

DEFAULT_API_BASE = "https://pokeapi.co/api/v2"
DEFAULT_WEIGHT_RANGE: Tuple[float, float] = (0, 1000)
DEFAULT_HEIGHT_RANGE: Tuple[float, float] = (0, 100)

ENV_PREFIX = "DEXPLORER_"


@dataclass
class Settings:
    """Runtime settings, one instance per process."""

    api_base: str = DEFAULT_API_BASE
    list_limit: int = 1000
    page_size: int = 20
    debounce_seconds: float = 0.3
    max_concurrency: int = 16
    http_timeout: float = 15.0
    http_retries: int = 0
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        if not self.api_base.startswith(("http://", "https://")):
            raise ValueError(f"Invalid api_base '{self.api_base}': must be an http(s) URL")
        if self.list_limit < 1:
            raise ValueError("list_limit must be at least 1")
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")
        if self.debounce_seconds < 0:
            raise ValueError("debounce_seconds must not be negative")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if self.http_timeout <= 0:
            raise ValueError("http_timeout must be positive")
        if self.http_retries < 0:
            raise ValueError("http_retries must not be negative")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log_level '{self.log_level}'")

    @property
    def list_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/pokemon"


_CASTS = {
    "api_base": str,
    "list_limit": int,
    "page_size": int,
    "debounce_seconds": float,
    "max_concurrency": int,
    "http_timeout": float,
    "http_retries": int,
    "log_level": str,
    "log_dir": str,
}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from DEXPLORER_* environment variables.

    Raises:
        ValueError: if a variable cannot be parsed or fails validation
    """
    environ = os.environ if environ is None else environ
    values = {}
    for field_name, cast in _CASTS.items():
        raw = environ.get(ENV_PREFIX + field_name.upper())
        if raw is None or raw.strip() == "":
            continue
        try:
            values[field_name] = cast(raw.strip())
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}{field_name.upper()} has an invalid value: {raw!r}")
    return Settings(**values)
