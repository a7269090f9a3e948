"""Environment-driven settings for the Chute client."""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

from .errors import ConfigError

API_URL_ENV_VAR = "CHUTE_API_URL"
TIMEOUT_ENV_VAR = "CHUTE_TIMEOUT"
PER_PAGE_ENV_VAR = "CHUTE_PER_PAGE"
RECEIPTS_ENV_VAR = "CHUTE_RECEIPTS_PATH"

DEFAULT_API_URL = "https://api.getchute.com/v2"
DEFAULT_TIMEOUT = 30.0
PER_PAGE = 5


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    per_page: int = PER_PAGE
    receipts_path: Path | None = None


def _read_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Resolve settings from the environment, falling back to defaults."""
    receipts = os.environ.get(RECEIPTS_ENV_VAR)
    return Settings(
        api_url=(os.environ.get(API_URL_ENV_VAR) or DEFAULT_API_URL).rstrip("/"),
        timeout=_read_number(TIMEOUT_ENV_VAR, DEFAULT_TIMEOUT, float),
        per_page=_read_number(PER_PAGE_ENV_VAR, PER_PAGE, int),
        receipts_path=Path(receipts).expanduser() if receipts else None,
    )
