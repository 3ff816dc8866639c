# pokedex/config.py
from dataclasses import dataclass, asdict, field
from functools import lru_cache
import os
from typing import Any, Dict, Optional

DEFAULT_API_BASE = "https://pokeapi.co/api/v2/pokemon"


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return int(v)


def _env_float(name: str) -> Optional[float]:
    v = os.getenv(name)
    if v is None or not v.strip():
        return None
    return float(v)


@dataclass(frozen=True)
class Settings:
    # -------- Remote API -------
    api_base: str = field(default_factory=lambda: os.getenv("POKEDEX_API_BASE", DEFAULT_API_BASE))
    first_id: int = field(default_factory=lambda: _env_int("POKEDEX_FIRST_ID", 1))
    last_id: int = field(default_factory=lambda: _env_int("POKEDEX_LAST_ID", 151))

    # -------- Fetching ---------
    # 0 keeps every request in flight at once
    max_concurrency: int = field(default_factory=lambda: _env_int("POKEDEX_MAX_CONCURRENCY", 0))
    # None leaves httpx's own default in place
    request_timeout: Optional[float] = field(default_factory=lambda: _env_float("POKEDEX_REQUEST_TIMEOUT"))
    require_thumbnail: bool = field(default_factory=lambda: _env_bool("POKEDEX_REQUIRE_THUMBNAIL", True))

    # -------- Logging ----------
    log_level: str = field(default_factory=lambda: os.getenv("POKEDEX_LOG_LEVEL", "INFO"))

    @property
    def catalog_size(self) -> int:
        return max(0, self.last_id - self.first_id + 1)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_overrides(**kwargs) -> "Settings":
        """
        Build Settings from the environment and apply runtime overrides.
        Only keys that match fields will be overridden.
        """
        current = Settings().to_dict()
        current.update({k: v for k, v in kwargs.items() if k in current and v is not None})
        return Settings(**current)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
