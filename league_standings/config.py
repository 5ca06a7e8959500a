# league_standings/config.py
"""
Configuration for the league standings service.

This module centralizes all tunable settings (timezone, document store location,
cache TTLs, standings defaults, draft size and logging).
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

VALID_VIEWS = ("division", "conference", "overall")


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, returning default on missing/invalid values."""
    try:
        return int(os.getenv(name, str(default)))
    except (TypeError, ValueError):
        return default


def _env_optional(name: str) -> Optional[str]:
    """Read a string environment variable, treating blank values as unset."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable app configuration.

    Notes:
      - season=0 means games of every season count toward standings.
      - admin_token unset disables the playoff status write endpoint.
    """

    # Core settings
    tz: str = os.getenv("TZ", "America/Chicago")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Document store
    store_api_base: str = os.getenv("STORE_API_BASE", "https://firestore.googleapis.com")
    project_id: str = os.getenv("STORE_PROJECT_ID", "league-hq")
    database: str = os.getenv("STORE_DATABASE", "(default)")
    api_key: Optional[str] = _env_optional("STORE_API_KEY")
    request_timeout: int = _env_int("REQUEST_TIMEOUT_SECONDS", 10)

    # Cache controls
    standings_cache_ttl_seconds: int = _env_int("STANDINGS_CACHE_TTL_SECONDS", 300)

    # Standings defaults
    default_league: str = os.getenv("DEFAULT_LEAGUE", "major")
    default_view: str = os.getenv("DEFAULT_VIEW", "division")
    season: int = _env_int("SEASON", 0)

    # Draft
    draft_rounds: int = _env_int("DRAFT_ROUNDS", 5)

    # Privileged writes
    admin_token: Optional[str] = _env_optional("ADMIN_TOKEN")

    def __post_init__(self):
        """Normalize values that have a closed set of valid options."""
        # dataclass frozen => use object.__setattr__
        view = (self.default_view or "").strip().lower()
        if view not in VALID_VIEWS:
            view = "division"
        object.__setattr__(self, "default_view", view)

        level = (self.log_level or "").strip().upper() or "INFO"
        object.__setattr__(self, "log_level", level)

        if self.season < 0:
            object.__setattr__(self, "season", 0)
