# core/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

log = logging.getLogger(__name__)

DEFAULT_DB_URL = "sqlite+pysqlite:///:memory:"
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class DBSettings:
    url: str = DEFAULT_DB_URL


@dataclass(frozen=True)
class UISettings:
    app_name: str = "EduCRM"
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class Settings:
    db: DBSettings = field(default_factory=DBSettings)
    ui: UISettings = field(default_factory=UISettings)
    log_level: str = "INFO"
    seed_demo_data: bool = True


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("Ignoring %s=%r (not an integer), using %s", name, raw, default)
        return default
    if value < 1:
        log.warning("Ignoring %s=%r (must be >= 1), using %s", name, raw, default)
        return default
    return value


def _bool_env(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    return str(raw).strip().lower() in ("1", "true", "yes", "on")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from EDUCRM_* environment variables.
    Anything unset or invalid falls back to the defaults above.
    """
    env = os.environ if env is None else env
    return Settings(
        db=DBSettings(url=env.get("EDUCRM_DB_URL") or DEFAULT_DB_URL),
        ui=UISettings(
            app_name=env.get("EDUCRM_APP_NAME") or "EduCRM",
            page_size=_int_env(env, "EDUCRM_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        ),
        log_level=(env.get("EDUCRM_LOG_LEVEL") or "INFO").upper(),
        seed_demo_data=_bool_env(env, "EDUCRM_SEED_DEMO", True),
    )
