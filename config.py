from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


BACKEND_DIR = Path(__file__).resolve().parent
REPO_ROOT = BACKEND_DIR.parent

# Load .env file (try backend folder first, then repo root).
# Variables already set in the process environment win.
_env_loaded = False
backend_env = BACKEND_DIR / ".env"
if backend_env.exists():
    _env_loaded = load_dotenv(backend_env, override=False)
else:
    root_env = REPO_ROOT / ".env"
    if root_env.exists():
        _env_loaded = load_dotenv(root_env, override=False)


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    debug: bool
    log_level: str

    fruit_rules_path: Path

    # Gemini advisory text; the pipeline still answers without it
    gemini_api_key: str | None
    gemini_model: str
    advisor_enabled: bool
    advisor_timeout_seconds: float

    advice_list_limit: int


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def get_settings() -> Settings:
    return Settings(
        host=os.getenv("HOST", "127.0.0.1"),
        port=_get_int("PORT", 5000),
        debug=_get_bool("FLASK_DEBUG", False),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        fruit_rules_path=Path(os.getenv("FRUIT_RULES_PATH", str(BACKEND_DIR / "data" / "fruit_rules.json"))),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
        advisor_enabled=_get_bool("ADVISOR_ENABLED", True),
        advisor_timeout_seconds=max(0.1, _get_float("ADVISOR_TIMEOUT_SECONDS", 15.0)),
        advice_list_limit=max(1, _get_int("ADVICE_LIST_LIMIT", 5)),
    )
