from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_CHAT_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_CHAT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    title: str = "TOMM"
    log_level: str = "INFO"
    language: str = "fa"
    storage_secret: str = "tomm-dashboard"
    # Dataset generator
    history_days: int = 365
    seed: int | None = None
    # Chat assistant
    chat_api_key: str = ""
    chat_model: str = DEFAULT_CHAT_MODEL
    chat_endpoint: str = DEFAULT_CHAT_ENDPOINT
    chat_timeout_seconds: float = 30.0


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return float(str(raw).strip())
    except ValueError:
        return default


def load_settings(*, dotenv: bool = True) -> Settings:
    """Build Settings from the environment (and a local .env file when present)."""
    if dotenv:
        load_dotenv()
    return Settings(
        host=os.getenv("TOMM_HOST", "0.0.0.0"),
        port=_env_int("TOMM_PORT", 8080) or 8080,
        title=os.getenv("TOMM_TITLE", "TOMM"),
        log_level=os.getenv("TOMM_LOG_LEVEL", "INFO"),
        language=os.getenv("TOMM_LANGUAGE", "fa"),
        storage_secret=os.getenv("TOMM_STORAGE_SECRET", "tomm-dashboard"),
        history_days=_env_int("TOMM_HISTORY_DAYS", 365) or 365,
        seed=_env_int("TOMM_SEED", None),
        chat_api_key=os.getenv("GEMINI_API_KEY", os.getenv("TOMM_CHAT_API_KEY", "")),
        chat_model=os.getenv("TOMM_CHAT_MODEL", DEFAULT_CHAT_MODEL),
        chat_endpoint=os.getenv("TOMM_CHAT_ENDPOINT", DEFAULT_CHAT_ENDPOINT),
        chat_timeout_seconds=_env_float("TOMM_CHAT_TIMEOUT", 30.0),
    )
