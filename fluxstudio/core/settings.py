"""Environment-backed settings for the generation route and the studio client."""
from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_MODEL = "fal-ai/flux-pro/v1.1-ultra"
DEFAULT_QUEUE_URL = "https://queue.fal.run"
DEFAULT_SERVER_URL = "http://localhost:7860"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


@dataclass
class Settings:
    fal_api_key: str | None = None
    fal_model: str = DEFAULT_MODEL
    fal_queue_url: str = DEFAULT_QUEUE_URL
    poll_interval: float = 0.5
    output_format: str = "jpeg"
    safety_tolerance: str = "2"
    enable_safety_checker: bool = True
    server_url: str = DEFAULT_SERVER_URL

    @staticmethod
    def from_env() -> "Settings":
        """Read settings from the process environment.

        `FAL_API_KEY` takes precedence over `FAL_KEY`, the name fal's own
        SDKs use.
        """
        return Settings(
            fal_api_key=os.getenv("FAL_API_KEY") or os.getenv("FAL_KEY") or None,
            fal_model=os.getenv("FAL_MODEL", DEFAULT_MODEL),
            fal_queue_url=os.getenv("FAL_QUEUE_URL", DEFAULT_QUEUE_URL).rstrip("/"),
            poll_interval=_env_float("FAL_POLL_INTERVAL", 0.5),
            output_format=os.getenv("FAL_OUTPUT_FORMAT", "jpeg"),
            safety_tolerance=os.getenv("FAL_SAFETY_TOLERANCE", "2"),
            enable_safety_checker=_env_bool("FAL_ENABLE_SAFETY_CHECKER", True),
            server_url=os.getenv("FLUXSTUDIO_URL", DEFAULT_SERVER_URL).rstrip("/"),
        )


def get_settings() -> Settings:
    """Settings are read at call time so a changed environment takes effect."""
    return Settings.from_env()
