"""Filenames for downloaded images."""
from __future__ import annotations

import re
import time
from pathlib import Path

FILENAME_PREFIX = "ai_image"
PROMPT_CHARS = 50
DEFAULT_EXTENSION = "jpg"

_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def sanitize_prompt(prompt: str, length: int = PROMPT_CHARS) -> str:
    """Keep the first `length` characters, replacing anything but ASCII letters and digits with "_"."""
    return _UNSAFE.sub("_", prompt[:length])


def build_download_filename(
    prompt: str,
    timestamp: int | None = None,
    extension: str = DEFAULT_EXTENSION,
) -> str:
    """Return `ai_image_<sanitized prompt>_<epoch millis>.<extension>`."""
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    return f"{FILENAME_PREFIX}_{sanitize_prompt(prompt)}_{timestamp}.{extension}"


def save_image(data: bytes, directory: str | Path, filename: str) -> Path:
    """Write image bytes under `directory`, creating it if needed.

    Existing files are never overwritten; a counter is appended instead.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    counter = 1
    while path.exists():
        path = directory / f"{Path(filename).stem}_{counter}{Path(filename).suffix}"
        counter += 1
    path.write_bytes(data)
    return path
