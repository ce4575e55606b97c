"""Environment-driven settings.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv

OUTPUT_FORMATS = ("text", "json")
FAMILY_CHOICES = ("spdx", "cdx", "guess")


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    output_format: str = "text"
    default_family: str = "guess"


def _read_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = os.environ.get(name, default).strip().lower() or default
    if value not in choices:
        raise ValueError(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


def load_settings() -> Settings:
    """Build a fresh Settings object from the environment."""
    load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings(
        log_level=os.environ.get("SBOM_SCORECARD_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        output_format=_read_choice("SBOM_SCORECARD_OUTPUT_FORMAT", "text", OUTPUT_FORMATS),
        default_family=_read_choice("SBOM_SCORECARD_DEFAULT_FAMILY", "guess", FAMILY_CHOICES),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, read once."""
    return load_settings()
