import json
import logging
from pathlib import Path
from typing import Any, Callable

import pytest

from sbom_scorecard.settings import get_settings


@pytest.fixture
def write_sbom(tmp_path: Path) -> Callable[..., Path]:
    """Write a dict (as JSON) or raw text/bytes to a file under tmp_path."""

    def _write(content: Any, name: str = "sbom.json") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        elif isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging so handlers never outlive a captured stream."""
    yield
    logger = logging.getLogger("sbom_scorecard")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
