"""Shared fixtures for nixdocs tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def write_options(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Return a helper that writes an options document to a temporary file.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Function taking the options mapping and returning the written path.
    """
    counter = iter(range(1_000_000))

    def _write(options: dict[str, Any]) -> Path:
        path = tmp_path / f"options-{next(counter)}.json"
        path.write_text(json.dumps(options))
        return path

    return _write
