from __future__ import annotations

from pathlib import Path

import pytest
from django.test import Client


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture(autouse=True)
def output_dir(settings, tmp_path: Path) -> Path:
    directory = tmp_path / "outputs"
    settings.GPX_OUTPUT_DIR = directory
    return directory
