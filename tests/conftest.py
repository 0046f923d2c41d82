from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from y2manager.config import get_app_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("Y2MANAGER_SETTINGS", raising=False)
    monkeypatch.delenv("Y2MANAGER_FALLBACK", raising=False)
    monkeypatch.setenv("LOGLEVEL", "WARNING")
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()


@pytest.fixture
def sample_config_path() -> Path:
    return FIXTURES_DIR / "config.js"


@pytest.fixture
def config_file(tmp_path: Path, sample_config_path: Path) -> Path:
    """Writable copy of the sample bridge config."""
    path = tmp_path / "config.js"
    shutil.copyfile(sample_config_path, path)
    return path
