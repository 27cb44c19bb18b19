import stat
import sys
from pathlib import Path

import pytest

from services.config_manager import ConfigManager
from services.format_service import reset_format_service


@pytest.fixture
def make_formatter(tmp_path: Path):
    """Write an executable fake formatter and return its path"""

    def _make(body: str, name: str = "fake-format") -> str:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        script = bin_dir / name
        script.write_text(f"#!{sys.executable}\n{body}", encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make


@pytest.fixture
def config_manager(tmp_path: Path, monkeypatch) -> ConfigManager:
    """ConfigManager singleton backed by a temporary directory"""
    monkeypatch.setenv("OPENSCAD_FORMAT_CONFIG_DIR", str(tmp_path / "config"))
    ConfigManager.reset_instance()
    reset_format_service()
    manager = ConfigManager.get_instance()
    yield manager
    ConfigManager.reset_instance()
    reset_format_service()
