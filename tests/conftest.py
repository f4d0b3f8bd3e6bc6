"""
Pytest configuration and fixtures.
"""
from pathlib import Path

import pytest

from src.core import Settings


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Directory standing in for the system temp dir."""
    path = tmp_path / "tmp"
    path.mkdir()
    return path


@pytest.fixture
def settings(temp_dir) -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(
        _env_file=None,
        base_url="https://files.example.com",
        ftp_host="ftp.example.com",
        ftp_user="uploader",
        ftp_pass="secret",
        temp_dir=temp_dir,
        image_timeout=2.0,
    )


@pytest.fixture
def clean_environment(monkeypatch):
    """Provide a clean environment for tests."""
    env_vars = [
        "APP_NAME",
        "DEBUG",
        "PORT",
        "BASE_URL",
        "FTP_HOST",
        "FTP_USER",
        "FTP_PASS",
        "FTP_PORT",
        "REMOTE_ROOT",
        "TEMP_DIR",
    ]
    for var in env_vars:
        monkeypatch.delenv(var, raising=False)
