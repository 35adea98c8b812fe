"""Pytest configuration and fixtures for all tests."""

import pytest

from claudegate import constant


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point the config directory at a temp dir for every test.

    Nothing under the user's real ``~/.claudegate`` is read or written.
    """
    working_dir = tmp_path / "claudegate-home"
    monkeypatch.setattr(constant, "WORKING_DIR", working_dir)
    monkeypatch.setattr(constant, "CONFIG_FILE", "config.json")
    return working_dir


@pytest.fixture
def config_path(isolated_config_dir):
    return isolated_config_dir / "config.json"
