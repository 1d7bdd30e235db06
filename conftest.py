"""Pytest configuration for SajuEngine."""

from __future__ import annotations

import pytest

from sajuengine.config.settings import reset_active_settings


@pytest.fixture(scope="session", autouse=True)
def _isolated_config_home(tmp_path_factory: pytest.TempPathFactory):
    """Keep every test away from the real ``~/.sajuengine`` directory."""

    home = tmp_path_factory.mktemp("sajuengine-home")
    with pytest.MonkeyPatch.context() as patch:
        patch.setenv("SAJUENGINE_HOME", str(home))
        patch.delenv("SAJUENGINE_SETTINGS_FILE", raising=False)
        patch.delenv("SE_EPHE_PATH", raising=False)
        reset_active_settings()
        yield home
    reset_active_settings()
