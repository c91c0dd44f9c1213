import runpy
from pathlib import Path

import pytest
from pydantic import ValidationError

import main
from settings import get_settings

MAIN = Path(main.__file__)


def test_bad_setting_stops_startup(monkeypatch):
    monkeypatch.setenv("GAME_INITIAL_ATTEMPTS", "-1")
    get_settings.cache_clear()
    try:
        with pytest.raises(ValidationError):
            runpy.run_path(str(MAIN))
    finally:
        get_settings.cache_clear()


def test_settings_loaded_at_startup(monkeypatch):
    monkeypatch.delenv("GAME_INITIAL_ATTEMPTS", raising=False)
    get_settings.cache_clear()
    ns = runpy.run_path(str(MAIN))
    assert ns["app"].title == "Times Tables Trainer API"
    assert get_settings.cache_info().currsize == 1
