import logging

import pytest

from chordkit.core.config import SETTING_NAMES, get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Every test starts from default settings with no cached instance."""
    for name in SETTING_NAMES + ("CHORDKIT_CONFIG",):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces the root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
