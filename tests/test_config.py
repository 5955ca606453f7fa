"""Tests for runtime settings and logging setup."""

import logging

from convenant.config import Settings, get_settings
from convenant.utilities import setup_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CONVENANT_ADULT_AGE", raising=False)
        settings = Settings(_env_file=None)
        assert settings.adult_age == 18
        assert settings.nested_placeholder_depth == 5
        assert settings.timezone == "Europe/Amsterdam"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("CONVENANT_ADULT_AGE", "21")
        monkeypatch.setenv("CONVENANT_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.adult_age == 21
        assert settings.log_level == "DEBUG"

    def test_cached(self):
        assert get_settings() is get_settings()


class TestSetupLogging:
    def test_configures_root_once(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_logging("debug")
            setup_logging("warning")
            assert root.level == logging.WARNING
            stream_handlers = [h for h in root.handlers if isinstance(h, logging.StreamHandler)]
            assert len(stream_handlers) == 1
        finally:
            for handler in list(root.handlers):
                root.removeHandler(handler)
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
