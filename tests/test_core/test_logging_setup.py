"""Tests de la configuración de logging."""

import logging

from rich.logging import RichHandler

from core.logging import ROOT_LOGGERS, resolve_level, setup_logging


class TestSetupLogging:
    def test_resolve_level(self):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level(logging.ERROR) == logging.ERROR
        assert resolve_level("nonsense") == logging.WARNING

    def test_idempotent(self):
        try:
            setup_logging("DEBUG")
            setup_logging("INFO")
            for name in ROOT_LOGGERS:
                logger = logging.getLogger(name)
                assert logger.level == logging.INFO
                assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
        finally:
            setup_logging("WARNING")
