"""Tests for logging setup."""

import logging

import pytest

from chain_synth.utils.error_handling import ConfigurationError
from chain_synth.utils.logging_config import (
    DEFAULT_LOG_LEVEL,
    ROOT_LOGGER_NAME,
    get_logger,
    resolve_log_level,
    setup_logging,
)


class TestSetupLogging:
    """Test suite for setup_logging."""

    def test_level_and_single_handler(self):
        logger = setup_logging(log_level="debug")
        setup_logging(log_level="DEBUG")
        assert logger.name == ROOT_LOGGER_NAME
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "chain.log"
        logger = setup_logging(log_level="INFO", log_file=str(log_file), log_format="%(message)s")
        get_logger("strikes").info("Step %.3f for spot %.4f", 0.06, 1.15)
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "Step 0.060 for spot 1.1500" in log_file.read_text()

        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


class TestLogLevel:
    """Level names from the CLI and config."""

    def test_default_is_warning(self):
        assert DEFAULT_LOG_LEVEL == "WARNING"
        assert setup_logging().level == logging.WARNING

    @pytest.mark.parametrize("name, level", [
        ("debug", logging.DEBUG),
        (" Info ", logging.INFO),
        ("ERROR", logging.ERROR),
    ])
    def test_names_resolve(self, name, level):
        assert resolve_log_level(name) == level

    @pytest.mark.parametrize("name", ["verbose", "", "LEVEL 5"])
    def test_unknown_level_rejected(self, name):
        with pytest.raises(ConfigurationError):
            setup_logging(log_level=name)


class TestGetLogger:
    """Test suite for get_logger."""

    def test_child_names(self):
        assert get_logger("cli").name == "chain_synth.cli"
        assert get_logger().name == "chain_synth"
        assert get_logger("cli").parent is logging.getLogger("chain_synth")
