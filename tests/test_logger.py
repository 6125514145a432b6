"""
Logging configuration tests
"""

import logging

import pytest

from azkar.core.logger import PACKAGE_LOGGER, get_logger, parse_size, setup_logging


@pytest.fixture
def logs_dir(isolated_config, tmp_path):
    path = tmp_path / "logs"
    isolated_config.set("logging.logs_dir", str(path))
    yield path
    isolated_config.set("logging.logs_dir", "")
    setup_logging()


class TestParseSize:
    @pytest.mark.parametrize(
        "size, expected",
        [("10MB", 10 * 1024 * 1024), ("512kb", 512 * 1024), ("1GB", 1024**3), (2048, 2048)],
    )
    def test_sizes(self, size, expected):
        assert parse_size(size) == expected


class TestSetupLogging:
    def test_errors_reach_both_files(self, logs_dir):
        manager = setup_logging()
        logger = get_logger("azkar.tests")

        logger.info("stored phrase")
        logger.error("store unreachable")
        for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
            handler.flush()

        assert manager.logs_dir == logs_dir
        assert "stored phrase" in (logs_dir / "azkar.log").read_text(encoding="utf-8")
        errors = (logs_dir / "error.log").read_text(encoding="utf-8")
        assert "store unreachable" in errors
        assert "stored phrase" not in errors

    def test_reconfiguring_replaces_handlers(self, logs_dir):
        setup_logging()
        setup_logging()

        # console, azkar.log and error.log
        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 3

    def test_level_from_config(self, isolated_config):
        isolated_config.set("logging.level", "WARNING")
        setup_logging()

        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

        isolated_config.set("logging.level", "INFO")
        setup_logging()
