"""
Unit Tests for Logging Setup

Reliability Level: STANDARD

Tests console/file sink installation from configuration.
"""

import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from dex_http_api.config import GatewayConfig
from dex_http_api.observability.logging_setup import configure_logging, resolve_level


def _file_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


class TestConfigureLogging:

    def teardown_method(self) -> None:
        package_logger = logging.getLogger("dex_http_api")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)

    def test_console_and_file_levels_are_independent(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "gateway.log"
        config = GatewayConfig(
            console_log_level="warn",
            file_log_level="debug",
            log_file=str(log_file),
        )

        package_logger = configure_logging(config)
        logging.getLogger("dex_http_api.logic.gateway").debug("debug line")
        for handler in package_logger.handlers:
            handler.flush()

        assert package_logger.level == logging.DEBUG
        assert log_file.exists()
        assert "debug line" in log_file.read_text(encoding="utf-8")

    def test_file_sink_disabled(self, tmp_path) -> None:
        config = GatewayConfig(file_log_level="none", log_file=str(tmp_path / "x.log"))

        package_logger = configure_logging(config)

        assert _file_handlers(package_logger) == []
        assert not (tmp_path / "x.log").exists()

    def test_reconfigure_replaces_handlers(self, tmp_path) -> None:
        config = GatewayConfig(log_file=str(tmp_path / "a.log"))
        configure_logging(config)
        package_logger = configure_logging(config)

        assert len(_file_handlers(package_logger)) == 1

    def test_resolve_level(self) -> None:
        assert resolve_level("warn") == logging.WARNING
        assert resolve_level("TRACE") == logging.DEBUG
        assert resolve_level("none") is None
