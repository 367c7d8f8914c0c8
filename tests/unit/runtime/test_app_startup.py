"""Unit tests for logging configuration."""

import json
import logging
from pathlib import Path

from loguru import logger

from src.catalog.runtime.app_startup import configure_logging
from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import with_context


def read_records(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines() if line]


class TestConfigureLogging:
    def test_json_file_sink(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "catalog.log"
        override = ConfigData()
        override.logging.file = str(log_file)
        override.logging.format = "json"

        with with_context(override):
            configure_logging()
        logger.info("Catalog ready")
        logger.remove()

        messages = [record["record"]["message"] for record in read_records(log_file)]
        assert "Catalog ready" in messages

    def test_standard_logging_is_intercepted(self, tmp_path: Path):
        log_file = tmp_path / "catalog.log"
        override = ConfigData()
        override.logging.file = str(log_file)
        override.logging.format = "json"

        with with_context(override):
            configure_logging()
        logging.getLogger("catalog.thirdparty").warning("from stdlib")
        logger.remove()

        records = read_records(log_file)
        intercepted = [r for r in records if r["record"]["message"] == "from stdlib"]
        assert intercepted
        assert intercepted[0]["record"]["extra"]["logger_name"] == "catalog.thirdparty"
        assert intercepted[0]["record"]["level"]["name"] == "WARNING"

    def test_sqlalchemy_loggers_are_quieted(self):
        configure_logging()
        try:
            assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
            assert logging.getLogger("sqlalchemy.pool").level == logging.WARNING
        finally:
            logger.remove()
