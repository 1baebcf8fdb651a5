"""Tests for logging setup."""

import logging
import sys

import pytest
from loguru import logger

from staybot.core.logger import session_id_ctx, setup_logging


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.configure(patcher=lambda record: None)
    logger.add(sys.stderr)
    logging.basicConfig(handlers=[], force=True)


class TestSetupLogging:
    def test_file_sink_carries_session_id(self, tmp_path, restore_logger):
        setup_logging("DEBUG", logs_dir=str(tmp_path))

        token = session_id_ctx.set("abc123")
        try:
            logger.info("inside session")
        finally:
            session_id_ctx.reset(token)
        logger.info("outside session")
        logger.complete()

        lines = (tmp_path / "staybot.log").read_text().splitlines()
        assert any("abc123" in line and "inside session" in line for line in lines)
        assert any("| - |" in line and "outside session" in line for line in lines)

    def test_json_sink(self, tmp_path, restore_logger):
        setup_logging("INFO", json_format=True, logs_dir=str(tmp_path))
        logger.info("structured")
        logger.complete()

        assert "structured" in (tmp_path / "staybot.jsonl").read_text()

    def test_stdlib_records_intercepted(self, tmp_path, restore_logger):
        setup_logging("INFO", logs_dir=str(tmp_path))

        logging.getLogger("tenacity.test").warning("Retrying set_text")
        logger.complete()

        assert "Retrying set_text" in (tmp_path / "staybot.log").read_text()
