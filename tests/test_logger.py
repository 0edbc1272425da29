import pytest
from logging.handlers import RotatingFileHandler

from poll_chat.server.logger import (
    LOG_FILE_BACKUPS,
    LOG_FILE_MAX_BYTES,
    configure_logging,
    logger,
)


@pytest.fixture
def clean_logger():
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    yield logger
    for handler in logger.handlers[:]:
        if handler not in saved_handlers:
            handler.close()
            logger.removeHandler(handler)
    logger.setLevel(saved_level)


def file_handlers():
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


class TestConfigureLogging:
    def test_console_only_by_default(self, clean_logger):
        configure_logging("debug")

        assert file_handlers() == []
        assert logger.level == 10

    def test_rotating_file(self, clean_logger, tmp_path):
        log_file = tmp_path / "logs" / "chatroom.log"

        configure_logging("info", str(log_file))
        logger.info("User registered: alice")
        for handler in file_handlers():
            handler.flush()

        handlers = file_handlers()
        assert len(handlers) == 1
        assert handlers[0].maxBytes == LOG_FILE_MAX_BYTES
        assert handlers[0].backupCount == LOG_FILE_BACKUPS
        assert "User registered: alice" in log_file.read_text(encoding="utf-8")

    def test_file_handler_added_once(self, clean_logger, tmp_path):
        log_file = str(tmp_path / "chatroom.log")

        configure_logging("info", log_file)
        configure_logging("info", log_file)

        assert len(file_handlers()) == 1
