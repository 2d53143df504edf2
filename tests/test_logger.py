from logging.handlers import RotatingFileHandler

from core import logger


class TestLogger:
    def test_env_flag(self, monkeypatch):
        monkeypatch.setenv("LOG_TO_FILE", " TRUE ")
        assert logger._env_flag("LOG_TO_FILE", "false") is True
        monkeypatch.delenv("LOG_TO_FILE")
        assert logger._env_flag("LOG_TO_FILE", "false") is False

    def test_file_handler_creates_directory(self, monkeypatch, tmp_path):
        path = tmp_path / "logs" / "feeds.log"
        monkeypatch.setenv("LOG_FILE", str(path))
        monkeypatch.setenv("LOG_BACKUPS", "5")

        handler = logger._file_handler()
        try:
            assert isinstance(handler, RotatingFileHandler)
            assert handler.backupCount == 5
            assert path.parent.is_dir()
        finally:
            handler.close()

    def test_get_logger_is_named(self):
        assert logger.get_logger("fetchers.hpoi").name == "fetchers.hpoi"
