import logging

from itemshop.logging_setup import setup_logging


def test_setup_logging_writes_to_log_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(tmp_path / "logs")

        assert root.level == logging.DEBUG
        assert (tmp_path / "logs" / "itemshop.log").exists()
        assert logging.getLogger("aiogram.event").level == logging.WARNING
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
