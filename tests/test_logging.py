import sys

from loguru import logger

from utils.logging import configure_logging


def test_configure_logging_writes_file_once(tmp_path, monkeypatch):
    monkeypatch.setattr(configure_logging, "_applied", False, raising=False)
    log_file = tmp_path / "labbook.log"
    try:
        configure_logging("DEBUG", str(log_file))
        # second call is a no-op (no duplicate sinks)
        configure_logging("DEBUG", str(log_file))
        logger.debug("experiment {} saved", "exp_1")
        logger.complete()
    finally:
        logger.remove()
        logger.add(sys.stderr)
    text = log_file.read_text(encoding="utf-8")
    assert text.count("experiment exp_1 saved") == 1
