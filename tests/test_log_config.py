import logging

from cpumeter.util.log_config import attach_log_file, setup_logger


def test_setup_logger_replaces_handlers():
    logger = setup_logger("cpumeter.test_replace")
    logger = setup_logger("cpumeter.test_replace")

    assert len(logger.handlers) == 1
    assert not logger.propagate


def test_attach_log_file_adds_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "meter.log"
    logger = setup_logger("cpumeter.test_attach", level=logging.WARNING)

    attach_log_file(log_file)
    logger.debug("written to file only")
    for handler in logger.handlers:
        handler.flush()

    assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    assert "written to file only" in log_file.read_text(encoding="utf-8")
