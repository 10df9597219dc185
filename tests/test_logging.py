"""Tests for logging setup."""
import io
import logging

from versefill.utils.logging import setup_logging


def test_setup_logging_writes_to_stream(tmp_path):
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    stream = io.StringIO()
    log_file = tmp_path / "versefill.log"
    try:
        setup_logging(logging.INFO, format_string="%(levelname)s %(message)s", log_file=str(log_file), stream=stream)
        logging.getLogger("versefill.test").info("Expanded 'John 3:16'")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            if handler not in handlers:
                handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)

    assert stream.getvalue() == "INFO Expanded 'John 3:16'\n"
    assert "Expanded 'John 3:16'" in log_file.read_text()
