import io
import logging

from libs.common import configure_logging
from libs.common.logging import NO_CORRELATION_ID, get_correlation_id, set_correlation_id


def test_log_lines_carry_correlation_id():
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    logger = logging.getLogger("xml_api.test")

    set_correlation_id("req-42")
    try:
        assert get_correlation_id() == "req-42"
        logger.info("saved file")
    finally:
        set_correlation_id(None)
    logger.info("outside a request")

    first, second = stream.getvalue().splitlines()
    assert "| INFO | req-42 | xml_api.test | saved file" in first
    assert f"| INFO | {NO_CORRELATION_ID} | xml_api.test | outside a request" in second


def test_configure_logging_replaces_handlers():
    configure_logging("debug")
    configure_logging("warning")

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
