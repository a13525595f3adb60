# tests/test_logging.py
"""Tests for routing stdlib logging through loguru."""

import logging

from loguru import logger

from gst_compliance.core.logging_config import setup_logging
from gst_compliance.domain.services.gst_liability import net_liability


class TestSetupLogging:

    def test_domain_logs_reach_loguru(self):
        setup_logging("DEBUG")
        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record), level="DEBUG")
        try:
            logging.getLogger("filing_workflow").info("Return %s filed", "GSTR-3B")
        finally:
            logger.remove(sink_id)

        assert [r["message"] for r in messages] == ["Return GSTR-3B filed"]
        assert messages[0]["extra"]["logger_name"] == "filing_workflow"
        assert messages[0]["extra"]["app"] == "gst_compliance"

    def test_level_filters_debug(self):
        setup_logging("WARNING")
        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
        try:
            net_liability("042024", [], [])
            logging.getLogger("insights").debug("hidden")
            logging.getLogger("insights").warning("shown")
        finally:
            logger.remove(sink_id)

        assert messages == ["shown"]
