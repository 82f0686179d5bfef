"""Tests for the daily log file handler and bound log context."""
from __future__ import annotations

import logging
from datetime import date

from metricboard.core.log import DailyFileHandler
from metricboard.core.log.context import ContextFilter, log_context


def test_daily_file_handler_writes_one_file_per_day(tmp_path) -> None:
    handler = DailyFileHandler(tmp_path / "logs")
    handler.addFilter(ContextFilter())
    handler.setFormatter(logging.Formatter("%(context)s%(message)s"))
    record = logging.LogRecord("metricboard", logging.INFO, __file__, 1, "chart built", None, None)

    try:
        with log_context.scoped(tenant="tenant-a"):
            handler.handle(record)
    finally:
        handler.close()

    log_file = tmp_path / "logs" / f"{date.today():%Y_%m_%d}.log"
    assert log_file.read_text(encoding="utf-8").strip() == "tenant=tenant-a chart built"
