"""
核心工具测试：日志与数据库初始化
"""
import logging

import pytest
from sqlalchemy import inspect

from painting_agent.core import get_logger, log_elapsed, setup_logging
from painting_agent.core.database import build_engine, init_db


def _console_handlers() -> list:
    return [h for h in logging.getLogger().handlers if h.get_name() == "painting_agent.console"]


def test_setup_logging_is_idempotent() -> None:
    setup_logging("DEBUG")
    setup_logging("INFO")

    assert len(_console_handlers()) == 1
    assert logging.getLogger().level == logging.INFO
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_log_elapsed_reports_duration(caplog) -> None:
    logger = get_logger("painting_agent.tests")
    with caplog.at_level(logging.INFO, logger="painting_agent.tests"):
        with log_elapsed(logger, "下载完成"):
            pass

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert message.startswith("下载完成 (")
    assert message.endswith("ms)")


def test_log_elapsed_skips_message_on_error(caplog) -> None:
    logger = get_logger("painting_agent.tests")
    with caplog.at_level(logging.INFO, logger="painting_agent.tests"):
        with pytest.raises(RuntimeError):
            with log_elapsed(logger, "下载完成"):
                raise RuntimeError("boom")

    assert caplog.records == []


def test_init_db_creates_tables() -> None:
    engine = build_engine("sqlite://")
    init_db(engine)

    tables = set(inspect(engine).get_table_names())
    assert {"ideas", "paintings"} <= tables
