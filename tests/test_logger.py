from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pageflows.core import logger as core_logger


def test_get_logger_writes_into_work_dir(tmp_path: Path) -> None:
    logger = core_logger.get_logger()
    logger.info("hello from test")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "root" / "pageflows" / "work" / "logs" / "pageflows.log"
    assert "hello from test" in log_file.read_text(encoding="utf-8")
    assert logger.propagate is False
    assert core_logger.get_logger() is logger


def test_child_loggers_share_handlers(tmp_path: Path) -> None:
    core_logger.get_logger(tmp_path / "logs")
    logging.getLogger("pageflows.workflows").info("from child")
    for handler in logging.getLogger("pageflows").handlers:
        handler.flush()

    assert "pageflows.workflows: from child" in (tmp_path / "logs" / "pageflows.log").read_text(encoding="utf-8")


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PAGEFLOWS_LOG_LEVEL", "debug")

    assert core_logger.get_logger(tmp_path).level == logging.DEBUG


def test_unknown_env_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PAGEFLOWS_LOG_LEVEL", "chatty")

    assert core_logger.get_logger(tmp_path).level == logging.INFO


def test_reset_logger_does_not_stack_handlers(tmp_path: Path) -> None:
    core_logger.get_logger(tmp_path)
    core_logger.reset_logger()
    logger = core_logger.get_logger(tmp_path)

    assert len(logger.handlers) == 2
