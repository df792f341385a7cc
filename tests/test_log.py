"""Tests for root logger setup."""

from __future__ import annotations

import logging

import pytest

from core.log import setup_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def test_level_applies_when_handlers_already_exist(root_logger):
    root_logger.addHandler(logging.NullHandler())
    handlers = list(root_logger.handlers)

    setup_logging("DEBUG")

    assert root_logger.level == logging.DEBUG
    assert root_logger.handlers == handlers


def test_adds_console_handler_when_none_exist(root_logger):
    root_logger.handlers[:] = []

    setup_logging("warning")

    assert root_logger.level == logging.WARNING
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)


def test_unknown_level_falls_back_to_info(root_logger):
    setup_logging("chatty")

    assert root_logger.level == logging.INFO
