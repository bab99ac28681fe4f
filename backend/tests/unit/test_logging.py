from __future__ import annotations

import logging

import pytest
import structlog

from resume_intake.core import logging as app_logging


@pytest.fixture
def restore_structlog(monkeypatch):
    monkeypatch.setattr(app_logging, "_configured", False)
    yield
    structlog.reset_defaults()


def test_loggers_filter_below_configured_level(restore_structlog) -> None:
    app_logging.setup_logging("WARNING")

    assert app_logging.is_configured()
    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(logging.WARNING)

    bound = app_logging.get_logger("tests").bind(run_id="r1")
    assert isinstance(bound, structlog.make_filtering_bound_logger(logging.WARNING))
