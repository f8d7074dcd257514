from __future__ import annotations

import logging

from jobfit.log import PACKAGE_LOGGER, get_logger, level_from_env, setup_logging


def test_names_are_scoped_under_package():
    assert get_logger("jobfit.scorer").name == "jobfit.scorer"
    assert get_logger("scripts").name == "jobfit.scripts"


def test_level_from_env(monkeypatch):
    monkeypatch.delenv("JOBFIT_LOG_LEVEL", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert level_from_env() == logging.DEBUG
    monkeypatch.setenv("JOBFIT_LOG_LEVEL", "warning")
    assert level_from_env() == logging.WARNING
    monkeypatch.setenv("JOBFIT_LOG_LEVEL", "chatty")
    assert level_from_env() == logging.INFO


def test_file_handler_is_opt_in(tmp_path):
    try:
        package = setup_logging(logging.INFO, log_dir=tmp_path)
        get_logger("jobfit.test").info("hello file")
        for handler in package.handlers:
            handler.flush()
        [written] = list(tmp_path.glob("jobfit_*.log"))
        assert "hello file" in written.read_text(encoding="utf-8")
    finally:
        package = setup_logging(logging.INFO, log_dir="")
    assert all(not isinstance(h, logging.FileHandler) for h in package.handlers)
    assert package.name == PACKAGE_LOGGER
