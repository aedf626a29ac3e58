"""Tests for stepwise logging configuration and the executor's log records."""

import logging
import math
from io import StringIO

import pytest

from stepwise import logging as stepwise_logging
from stepwise.logging import configure_logging, get_logger, set_log_level
from stepwise.optimize import Brent, Executor, Problem


@pytest.fixture
def log_stream():
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    yield stream
    configure_logging(level=logging.WARNING)


def test_level_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STEPWISE_LOG_LEVEL", "debug")
    assert stepwise_logging._level_from_env() == logging.DEBUG
    monkeypatch.setenv("STEPWISE_LOG_LEVEL", "not-a-level")
    assert stepwise_logging._level_from_env() == logging.WARNING
    monkeypatch.delenv("STEPWISE_LOG_LEVEL")
    assert stepwise_logging._level_from_env() == logging.WARNING


def test_module_names_are_placed_under_package():
    assert get_logger("brent").name == "stepwise.brent"
    assert get_logger("stepwise.optimize.executor").name == "stepwise.optimize.executor"
    assert get_logger().name == "stepwise"
    assert get_logger("stepwise") is get_logger()


def test_module_loggers_share_the_package_handler(log_stream):
    get_logger("solver_a").info("from a")
    get_logger("solver_b").warning("from b")
    output = log_stream.getvalue()
    assert "[INFO] stepwise.solver_a: from a" in output
    assert "[WARNING] stepwise.solver_b: from b" in output
    assert not get_logger("solver_a").handlers


def test_set_log_level_filters_package_records(log_stream):
    set_log_level("ERROR")
    get_logger("quiet").warning("dropped")
    get_logger("quiet").error("kept")
    output = log_stream.getvalue()
    assert "dropped" not in output
    assert "kept" in output


def test_executor_logs_run_start_end_and_iterations(log_stream):
    res = Executor(
        Problem(fun=lambda x: (x - 1.0) ** 2), Brent(-3.0, 4.0), math.nan, max_iters=2
    ).run()
    lines = log_stream.getvalue().splitlines()
    executor_lines = [line for line in lines if "stepwise.optimize.executor" in line]
    assert executor_lines[0].startswith("[INFO]")
    assert "Starting Brent (max_iters=2)" in executor_lines[0]
    assert [line for line in executor_lines if line.startswith("[DEBUG]")] == [
        line for line in executor_lines if ": iter " in line
    ]
    assert sum(": iter " in line for line in executor_lines) == res.nit
    assert executor_lines[-1].startswith("[INFO]")
    assert "Brent finished after 2 iterations" in executor_lines[-1]
    assert "Maximum number of iterations reached" in executor_lines[-1]


def test_executor_iteration_records_hidden_at_info(log_stream):
    set_log_level(logging.INFO)
    Executor(Problem(fun=lambda x: x * x), Brent(-1.0, 2.0), math.nan, max_iters=3).run()
    output = log_stream.getvalue()
    assert "Starting Brent" in output
    assert "[DEBUG]" not in output


def test_custom_format_string(log_stream):
    stream = StringIO()
    configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)
    get_logger("fmt").info("hello")
    assert stream.getvalue() == "INFO|hello\n"
