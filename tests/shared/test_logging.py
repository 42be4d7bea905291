import logging

import pytest
import structlog
from shared.logging import (
    LOG_FILE_PREFIX,
    add_context,
    build_processors,
    clear_context,
    get_log_level,
    setup_stdlib_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


class TestLogLevel:
    @pytest.mark.parametrize(
        "environment, level",
        [("production", "INFO"), ("development", "DEBUG"), ("test", "WARNING"), ("qa", "INFO")],
    )
    def test_level_follows_environment(self, monkeypatch, environment, level):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENV", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", environment)
        assert get_log_level() == level

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestProcessors:
    def test_production_renders_json(self):
        assert isinstance(build_processors("production")[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self):
        assert isinstance(build_processors("development")[-1], structlog.dev.ConsoleRenderer)


class TestHandlers:
    def test_writes_rotating_files(self, tmp_path, restore_root_logger):
        setup_stdlib_logging(tmp_path / "logs")
        filenames = {
            getattr(handler, "baseFilename", "").rsplit("/", 1)[-1] for handler in logging.getLogger().handlers
        }
        assert {f"{LOG_FILE_PREFIX}.log", f"{LOG_FILE_PREFIX}_error.log"} <= filenames


class TestContext:
    def test_bound_values_visible_until_cleared(self):
        clear_context()
        add_context(request_id="req-1", path="/orders")
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1", "path": "/orders"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
