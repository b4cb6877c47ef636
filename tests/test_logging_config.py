import logging
import pytest
from w1temp.config import AppConfig, LoggingSettings
from w1temp.logging_config import ShortFormatter, setup_logging, resolve_logging_from_env_and_cfg

@pytest.fixture
def clean_env(monkeypatch):
    for k in ("W1T_LOGGING", "W1T_LOG_LEVEL", "W1T_LOG_FILE"):
        monkeypatch.delenv(k, raising=False)

@pytest.fixture
def fresh_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    setup_logging._configured = False
    yield
    setup_logging._configured = False
    logging.disable(logging.NOTSET)
    root.handlers[:] = handlers
    root.setLevel(level)

def test_cfg_used_without_env(clean_env):
    cfg = AppConfig(logging=LoggingSettings(enabled=False, level="DEBUG", file="/tmp/x.log"))
    assert resolve_logging_from_env_and_cfg(cfg) == (False, "DEBUG", "/tmp/x.log")

def test_env_wins(clean_env, monkeypatch):
    monkeypatch.setenv("W1T_LOGGING", "0")
    monkeypatch.setenv("W1T_LOG_LEVEL", "WARNING")
    cfg = AppConfig(logging=LoggingSettings(enabled=True, level="DEBUG"))
    assert resolve_logging_from_env_and_cfg(cfg) == (False, "WARNING", None)

def test_no_cfg(clean_env):
    assert resolve_logging_from_env_and_cfg(object()) == (True, "INFO", None)

def test_short_formatter():
    rec = logging.LogRecord("w1temp.watcher.Watcher", logging.INFO, __file__, 1, "hi", None, None, func="poll_once")
    out = ShortFormatter("[%(shortname)s.%(funcName)s] %(message)s").format(rec)
    assert out == "[Watcher.poll_once] hi"

def test_setup_writes_file(tmp_path, fresh_logging):
    log_file = tmp_path / "logs" / "w1temp.log"
    setup_logging(True, "debug", str(log_file))
    logging.getLogger("w1temp.test").debug("hello %d", 42)
    for h in logging.getLogger().handlers:
        h.flush()
    assert "hello 42" in log_file.read_text()
    assert logging.getLogger().level == logging.DEBUG

def test_setup_once(fresh_logging):
    setup_logging(True, "INFO")
    handlers = logging.getLogger().handlers[:]
    setup_logging(True, "DEBUG")
    assert logging.getLogger().handlers == handlers
