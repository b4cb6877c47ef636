from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler

ENV_ENABLED = "W1T_LOGGING"
ENV_LEVEL = "W1T_LOG_LEVEL"
ENV_FILE = "W1T_LOG_FILE"

class ShortFormatter(logging.Formatter):
    """Adds %(shortname)s: the class or module part of a dotted logger name."""
    def format(self, record: logging.LogRecord) -> str:
        record.shortname = record.name.rsplit('.', 1)[-1]
        return super().format(record)

def setup_logging(enabled: bool = True, level: str | int = "INFO", log_file: str | None = None) -> None:
    """Install stdout (and optional rotating file) handlers on the root logger; later calls are no-ops."""
    if getattr(setup_logging, "_configured", False):
        return

    if not enabled:
        logging.disable(logging.CRITICAL)
        setup_logging._configured = True
        return

    logging.disable(logging.NOTSET)
    lvl = level.upper() if isinstance(level, str) else level
    fmt = "%(asctime)s %(levelname)s [%(shortname)s.%(funcName)s] %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = ShortFormatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []
    sh = logging.StreamHandler(stream=sys.stdout)
    sh.setFormatter(formatter)
    handlers.append(sh)

    file_error: OSError | None = None
    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            fh = RotatingFileHandler(log_file, maxBytes=512_000, backupCount=3)
            fh.setFormatter(formatter)
            handlers.append(fh)
        except OSError as e:
            # keep console
            file_error = e

    logging.basicConfig(level=lvl, handlers=handlers, force=True)
    setup_logging._configured = True
    if file_error is not None:
        logging.getLogger(__name__).warning("Log file %s unavailable: %s", log_file, file_error)

def resolve_logging_from_env_and_cfg(cfg) -> tuple[bool, str, str | None]:
    """W1T_LOGGING, W1T_LOG_LEVEL and W1T_LOG_FILE override cfg.logging field by field."""
    env_enabled = os.getenv(ENV_ENABLED)
    enabled = (env_enabled is None) or (env_enabled.lower() not in ("0", "false", "no"))
    level = os.getenv(ENV_LEVEL, "INFO")
    log_file = os.getenv(ENV_FILE)

    lcfg = getattr(cfg, "logging", None)
    if lcfg is not None:
        if env_enabled is None:
            enabled = bool(lcfg.enabled)
        if os.getenv(ENV_LEVEL) is None:
            level = str(lcfg.level)
        if os.getenv(ENV_FILE) is None and lcfg.file:
            log_file = str(lcfg.file)

    return enabled, level, log_file
