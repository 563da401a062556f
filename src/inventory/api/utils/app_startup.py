"""Loguru setup shared by the API process."""

import logging
import sys
from pathlib import Path

from loguru import logger

from src.inventory.runtime.config.config_data import ConfigData, LoggingConfig
from src.inventory.runtime.context import get_config

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# stdlib loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Request logging is done by the HTTP middleware
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, diagnose: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        # serialize=True writes a JSON record and ignores the format
        format="{message}" if as_json else CONSOLE_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=diagnose,
        diagnose=diagnose,
    )


def configure_logging(config: ConfigData | None = None) -> None:
    """Reset loguru sinks from the ``logging`` section of the configuration.

    Every record carries a ``request_id`` extra, ``-`` outside of a request.
    """
    config = config or get_config()
    cfg = config.logging
    # Variable values in tracebacks can leak data in production
    diagnose = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})

    logger.add(
        sys.stderr,
        level=cfg.level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=diagnose,
        diagnose=diagnose,
    )
    if cfg.file:
        _add_file_sink(cfg, diagnose)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logger.bind(
        level=cfg.level,
        format=cfg.format,
        file=cfg.file,
        environment=config.app.environment,
    ).info("Logging configured")
