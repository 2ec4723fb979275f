import logging
import logging.handlers
from pathlib import Path

from coach.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Client libraries that are chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "openai", "httpx", "httpcore")

# Attempt-by-attempt history of program generation, kept apart from the main log
GENERATION_LOGGERS = (
    "coach.services.program_generator",
    "coach.services.response_parser",
)


def _remove_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter):
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_dir: str | Path = "logs", level: str | None = None):
    """
    Configures the root logger with a console handler and logs/coach.log,
    and writes generator attempts to logs/generation.log as well.
    Calling it again replaces the handlers instead of stacking them.
    """
    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    _remove_handlers(root_logger)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(_rotating_handler(logs_dir / "coach.log", logging.INFO, formatter))

    generation_handler = _rotating_handler(logs_dir / "generation.log", logging.INFO, formatter)
    for name in GENERATION_LOGGERS:
        generation_logger = logging.getLogger(name)
        _remove_handlers(generation_logger)
        generation_logger.addHandler(generation_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"Logging configured (level={logging.getLevelName(log_level)}, dir={logs_dir})")
