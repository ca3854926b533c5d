import logging
import sys

from loguru import logger

LOG_FORMAT = " | ".join(
    (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>",
        "<level>{level:<8}</level>",
        "<cyan>{name}:{function}:{line}</cyan>",
        "{message}",
    )
)


class InterceptHandler(logging.Handler):
    """Route stdlib logging records (uvicorn, sqlalchemy) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level.upper())
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False
