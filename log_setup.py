import sys
import logging

from loguru import logger

from config import LOG_LEVEL

_VALID_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class InterceptHandler(logging.Handler):
    """Redirige los mensajes del logging estándar (uvicorn, fastapi) hacia loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Nivel equivalente en loguru, si existe
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Busca el frame que originó el mensaje
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configura loguru con una única salida a stderr."""
    if level not in _VALID_LEVELS:
        level = "INFO"

    logger.remove()  # Quita el handler por defecto
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        backtrace=True,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.debug(f"Logging inicializado con nivel {level}")
