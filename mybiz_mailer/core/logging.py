import sys
from loguru import logger
from .config import settings


def setup_logging():
    """Replace loguru's default sink with one honouring LOG_LEVEL and return the logger."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level> | {extra}"
        ),
        backtrace=False,
        diagnose=False,  # variable dumps would include mail credentials
    )
    return logger
