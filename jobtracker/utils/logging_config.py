import logging

from ..config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Install a basic formatter on the root logger, once."""
    if logging.getLogger().handlers:
        # Already configured (uvicorn, pytest, or a reload).
        return
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    logging.basicConfig(level=level, format=fmt)
