import logging
from typing import Optional

from moodiary.core.config import config

# Transport libraries log every request at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai")


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logger once. Safe to call multiple times.
    """
    level_name = (level or config.log_level or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    transport_level = logging.DEBUG if level_value <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
