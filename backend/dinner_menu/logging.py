import logging
import sys
from typing import Optional


LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# LiteLLM (behind dspy.LM) and httpx log every request at INFO.
NOISY_LOGGERS = ("LiteLLM", "litellm", "httpx", "httpcore")


def configure_logging(level: Optional[str] = None) -> None:
    if level is None:
        from dinner_menu.config import settings

        level = settings.log_level
    root = logging.getLogger()
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "dinner_menu")
