"""
Logging setup for the resume builder.

– one stream handler on the root logger, level from LOG_LEVEL
– quiets chatty third-party loggers (Pillow, asyncio, Streamlit's file watcher)
"""
import logging

from config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_NOISY = ("PIL", "asyncio", "watchdog", "urllib3")


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    root = logging.getLogger()
    root.setLevel(level or LOG_LEVEL)
    if not any(getattr(h, "_resume_builder", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._resume_builder = True
        root.addHandler(handler)
    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.WARNING)
