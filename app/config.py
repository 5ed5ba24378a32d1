"""
Configuration settings for the resume builder application.

Values are read from the environment (a local .env file is honoured), so the
debounce window, export scale and output directory can be changed without
touching the code.
"""

from dotenv import load_dotenv
load_dotenv()          # ← must be before os.getenv(...)
import os
from pathlib import Path


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Form controller
# Personal-info text fields coalesce bursts of edits within this window.
DEBOUNCE_MS = _int_env("DEBOUNCE_MS", 250)

# Export pipeline
EXPORT_SCALE = _float_env("EXPORT_SCALE", 2)
BROWSER_TIMEOUT_MS = _int_env("BROWSER_TIMEOUT_MS", 15000)
PREVIEW_ELEMENT_ID = "resume-preview"

# Page formats in millimetres (width, height), portrait
PAGE_FORMATS = {
    "a4": (210.0, 297.0),
}
PAGE_FORMAT = os.getenv("PAGE_FORMAT", "a4").lower()
if PAGE_FORMAT not in PAGE_FORMATS:
    raise ValueError(f"Unsupported PAGE_FORMAT: {PAGE_FORMAT}. Choose from {sorted(PAGE_FORMATS)}.")

# When set, every successful export is also written to this directory
EXPORT_DIR = Path(os.environ["EXPORT_DIR"]) if os.getenv("EXPORT_DIR") else None

# Trigger feedback timings (seconds)
SUCCESS_LABEL_DELAY = 0.5
SUCCESS_RESET_DELAY = 2.0
FAILURE_RESET_DELAY = 3.0
BUSY_HIDE_DELAY = 0.5

# Live preview polling interval (seconds); picks up debounced edits
PREVIEW_REFRESH_S = _float_env("PREVIEW_REFRESH_S", 1.0)


def get_page_size(page_format: str = None) -> tuple[float, float]:
    """Get the (width, height) in mm for the specified page format."""
    page_format = (page_format or PAGE_FORMAT).lower()
    return PAGE_FORMATS[page_format]
