"""Unit tests for logging setup."""

import logging

import pytest

from log import setup_logging


@pytest.mark.unit
def test_setup_logging_is_idempotent():
    """Test repeated setup adds a single handler and applies the level."""
    root = logging.getLogger()
    setup_logging("DEBUG")
    setup_logging("WARNING")

    ours = [h for h in root.handlers if getattr(h, "_resume_builder", False)]
    assert len(ours) == 1
    assert root.level == logging.WARNING
    assert logging.getLogger("PIL").level == logging.WARNING

    root.removeHandler(ours[0])
