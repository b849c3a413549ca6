"""Shared fixtures"""

import pytest

from bracketvote.utils import logging as bv_logging


@pytest.fixture(autouse=True)
def restore_console_logging():
    """The TUI switches console logging off on mount; undo it between tests"""
    yield
    bv_logging._console_logging_enabled = None
