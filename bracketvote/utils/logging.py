"""Logging utilities for the bracket voting game."""

import logging
import os

# Global state
_console_logging_enabled = None
_file_logger = None

DEFAULT_LOG_FILE = "/tmp/bracketvote_debug.log"


def _console_enabled() -> bool:
    """Console output is on unless the TUI has switched it off"""
    if _console_logging_enabled is None:
        return True
    return _console_logging_enabled


def set_console_logging(enabled: bool):
    """Explicitly enable/disable console logging"""
    global _console_logging_enabled
    _console_logging_enabled = enabled


def _get_file_logger() -> logging.Logger:
    global _file_logger

    if _file_logger is None:
        _file_logger = logging.getLogger("bracketvote_file")
        _file_logger.setLevel(logging.DEBUG)
        log_path = os.environ.get("BRACKETVOTE_LOG_FILE", DEFAULT_LOG_FILE)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        )
        _file_logger.addHandler(file_handler)
        _file_logger.propagate = False
    return _file_logger


def log(message: str):
    """
    Log a status line:
    - Always written to the debug file
    - Echoed to the console for headless runs
    - Kept off the console while the TUI owns the screen
    """
    _get_file_logger().info(message)

    if _console_enabled():
        print(message)
