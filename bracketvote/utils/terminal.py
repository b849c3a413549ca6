"""Terminal state cleanup after Textual apps."""

import sys

# Escape sequences that undo what Textual turns on
_RESET_SEQUENCES = [
    "\033[?1000l",  # Disable X11 mouse reporting
    "\033[?1003l",  # Disable all mouse motion reporting
    "\033[?1015l",  # Disable urxvt mouse mode
    "\033[?1006l",  # Disable SGR mouse mode
    "\033[?25h",  # Show cursor
    "\033[?1004l",  # Disable focus reporting
]


def cleanup_terminal() -> None:
    """Disable mouse tracking and restore the cursor"""
    try:
        for seq in _RESET_SEQUENCES:
            sys.stdout.write(seq)
        sys.stdout.flush()
    except (OSError, ValueError):
        # stdout already closed
        pass
