"""Errors raised by the bracket engine."""


class BracketError(Exception):
    """Base class for bracket engine errors"""


class InvalidSelection(BracketError):
    """A pick was made with no open matchup, a bad index, or after the final.

    Recoverable: callers should ignore the action.
    """


class InvalidRoster(BracketError):
    """The roster cannot seed a single-elimination bracket"""
