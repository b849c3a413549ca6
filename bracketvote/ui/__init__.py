"""Textual rendering for the bracket game."""

from .bracket_display import BracketDisplay, ContestantCard, LandingScreen

__all__ = ["BracketDisplay", "ContestantCard", "LandingScreen"]
