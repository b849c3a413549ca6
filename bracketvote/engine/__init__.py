"""Bracket engine: tournament state transitions."""

from .bracket import Matchup, advance_if_ready, current_matchup, initialize, select
from .exceptions import BracketError, InvalidRoster, InvalidSelection
from .shuffle import Shuffler, identity_shuffle, random_shuffle, seeded_shuffle

__all__ = [
    "Matchup",
    "initialize",
    "current_matchup",
    "select",
    "advance_if_ready",
    "BracketError",
    "InvalidRoster",
    "InvalidSelection",
    "Shuffler",
    "identity_shuffle",
    "random_shuffle",
    "seeded_shuffle",
]
