"""Bracket voting game - pick favourites pair by pair until one is left."""

from .engine import (
    InvalidRoster,
    InvalidSelection,
    advance_if_ready,
    current_matchup,
    initialize,
    select,
)
from .models import DEFAULT_ROSTER, Contestant, Tournament, TournamentStatus
from .ui import BracketDisplay

__version__ = "1.0.0"
__all__ = [
    "BracketDisplay",
    "Contestant",
    "DEFAULT_ROSTER",
    "InvalidRoster",
    "InvalidSelection",
    "Tournament",
    "TournamentStatus",
    "advance_if_ready",
    "current_matchup",
    "initialize",
    "select",
]
