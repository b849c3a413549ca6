"""Data models for the bracket game."""

from .contestant import Contestant, Round, Tournament, TournamentStatus
from .roster import DEFAULT_ROSTER, ROSTER_SIZE, build_roster

__all__ = [
    "Contestant",
    "Round",
    "Tournament",
    "TournamentStatus",
    "DEFAULT_ROSTER",
    "ROSTER_SIZE",
    "build_roster",
]
