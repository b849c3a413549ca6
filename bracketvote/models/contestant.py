"""Bracket data models: contestants, rounds and tournament state."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class FrozenModel(BaseModel):
    """Immutable base model; every state change produces a new instance"""

    model_config = ConfigDict(frozen=True)


class Contestant(FrozenModel):
    """An entrant in the bracket, identified by its id"""

    id: int
    image_ref: str

    @property
    def label(self) -> str:
        return f"#{self.id}"


class Round(FrozenModel):
    """Contestants still waiting to be paired, and those already through"""

    pending: tuple[Contestant, ...] = ()
    advanced: tuple[Contestant, ...] = ()

    @property
    def size(self) -> int:
        """Number of contestants that entered this round"""
        # every completed matchup moved two out of pending and one into advanced
        return len(self.pending) + 2 * len(self.advanced)


class TournamentStatus(str, Enum):
    """Where the tournament stands after the last operation"""

    IN_PROGRESS = "in_progress"  # a matchup is waiting for a pick
    ROUND_TRANSITION = "round_transition"  # round resolved, waiting on advance
    COMPLETE = "complete"  # terminal, winner is set


class Tournament(FrozenModel):
    """Complete single-elimination state owned by one session"""

    round_number: int = Field(default=1, ge=1)
    round: Round
    status: TournamentStatus = TournamentStatus.IN_PROGRESS
    winner: Contestant | None = None
    roster_size: int = Field(ge=2)

    @model_validator(mode="after")
    def check_winner_matches_status(self) -> "Tournament":
        """A winner is set exactly when the tournament is complete"""
        if (self.status == TournamentStatus.COMPLETE) != (self.winner is not None):
            raise ValueError(
                f"status {self.status.value} inconsistent with winner {self.winner!r}"
            )
        return self

    @property
    def is_complete(self) -> bool:
        return self.status == TournamentStatus.COMPLETE

    @property
    def total_rounds(self) -> int:
        return int(math.log2(self.roster_size))

    @property
    def matches_in_round(self) -> int:
        return self.round.size // 2

    @property
    def match_number(self) -> int:
        """1-based position of the current matchup within the round"""
        return len(self.round.advanced) + 1
