"""Headless driver that plays a bracket out to the end."""

import random
from typing import Callable, NamedTuple

from ..engine import advance_if_ready, current_matchup, select
from ..models import Contestant, Tournament
from .logging import log

Chooser = Callable[[Contestant, Contestant], int]


class MatchResult(NamedTuple):
    """One resolved matchup"""

    round_number: int
    left: Contestant
    right: Contestant
    winner: Contestant


def random_chooser(rng: random.Random | None = None) -> Chooser:
    """Pick either side with equal probability"""
    rng = rng or random.Random()

    def choose(left: Contestant, right: Contestant) -> int:
        return rng.randint(0, 1)

    return choose


def lowest_id_chooser(left: Contestant, right: Contestant) -> int:
    """Always advance the contestant with the smaller id"""
    return 0 if left.id < right.id else 1


def play_out(
    tournament: Tournament, chooser: Chooser
) -> tuple[Tournament, list[MatchResult]]:
    """Run select/advance cycles with no delay until a winner is crowned

    Returns the completed tournament and every matchup in the order played.
    """
    results: list[MatchResult] = []

    tournament = advance_if_ready(tournament)
    while not tournament.is_complete:
        matchup = current_matchup(tournament)
        if matchup is None:
            advanced = advance_if_ready(tournament)
            if advanced is tournament:
                # nothing left to pair and nobody to crown
                break
            tournament = advanced
            continue

        left, right = matchup
        choice = chooser(left, right)
        round_number = tournament.round_number
        tournament = select(tournament, choice)
        results.append(MatchResult(round_number, left, right, matchup[choice]))

    log(
        f"✅ Played {len(results)} matchups over {tournament.round_number} rounds, "
        f"winner {tournament.winner.label if tournament.winner else '-'}"
    )
    return tournament, results
