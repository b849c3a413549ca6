"""Single-elimination bracket engine.

The engine is four functions over an immutable :class:`Tournament` value:

- :func:`initialize` seeds a shuffled roster into round 1
- :func:`current_matchup` reads the pair waiting for a pick
- :func:`select` resolves that pair
- :func:`advance_if_ready` moves to the next round or crowns the winner

Picking and advancing are separate so a renderer can animate the outgoing
pair before the next one (or the winner screen) appears. Nothing here knows
about time.
"""

from typing import Sequence

from ..models import Contestant, Round, Tournament, TournamentStatus
from ..utils.logging import log
from .exceptions import InvalidRoster, InvalidSelection
from .shuffle import Shuffler, random_shuffle

Matchup = tuple[Contestant, Contestant]


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _validate_roster(roster: Sequence[Contestant]) -> None:
    size = len(roster)
    if size < 2 or not _is_power_of_two(size):
        raise InvalidRoster(
            f"Roster size must be a power of two of at least 2, got {size}"
        )
    ids = [c.id for c in roster]
    if len(set(ids)) != size:
        raise InvalidRoster(f"Roster contains duplicate contestant ids: {ids}")


def initialize(
    roster: Sequence[Contestant], shuffle: Shuffler | None = None
) -> Tournament:
    """Start a fresh tournament from ``roster`` in shuffled order.

    Args:
        roster: Contestants to seed; size must be a power of two >= 2
        shuffle: Ordering collaborator; defaults to a uniform random shuffle

    Raises:
        InvalidRoster: bad size, duplicate ids, or a shuffle that is not a
            permutation of the roster
    """
    _validate_roster(roster)
    shuffle = shuffle or random_shuffle

    order = tuple(shuffle(roster))
    if sorted(c.id for c in order) != sorted(c.id for c in roster):
        raise InvalidRoster("Shuffle did not return a permutation of the roster")

    log(f"🎲 New tournament: {len(order)} contestants, order {[c.id for c in order]}")
    return Tournament(
        round_number=1,
        round=Round(pending=order, advanced=()),
        status=TournamentStatus.IN_PROGRESS,
        roster_size=len(order),
    )


def current_matchup(tournament: Tournament) -> Matchup | None:
    """The first two pending contestants, or None between rounds / at the end"""
    pending = tournament.round.pending
    if len(pending) < 2:
        return None
    return pending[0], pending[1]


def _rejected(message: str) -> InvalidSelection:
    log(f"⚠️  Selection rejected: {message}")
    return InvalidSelection(message)


def select(tournament: Tournament, choice_index: int) -> Tournament:
    """Advance contestant ``choice_index`` (0 or 1) of the current matchup.

    Both contestants leave ``pending``; the loser is gone for good. Round
    and tournament transitions are left to :func:`advance_if_ready`.

    Raises:
        InvalidSelection: tournament already complete, index not 0 or 1, or
            no matchup open
    """
    if tournament.is_complete:
        raise _rejected("Tournament is already complete")
    # bools are ints and floats compare equal to 0/1, neither may index
    if (
        isinstance(choice_index, bool)
        or not isinstance(choice_index, int)
        or choice_index not in (0, 1)
    ):
        raise _rejected(f"Choice index must be 0 or 1, got {choice_index!r}")

    matchup = current_matchup(tournament)
    if matchup is None:
        raise _rejected("No matchup is open; advance the tournament first")

    chosen = matchup[choice_index]
    eliminated = matchup[1 - choice_index]
    pending = tournament.round.pending[2:]
    advanced = tournament.round.advanced + (chosen,)

    log(
        f"👉 Round {tournament.round_number}: {chosen.label} beats {eliminated.label}"
    )
    return tournament.model_copy(
        update={
            "round": Round(pending=pending, advanced=advanced),
            "status": (
                TournamentStatus.IN_PROGRESS
                if pending
                else TournamentStatus.ROUND_TRANSITION
            ),
        }
    )


def advance_if_ready(tournament: Tournament) -> Tournament:
    """Start the next round or crown the winner once ``pending`` is empty.

    Safe to call at any time; returns the tournament unchanged when there is
    nothing to do, so repeated calls are idempotent.
    """
    if tournament.is_complete or tournament.round.pending:
        return tournament

    advanced = tournament.round.advanced
    if len(advanced) >= 2:
        # survivors keep the order they were picked in
        next_round = tournament.round_number + 1
        log(f"🔔 Round {next_round} begins with {[c.id for c in advanced]}")
        return tournament.model_copy(
            update={
                "round_number": next_round,
                "round": Round(pending=advanced, advanced=()),
                "status": TournamentStatus.IN_PROGRESS,
            }
        )

    if len(advanced) == 1:
        winner = advanced[0]
        log(f"🏆 Winner: {winner.label} ({winner.image_ref})")
        return tournament.model_copy(
            update={"status": TournamentStatus.COMPLETE, "winner": winner}
        )

    return tournament
