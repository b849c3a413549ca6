"""Unit tests for the bracket engine state transitions"""

import random

import pytest

from bracketvote.engine import (
    InvalidRoster,
    InvalidSelection,
    advance_if_ready,
    current_matchup,
    identity_shuffle,
    initialize,
    random_shuffle,
    seeded_shuffle,
    select,
)
from bracketvote.models import Contestant, TournamentStatus, build_roster


def ids(contestants) -> list[int]:
    return [c.id for c in contestants]


def play_round(tournament, choices):
    """Apply one pick per choice, returning the tournament and matchups seen"""
    seen = []
    for choice in choices:
        matchup = current_matchup(tournament)
        assert matchup is not None
        seen.append(matchup)
        tournament = select(tournament, choice)
    return tournament, seen


@pytest.mark.unit
class TestInitialize:
    """Test seeding a fresh tournament"""

    def test_initialize_with_identity_shuffle(self):
        """Test that identity shuffle keeps roster order in round 1"""
        roster = build_roster(8)
        tournament = initialize(roster, identity_shuffle)

        assert ids(tournament.round.pending) == [1, 2, 3, 4, 5, 6, 7, 8]
        assert tournament.round.advanced == ()
        assert tournament.round_number == 1
        assert tournament.status == TournamentStatus.IN_PROGRESS
        assert tournament.winner is None
        assert tournament.roster_size == 8

    def test_initialize_default_shuffle_is_permutation(self):
        """Test that the default shuffle keeps every contestant exactly once"""
        roster = build_roster(8)
        tournament = initialize(roster)

        assert sorted(ids(tournament.round.pending)) == ids(roster)

    def test_seeded_shuffle_is_reproducible(self):
        """Test that the same seed gives the same opening order"""
        roster = build_roster(8)
        first = initialize(roster, seeded_shuffle(42))
        second = initialize(roster, seeded_shuffle(42))

        assert ids(first.round.pending) == ids(second.round.pending)

    def test_random_shuffle_returns_new_list(self):
        """Test that random_shuffle leaves the input untouched"""
        roster = build_roster(8)
        shuffled = random_shuffle(roster)

        assert ids(roster) == [1, 2, 3, 4, 5, 6, 7, 8]
        assert sorted(ids(shuffled)) == ids(roster)

    @pytest.mark.parametrize("size", [0, 1, 3, 6, 12])
    def test_rejects_non_power_of_two_roster(self, size):
        """Test that rosters which cannot form a bracket are rejected"""
        with pytest.raises(InvalidRoster):
            initialize(build_roster(size), identity_shuffle)

    def test_rejects_duplicate_ids(self):
        """Test that contestant ids must be unique"""
        roster = [
            Contestant(id=1, image_ref="/1.jpeg"),
            Contestant(id=1, image_ref="/other.jpeg"),
        ]
        with pytest.raises(InvalidRoster, match="duplicate"):
            initialize(roster, identity_shuffle)

    def test_rejects_shuffle_that_drops_contestants(self):
        """Test that a broken shuffle collaborator is caught"""

        def lossy(contestants):
            return list(contestants[:-1]) + [contestants[0]]

        with pytest.raises(InvalidRoster, match="permutation"):
            initialize(build_roster(4), lossy)


@pytest.mark.unit
class TestSelectAndAdvance:
    """Test resolving matchups and moving between rounds"""

    def test_four_contestant_scenario(self):
        """Test the full 4-contestant bracket with identity shuffle"""
        tournament = initialize(build_roster(4), identity_shuffle)

        assert ids(current_matchup(tournament)) == [1, 2]
        tournament = select(tournament, 0)
        assert ids(current_matchup(tournament)) == [3, 4]
        tournament = select(tournament, 0)

        assert ids(tournament.round.advanced) == [1, 3]
        assert current_matchup(tournament) is None
        assert tournament.status == TournamentStatus.ROUND_TRANSITION

        tournament = advance_if_ready(tournament)
        assert tournament.round_number == 2
        assert ids(tournament.round.pending) == [1, 3]
        assert tournament.round.advanced == ()
        assert tournament.status == TournamentStatus.IN_PROGRESS

        tournament = select(tournament, 1)
        tournament = advance_if_ready(tournament)
        assert tournament.status == TournamentStatus.COMPLETE
        assert tournament.winner is not None
        assert tournament.winner.id == 3

    def test_select_removes_both_contestants(self):
        """Test that the loser is discarded and the winner advanced"""
        tournament = initialize(build_roster(8), identity_shuffle)
        tournament = select(tournament, 1)

        assert ids(tournament.round.pending) == [3, 4, 5, 6, 7, 8]
        assert ids(tournament.round.advanced) == [2]

    def test_select_does_not_advance_round(self):
        """Test that finishing a round waits for advance_if_ready"""
        tournament = initialize(build_roster(2), identity_shuffle)
        tournament = select(tournament, 0)

        assert tournament.round_number == 1
        assert tournament.status == TournamentStatus.ROUND_TRANSITION
        assert tournament.winner is None

    def test_each_select_discards_exactly_one(self):
        """Test that pending + advanced shrinks by one per pick"""
        tournament = initialize(build_roster(16), seeded_shuffle(7))
        rng = random.Random(7)

        while not tournament.is_complete:
            if current_matchup(tournament) is None:
                tournament = advance_if_ready(tournament)
                continue
            before = len(tournament.round.pending) + len(tournament.round.advanced)
            tournament = select(tournament, rng.randint(0, 1))
            after = len(tournament.round.pending) + len(tournament.round.advanced)
            assert after == before - 1

    @pytest.mark.parametrize("k", [1, 2, 3, 4, 5])
    def test_single_winner_after_k_rounds(self, k):
        """Test that a 2^k roster finishes in exactly k rounds with one winner"""
        roster = build_roster(2**k)
        tournament = initialize(roster, seeded_shuffle(k))
        rng = random.Random(k)
        rounds_started = {tournament.round_number}

        while not tournament.is_complete:
            if current_matchup(tournament) is None:
                tournament = advance_if_ready(tournament)
                rounds_started.add(tournament.round_number)
                continue
            tournament = select(tournament, rng.randint(0, 1))

        assert len(rounds_started) == k
        assert tournament.round_number == k
        assert tournament.winner in roster

    def test_every_contestant_plays_once_per_round(self):
        """Test that each round pairs every surviving contestant exactly once"""
        roster = build_roster(8)
        tournament = initialize(roster, seeded_shuffle(3))
        entrants = set(ids(roster))

        while True:
            tournament, seen = play_round(
                tournament, [0] * (len(tournament.round.pending) // 2)
            )
            played = [c.id for pair in seen for c in pair]
            assert len(played) == len(set(played))
            assert set(played) == entrants

            entrants = set(ids(tournament.round.advanced))
            tournament = advance_if_ready(tournament)
            if tournament.is_complete:
                break

        assert {tournament.winner.id} == entrants

    def test_survivors_keep_pick_order(self):
        """Test that the next round is ordered by the previous round's picks"""
        tournament = initialize(build_roster(8), identity_shuffle)
        tournament, _ = play_round(tournament, [1, 0, 1, 0])
        tournament = advance_if_ready(tournament)

        assert ids(tournament.round.pending) == [2, 3, 6, 7]


@pytest.mark.unit
class TestAdvanceIfReady:
    """Test that advancing is idempotent and safe at any time"""

    def test_no_change_mid_round(self):
        """Test that advancing with an open matchup changes nothing"""
        tournament = initialize(build_roster(4), identity_shuffle)
        tournament = select(tournament, 0)

        assert advance_if_ready(tournament) == tournament

    def test_twice_equals_once_at_round_end(self):
        """Test idempotence across a round transition"""
        tournament = initialize(build_roster(8), identity_shuffle)
        tournament, _ = play_round(tournament, [0, 0, 0, 0])

        once = advance_if_ready(tournament)
        twice = advance_if_ready(once)
        assert once == twice
        assert once.round_number == 2

    def test_twice_equals_once_at_final(self):
        """Test idempotence when crowning the winner"""
        tournament = initialize(build_roster(2), identity_shuffle)
        tournament = select(tournament, 1)

        once = advance_if_ready(tournament)
        twice = advance_if_ready(once)
        assert once == twice
        assert once.winner.id == 2

    def test_complete_tournament_is_terminal(self):
        """Test that a finished tournament is returned unchanged"""
        tournament = initialize(build_roster(2), identity_shuffle)
        tournament = advance_if_ready(select(tournament, 0))

        assert advance_if_ready(tournament) is tournament


@pytest.mark.unit
class TestInvalidSelection:
    """Test that bad picks are rejected without touching state"""

    def test_out_of_range_index(self):
        """Test that only the integers 0 and 1 are accepted"""
        tournament = initialize(build_roster(4), identity_shuffle)
        snapshot = tournament.model_copy(deep=True)

        for bad in (2, -1, 1.0, 0.0, None, True, "0"):
            with pytest.raises(InvalidSelection):
                select(tournament, bad)
        assert tournament == snapshot

    def test_select_on_complete_tournament(self):
        """Test that picks after the final are rejected"""
        tournament = initialize(build_roster(2), identity_shuffle)
        tournament = advance_if_ready(select(tournament, 0))
        snapshot = tournament.model_copy(deep=True)

        with pytest.raises(InvalidSelection, match="complete"):
            select(tournament, 0)
        assert tournament == snapshot

    def test_select_between_rounds(self):
        """Test that picks with no open matchup are rejected"""
        tournament = initialize(build_roster(4), identity_shuffle)
        tournament, _ = play_round(tournament, [0, 0])

        with pytest.raises(InvalidSelection, match="No matchup"):
            select(tournament, 0)

    def test_rejected_selection_is_logged(self, capsys):
        """Test that the engine records every rejected pick"""
        tournament = initialize(build_roster(2), identity_shuffle)

        with pytest.raises(InvalidSelection):
            select(tournament, 1.0)

        out = capsys.readouterr().out
        assert "Selection rejected: Choice index must be 0 or 1, got 1.0" in out
