import unittest

from scoremaster.models import MatchState
from scoremaster.services import (
    InvalidSubstitution, SubstitutionQuotaExceeded, SubstitutionWindowClosed,
    UnknownEntity, substitute,
)


class SubstitutionServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.state = MatchState()

    def test_rejected_outside_break(self) -> None:
        with self.assertRaises(SubstitutionWindowClosed):
            substitute(self.state, 1, 108, 101, is_break_active=False)
        self.assertEqual(self.state, MatchState())
        self.assertEqual(self.state.substitutions.used_by(1), 0)

    def test_swaps_pair_and_spends_budget(self) -> None:
        state = substitute(self.state, 1, 108, 101, is_break_active=True)
        team = state.team(1)
        self.assertTrue(team.find_player(108).is_active)
        self.assertFalse(team.find_player(101).is_active)
        self.assertEqual(len(team.active_players()), 7)
        self.assertEqual(state.substitutions.used_by(1), 1)
        self.assertEqual(state.substitutions.used_by(2), 0)
        self.assertEqual(state.version, self.state.version + 1)

    def test_quota_of_two_per_break(self) -> None:
        state = substitute(self.state, 1, 108, 101, is_break_active=True)
        state = substitute(state, 1, 109, 102, is_break_active=True)
        with self.assertRaises(SubstitutionQuotaExceeded):
            substitute(state, 1, 110, 103, is_break_active=True)
        # The other team still has its own budget
        state = substitute(state, 2, 208, 201, is_break_active=True)
        self.assertEqual(state.substitutions.used_by(2), 1)

    def test_window_checked_before_quota(self) -> None:
        state = substitute(self.state, 1, 108, 101, is_break_active=True)
        state = substitute(state, 1, 109, 102, is_break_active=True)
        with self.assertRaises(SubstitutionWindowClosed):
            substitute(state, 1, 110, 103, is_break_active=False)

    def test_unknown_team_and_players(self) -> None:
        with self.assertRaises(UnknownEntity):
            substitute(self.state, 5, 108, 101, is_break_active=True)
        with self.assertRaises(UnknownEntity):
            substitute(self.state, 1, 208, 101, is_break_active=True)
        with self.assertRaises(UnknownEntity):
            substitute(self.state, 1, 108, 999, is_break_active=True)

    def test_invalid_pairs(self) -> None:
        with self.assertRaises(InvalidSubstitution):
            substitute(self.state, 1, 102, 101, is_break_active=True)
        with self.assertRaises(InvalidSubstitution):
            substitute(self.state, 1, 108, 109, is_break_active=True)
        with self.assertRaises(InvalidSubstitution):
            substitute(self.state, 1, 101, 101, is_break_active=True)


if __name__ == "__main__":
    unittest.main()
