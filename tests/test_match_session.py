"""
Integration tests for MatchSession.

The clock ticker interval is set far beyond the test duration and ticks are
driven by calling ``tick()`` directly.
"""
import threading
import unittest

from scoremaster.models import PointType, ScoreEvent
from scoremaster.services import (
    CommentaryService, FoulPlayAnalysis, MatchSession, SubstitutionQuotaExceeded,
    SubstitutionWindowClosed, TimeoutUnavailable, UnknownEntity,
)


class RecordingClient:
    def __init__(self) -> None:
        self.requests = []

    def generate(self, request) -> str:
        self.requests.append(request)
        return f"{request.summary.event_type.value} at {request.clock_display}"

    def analyze_foul_play(self, description: str) -> FoulPlayAnalysis:
        return FoulPlayAnalysis(has_foul_play=False, analysis="Fair play")


class MatchSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = RecordingClient()
        self.session = MatchSession(CommentaryService(self.client), tick_interval=3600)

    def tearDown(self) -> None:
        self.session.shutdown()

    def _drain_commentary(self) -> None:
        self.session.commentary.shutdown(wait=True)

    def _run_out_half(self) -> None:
        self.session.set_half_duration(1)
        self.session.toggle_clock()
        for _ in range(60):
            self.session.tick()

    def test_score_updates_state_and_queues_commentary(self) -> None:
        outcome = self.session.add_score(ScoreEvent(1, PointType.RAID, 3, player_id=101))
        self.assertEqual(outcome.state.team(1).score, 3)
        self.assertEqual(self.session.state.team(1).score, 3)

        self._drain_commentary()
        self.assertEqual(self.session.commentary.log, ["raid_score at 20:00"])
        self.assertEqual(self.client.requests[0].summary.points, 3)

    def test_empty_raids_drive_do_or_die_badge(self) -> None:
        self.session.declare_empty_raid(1, 101)
        self.session.declare_empty_raid(1, 102)
        snapshot = self.session.snapshot()
        team1 = snapshot["teams"][0]
        self.assertTrue(team1["is_do_or_die"])
        self.assertEqual(team1["empty_raid_count"], 2)
        self.assertFalse(snapshot["teams"][1]["is_do_or_die"])

        outcome = self.session.declare_empty_raid(1, 103)
        self.assertTrue(outcome.do_or_die_fail)
        self.assertEqual(self.session.state.team(2).score, 1)
        self.assertFalse(self.session.snapshot()["teams"][0]["is_do_or_die"])

    def test_raiding_flag_follows_turn(self) -> None:
        snapshot = self.session.snapshot()
        self.assertTrue(snapshot["teams"][0]["is_raiding"])
        self.session.add_score(ScoreEvent(1, PointType.RAID, 1, player_id=101))
        snapshot = self.session.snapshot()
        self.assertFalse(snapshot["teams"][0]["is_raiding"])
        self.assertTrue(snapshot["teams"][1]["is_raiding"])
        self.assertEqual(snapshot["defending_team_id"], 1)

    def test_substitution_needs_a_break(self) -> None:
        with self.assertRaises(SubstitutionWindowClosed):
            self.session.substitute(1, 108, 101)
        self.session.toggle_clock()
        with self.assertRaises(SubstitutionWindowClosed):
            self.session.substitute(1, 108, 101)

        self.session.take_timeout(1)
        self.assertTrue(self.session.is_break_active)
        self.session.substitute(1, 108, 101)
        self.session.substitute(1, 109, 102)
        with self.assertRaises(SubstitutionQuotaExceeded):
            self.session.substitute(1, 110, 103)

    def test_new_timeout_resets_substitution_budget(self) -> None:
        self.session.toggle_clock()
        self.session.take_timeout(1)
        self.session.substitute(1, 108, 101)
        self.session.substitute(1, 109, 102)
        self.session.toggle_clock()
        self.assertFalse(self.session.is_break_active)

        self.session.take_timeout(2)
        self.assertEqual(self.session.state.substitutions.used_by(1), 0)
        self.session.substitute(1, 110, 103)

    def test_timeouts_are_limited_per_half(self) -> None:
        with self.assertRaises(TimeoutUnavailable):
            self.session.take_timeout(1)
        self.session.toggle_clock()
        self.session.take_timeout(1)
        self.session.toggle_clock()
        self.session.take_timeout(1)
        self.session.toggle_clock()
        self.assertEqual(self.session.state.team(1).remaining_timeouts, 0)
        with self.assertRaises(TimeoutUnavailable):
            self.session.take_timeout(1)
        with self.assertRaises(UnknownEntity):
            self.session.take_timeout(3)

    def test_half_break_and_second_half(self) -> None:
        self.session.set_half_duration(1)
        self.session.toggle_clock()
        self.session.take_timeout(1)
        self.session.substitute(1, 108, 101)
        self.session.substitute(1, 109, 102)
        self.session.toggle_clock()
        self.assertEqual(self.session.state.substitutions.used_by(1), 2)

        for _ in range(60):
            self.session.tick()
        clock = self.session.clock
        self.assertTrue(clock.is_half_break)
        self.assertTrue(self.session.is_break_active)
        self.assertEqual(self.session.state.substitutions.used_by(1), 0)
        self.session.substitute(1, 110, 103)
        self.session.substitute(1, 111, 104)
        self.assertEqual(self.session.state.substitutions.used_by(1), 2)

        self.session.toggle_clock()
        self.assertEqual(self.session.clock.half, 2)
        self.assertTrue(self.session.clock.is_running)
        self.assertEqual(self.session.clock.display(), "01:00")
        self.assertFalse(self.session.is_break_active)

    def test_second_half_restores_timeouts(self) -> None:
        self.session.set_half_duration(1)
        self.session.toggle_clock()
        self.session.take_timeout(2)
        self.session.toggle_clock()
        self.assertEqual(self.session.state.team(2).remaining_timeouts, 1)
        for _ in range(60):
            self.session.tick()
        self.session.toggle_clock()
        self.assertEqual(self.session.state.team(2).remaining_timeouts, 2)

    def test_match_over_after_second_half(self) -> None:
        self._run_out_half()
        self.session.toggle_clock()
        for _ in range(60):
            self.session.tick()
        self.assertTrue(self.session.clock.is_match_over)
        self.assertFalse(self.session.ticker.is_running)
        self.assertIn("Result,Draw", self.session.export_stats_csv())

    def test_reset_restores_fresh_match(self) -> None:
        self.session.update_team(1, name="Bengal Warriors")
        self.session.add_score(ScoreEvent(1, PointType.RAID, 2, player_id=101))
        self.session.toggle_clock()
        self.session.tick()
        self.session.reset()

        snapshot = self.session.snapshot()
        self.assertEqual(snapshot["teams"][0]["score"], 0)
        self.assertEqual(snapshot["teams"][0]["name"], "Team 1")
        self.assertEqual(snapshot["clock"]["display"], "20:00")
        self.assertFalse(snapshot["clock"]["is_running"])
        self.assertTrue(snapshot["is_match_pristine"])
        self.assertFalse(snapshot["can_undo"])
        self.assertEqual(self.session.commentary.log, [])
        self.assertFalse(self.session.ticker.is_running)

    def test_undo_redo(self) -> None:
        self.session.add_score(ScoreEvent(2, PointType.RAID, 2, player_id=201))
        self.assertTrue(self.session.undo())
        self.assertEqual(self.session.state.team(2).score, 0)
        self.assertTrue(self.session.redo())
        self.assertEqual(self.session.state.team(2).score, 2)
        self.assertFalse(self.session.redo())

    def test_substitution_undo_needs_open_window(self) -> None:
        self.session.toggle_clock()
        self.session.take_timeout(1)
        self.session.substitute(1, 108, 101)
        self.session.toggle_clock()
        self.assertFalse(self.session.is_break_active)

        self.assertFalse(self.session.undo())
        team = self.session.state.team(1)
        self.assertTrue(team.find_player(108).is_active)
        self.assertFalse(team.find_player(101).is_active)

    def test_substitution_undo_within_same_break(self) -> None:
        self.session.toggle_clock()
        self.session.take_timeout(1)
        self.session.substitute(1, 108, 101)
        self.assertTrue(self.session.undo())
        team = self.session.state.team(1)
        self.assertFalse(team.find_player(108).is_active)
        self.assertTrue(team.find_player(101).is_active)
        self.assertEqual(self.session.state.substitutions.used_by(1), 0)

    def test_commentary_queued_while_session_locked(self) -> None:
        lock_free = []
        original_submit = self.session.commentary.submit

        def submit(summary, clock_display):
            # Another thread must not be able to apply an event before this one is queued
            contender = threading.Thread(target=lambda: lock_free.append(self.session._lock.acquire(blocking=False)))
            contender.start()
            contender.join()
            return original_submit(summary, clock_display)

        self.session.commentary.submit = submit
        self.session.add_score(ScoreEvent(1, PointType.RAID, 1, player_id=101))
        self.session.declare_empty_raid(2, 201)
        self.assertEqual(lock_free, [False, False])

        self._drain_commentary()
        self.assertEqual(self.session.commentary.log, ["empty_raid at 20:00", "raid_score at 20:00"])

    def test_timeout_clears_undo_history(self) -> None:
        self.session.add_score(ScoreEvent(1, PointType.RAID, 1, player_id=101))
        self.session.toggle_clock()
        self.session.take_timeout(2)
        self.assertFalse(self.session.undo())
        self.assertEqual(self.session.state.team(1).score, 1)

    def test_rename_and_exports(self) -> None:
        self.session.rename_player(1, 101, "Pawan")
        self.session.add_score(ScoreEvent(1, PointType.RAID, 1, player_id=101))
        self._drain_commentary()

        self.assertIn("Pawan", self.session.export_stats_csv())
        document = self.session.export_commentary_document()
        self.assertIn("1. raid_score at 20:00", document)
        self.assertEqual(self.client.requests[0].summary.raider_name, "Pawan")

    def test_foul_play_passthrough(self) -> None:
        result = self.session.analyze_foul_play("Raider was pushed out of bounds")
        self.assertEqual(result.analysis, "Fair play")


if __name__ == "__main__":
    unittest.main()
