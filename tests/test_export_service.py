"""Test the statistics workbook and commentary document exports."""

import csv
import io
import unittest
from unittest.mock import patch

from scoremaster.models import MatchClock, MatchState, PointType, ScoreEvent
from scoremaster.services import MatchReportExporter, apply_score_event, build_match_report
from scoremaster.services.export_service import STAT_COLUMNS


class TestMatchExport(unittest.TestCase):
    """Exports are pure reads of the match state and commentary log."""

    def setUp(self):
        state = MatchState()
        # Team 2 defends the opening raid, then team 1 scores on its next raid
        state = apply_score_event(state, ScoreEvent(2, PointType.TACKLE, 1, player_id=201)).state
        state = apply_score_event(state, ScoreEvent(1, PointType.RAID, 3, player_id=101)).state
        self.state = state
        self.exporter = MatchReportExporter()

    def _rows(self, csv_content):
        return list(csv.reader(io.StringIO(csv_content)))

    def test_report_orders_commentary_oldest_first(self):
        report = build_match_report(self.state, ["third", "second", "first"])
        self.assertEqual(report.commentary, ["first", "second", "third"])
        self.assertEqual(len(report.players), 24)
        self.assertIsNone(report.winner)

    def test_winner_only_when_match_over(self):
        finished = MatchClock(minutes=0, seconds=0, half=2, started=True)
        report = build_match_report(self.state, [], finished)
        self.assertTrue(report.is_match_over)
        self.assertEqual(report.winner, "Team 1")

        tied = build_match_report(MatchState(), [], finished)
        self.assertEqual(tied.winner, "Draw")

    def test_stats_csv_content(self):
        with patch("scoremaster.services.export_service.now_ts", return_value=1640995200):
            report = build_match_report(self.state, [])
        rows = self._rows(self.exporter.export_stats_csv(report))

        self.assertEqual(rows[0], ["Kabaddi Score Master Match Statistics"])
        self.assertIn(["Team", "Coach", "City", "Score"], rows)
        self.assertIn(["Team 1", "Coach", "City", "3"], rows)
        self.assertIn(["Team 2", "Coach", "City", "1"], rows)

        header_index = rows.index(STAT_COLUMNS)
        player_rows = rows[header_index + 1:]
        self.assertEqual(len(player_rows), 24)
        raider = next(r for r in player_rows if r[1] == "101")
        self.assertEqual(raider[0], "Team 1")
        self.assertEqual(raider[3], "yes")
        self.assertEqual(raider[4], "3")
        self.assertEqual(raider[10], "100.00")
        self.assertEqual(raider[11], "1")
        defender = next(r for r in player_rows if r[1] == "201")
        self.assertEqual(defender[7], "1")
        bench = next(r for r in player_rows if r[1] == "212")
        self.assertEqual(bench[3], "no")
        self.assertEqual(bench[10], "0.00")

    def test_commentary_document(self):
        report = build_match_report(self.state, ["Tackle!", "Super raid!"], MatchClock())
        document = self.exporter.export_commentary_document(report)
        lines = document.splitlines()
        self.assertEqual(lines[0], "Team 1 vs Team 2 - Match Commentary")
        self.assertIn("Score: Team 1 3 - 1 Team 2 (Half 1, 20:00)", lines)
        self.assertIn("1. Super raid!", lines)
        self.assertIn("2. Tackle!", lines)

    def test_empty_commentary_still_exports(self):
        report = build_match_report(MatchState(), [])
        document = self.exporter.export_commentary_document(report)
        self.assertIn("No commentary was recorded for this match.", document)

    def test_export_does_not_change_state(self):
        before = self.state
        self.exporter.export_stats_csv(build_match_report(self.state, ["x"]))
        self.assertIs(self.state, before)
        self.assertEqual(self.state.team(1).score, 3)


if __name__ == "__main__":
    unittest.main()
