"""Tests for the commentary adapter and its HTTP client."""
import threading
import unittest
from unittest.mock import MagicMock

import requests

from scoremaster.models import EventSummary, EventType
from scoremaster.services import (
    CommentaryGenerationFailure, CommentaryRequest, CommentaryService,
    FoulPlayAnalysis, HttpCommentaryClient, InvalidPlayDescription,
)


def make_summary(**overrides) -> EventSummary:
    values = dict(
        event_type=EventType.RAID_SCORE,
        raiding_team="Team 1",
        defending_team="Team 2",
        raider_name="Player 1",
        defender_name=None,
        points=2,
        is_super_raid=False,
        is_do_or_die=False,
        is_bonus=False,
        is_lona=False,
        raid_count=0,
        team1_score=2,
        team2_score=0,
    )
    values.update(overrides)
    return EventSummary(**values)


class FakeClient:
    """Commentary client returning numbered lines and recording requests."""

    def __init__(self) -> None:
        self.requests = []

    def generate(self, request: CommentaryRequest) -> str:
        self.requests.append(request)
        return f"Line {len(self.requests)}"

    def analyze_foul_play(self, description: str) -> FoulPlayAnalysis:
        return FoulPlayAnalysis(has_foul_play=True, analysis=f"Checked: {description}")


class TestCommentaryRequest(unittest.TestCase):
    def test_payload_shape(self) -> None:
        request = CommentaryRequest(
            summary=make_summary(raider_name=None),
            clock_display="12:34",
            recent_history=["a", "b", "c", "d"],
        )
        payload = request.to_payload()
        self.assertEqual(payload["eventType"], "raid_score")
        self.assertEqual(payload["raiderName"], "Unknown raider")
        self.assertNotIn("defenderName", payload)
        self.assertEqual(payload["recentHistory"], ["a", "b", "c"])
        self.assertEqual(payload["clockDisplay"], "12:34")
        self.assertEqual(payload["team1Score"], 2)


class TestCommentaryService(unittest.TestCase):
    def setUp(self) -> None:
        self.client = FakeClient()
        self.service = CommentaryService(self.client)

    def tearDown(self) -> None:
        self.service.shutdown()

    def test_lines_are_prepended_in_arrival_order(self) -> None:
        futures = [self.service.submit(make_summary(points=n), "19:00") for n in range(1, 5)]
        results = [f.result(timeout=5) for f in futures]

        self.assertEqual(results, ["Line 1", "Line 2", "Line 3", "Line 4"])
        self.assertEqual(self.service.log, ["Line 4", "Line 3", "Line 2", "Line 1"])
        self.assertFalse(self.service.is_busy)

    def test_recent_history_taken_when_request_runs(self) -> None:
        for _ in range(5):
            self.service.submit(make_summary(), "19:00").result(timeout=5)
        last = self.client.requests[-1]
        self.assertEqual(last.recent_history, ["Line 4", "Line 3", "Line 2"])
        self.assertEqual(self.client.requests[0].recent_history, [])

    def test_failure_is_skipped(self) -> None:
        client = MagicMock()
        client.generate.side_effect = CommentaryGenerationFailure("provider down")
        service = CommentaryService(client)
        try:
            with self.assertLogs("scoremaster.services.commentary_service", level="WARNING"):
                self.assertIsNone(service.submit(make_summary(), "10:00").result(timeout=5))
            self.assertEqual(service.log, [])
            self.assertFalse(service.is_busy)
        finally:
            service.shutdown()

    def test_reset_discards_late_response(self) -> None:
        started = threading.Event()
        release = threading.Event()

        class SlowClient(FakeClient):
            def generate(self, request: CommentaryRequest) -> str:
                started.set()
                release.wait(5)
                return "Late line"

        service = CommentaryService(SlowClient())
        try:
            future = service.submit(make_summary(), "10:00")
            self.assertTrue(started.wait(5))
            self.assertTrue(service.is_busy)
            service.reset()
            release.set()
            self.assertIsNone(future.result(timeout=5))
            self.assertEqual(service.log, [])
        finally:
            service.shutdown()

    def test_foul_play_validation(self) -> None:
        with self.assertRaises(InvalidPlayDescription):
            self.service.analyze_foul_play("too short")
        with self.assertRaises(InvalidPlayDescription):
            self.service.analyze_foul_play("x" * 501)
        result = self.service.analyze_foul_play("  Defender pulled the raider by the hair  ")
        self.assertTrue(result.has_foul_play)
        self.assertEqual(result.analysis, "Checked: Defender pulled the raider by the hair")


class TestHttpCommentaryClient(unittest.TestCase):
    def setUp(self) -> None:
        self.session = MagicMock()
        self.client = HttpCommentaryClient(base_url="http://commentary.local/api/", timeout=3, session=self.session)

    def _response(self, body) -> MagicMock:
        response = MagicMock()
        response.json.return_value = body
        return response

    def test_generate_posts_payload(self) -> None:
        self.session.post.return_value = self._response({"commentaryText": " What a raid! "})
        request = CommentaryRequest(summary=make_summary(), clock_display="15:00")

        self.assertEqual(self.client.generate(request), "What a raid!")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "http://commentary.local/api")
        self.assertEqual(kwargs["timeout"], 3)
        self.assertEqual(kwargs["json"]["clockDisplay"], "15:00")

    def test_http_error_becomes_generation_failure(self) -> None:
        response = self._response({})
        response.raise_for_status.side_effect = requests.exceptions.HTTPError("503")
        self.session.post.return_value = response
        with self.assertRaises(CommentaryGenerationFailure):
            self.client.generate(CommentaryRequest(summary=make_summary(), clock_display="15:00"))

    def test_network_error_becomes_generation_failure(self) -> None:
        self.session.post.side_effect = requests.exceptions.ConnectionError("refused")
        with self.assertRaises(CommentaryGenerationFailure):
            self.client.generate(CommentaryRequest(summary=make_summary(), clock_display="15:00"))

    def test_malformed_bodies(self) -> None:
        response = self._response(None)
        response.json.side_effect = ValueError("not json")
        self.session.post.return_value = response
        with self.assertRaises(CommentaryGenerationFailure):
            self.client.generate(CommentaryRequest(summary=make_summary(), clock_display="15:00"))

        self.session.post.return_value = self._response({"commentary": ""})
        with self.assertRaises(CommentaryGenerationFailure):
            self.client.generate(CommentaryRequest(summary=make_summary(), clock_display="15:00"))

    def test_analyze_foul_play(self) -> None:
        self.session.post.return_value = self._response({"hasFoulPlay": False, "analysis": "Clean tackle."})
        result = self.client.analyze_foul_play("Ankle hold from the corner")
        self.assertFalse(result.has_foul_play)
        self.assertEqual(self.session.post.call_args[0][0], "http://commentary.local/api/foul-play")

        self.session.post.return_value = self._response({"analysis": "?"})
        with self.assertRaises(CommentaryGenerationFailure):
            self.client.analyze_foul_play("Ankle hold from the corner")


if __name__ == "__main__":
    unittest.main()
