"""Post-match export for the Kabaddi Score Master."""

from __future__ import annotations

import csv
import datetime as dt
import io
from typing import List, Optional, Protocol, Sequence

from ..models import MatchClock, MatchReport, MatchState, PlayerStatLine, TeamSummary
from ..utils import APP_TITLE, now_ts


class ExportServiceInterface(Protocol):
    """Interface for data export - supports ISP."""

    def export_stats_csv(self, report: MatchReport) -> str:
        """Export player statistics to CSV format."""
        ...

    def export_commentary_document(self, report: MatchReport) -> str:
        """Export the commentary log as a text document."""
        ...


STAT_COLUMNS = [
    "Team",
    "Player ID",
    "Player",
    "On Court",
    "Total Points",
    "Raid Points",
    "Bonus Points",
    "Tackle Points",
    "Total Raids",
    "Successful Raids",
    "Raid Success (%)",
    "Super Raids",
    "Super Tackles",
]


def build_match_report(
    state: MatchState,
    commentary_log: Sequence[str],
    clock: Optional[MatchClock] = None,
) -> MatchReport:
    """Build a :class:`MatchReport` snapshot.

    Args:
        state: Current match state
        commentary_log: Commentary lines, most recent first
        clock: Optional match clock used for the status line

    Returns:
        Report with team headers, one line per player and the commentary
        in chronological order.
    """

    teams: List[TeamSummary] = []
    players: List[PlayerStatLine] = []
    for team in state.teams:
        teams.append(TeamSummary(
            team_id=team.id, name=team.name, coach=team.coach, city=team.city, score=team.score,
        ))
        for player in team.players:
            stats = player.statistics
            players.append(PlayerStatLine(
                team_id=team.id,
                team_name=team.name,
                player_id=player.id,
                name=player.name,
                is_active=player.is_active,
                raid_points=stats.raid_points,
                tackle_points=stats.tackle_points,
                bonus_points=stats.bonus_points,
                total_points=stats.total_points,
                total_raids=stats.total_raids,
                successful_raids=stats.successful_raids,
                super_raids=stats.super_raids,
                super_tackle_points=stats.super_tackle_points,
                raid_success_rate=stats.raid_success_rate(),
            ))

    is_over = bool(clock and clock.is_match_over)
    winner = None
    if is_over:
        first, second = teams
        if first.score == second.score:
            winner = "Draw"
        else:
            winner = first.name if first.score > second.score else second.name

    return MatchReport(
        generated_ts=now_ts(),
        teams=teams,
        players=players,
        commentary=list(reversed(list(commentary_log))),
        half=clock.half if clock else 1,
        clock_display=clock.display() if clock else "00:00",
        is_match_over=is_over,
        winner=winner,
    )


class MatchReportExporter:
    """Concrete implementation of export service - follows SRP."""

    def export_stats_csv(self, report: MatchReport) -> str:
        """Return a CSV workbook with a match header block and a player table.

        Raises:
            ValueError: If the report has no teams.
        """

        if not report.teams:
            raise ValueError("Cannot export statistics without any teams")

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")

        generated_dt = dt.datetime.fromtimestamp(report.generated_ts)
        writer.writerow([f"{APP_TITLE} Match Statistics"])
        writer.writerow(["Generated", generated_dt.isoformat(timespec="seconds")])
        writer.writerow(["Status", "Full time" if report.is_match_over else f"Half {report.half} {report.clock_display}"])
        if report.winner:
            writer.writerow(["Result", report.winner])
        writer.writerow([])

        writer.writerow(["Team", "Coach", "City", "Score"])
        for team in report.teams:
            writer.writerow([team.name, team.coach, team.city, team.score])
        writer.writerow([])

        writer.writerow(STAT_COLUMNS)
        for line in report.players:
            writer.writerow([
                line.team_name,
                line.player_id,
                line.name,
                "yes" if line.is_active else "no",
                line.total_points,
                line.raid_points,
                line.bonus_points,
                line.tackle_points,
                line.total_raids,
                line.successful_raids,
                f"{line.raid_success_rate:.2f}",
                line.super_raids,
                line.super_tackle_points,
            ])

        csv_text = buffer.getvalue()
        buffer.close()
        return csv_text

    def export_commentary_document(self, report: MatchReport) -> str:
        """Return the commentary log as a plain-text document, oldest line first."""

        home, away = report.teams[0], report.teams[1]
        title = f"{home.name} vs {away.name} - Match Commentary"
        lines = [
            title,
            "=" * len(title),
            "",
            f"Final score: {home.name} {home.score} - {away.score} {away.name}"
            if report.is_match_over
            else f"Score: {home.name} {home.score} - {away.score} {away.name} (Half {report.half}, {report.clock_display})",
            "",
        ]
        if not report.commentary:
            lines.append("No commentary was recorded for this match.")
        for number, entry in enumerate(report.commentary, start=1):
            lines.append(f"{number}. {entry}")
        return "\n".join(lines) + "\n"
