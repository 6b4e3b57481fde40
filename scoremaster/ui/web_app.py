"""
Web application module for the Kabaddi Score Master.

This module contains the Flask web server exposing the JSON API used by the
scoreboard operator: scoring, clock control, substitutions, team details,
commentary and exports.
"""
import logging
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from ..services import (
    ClockConfigurationError, ClockError, CommentaryGenerationFailure, MatchError,
    MatchSession, ServiceFactory, SubstitutionQuotaExceeded, SubstitutionWindowClosed,
    UnknownEntity,
)
from ..services.event_validation import parse_empty_raid, parse_score_event, parse_substitution
from ..utils.constants import DEFAULT_HOST, DEFAULT_PORT

logger = logging.getLogger(__name__)


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _error_response(error: Exception):
    """Map a service error onto the JSON error envelope and HTTP status."""
    if isinstance(error, UnknownEntity):
        status = 404
    elif isinstance(error, (SubstitutionWindowClosed, SubstitutionQuotaExceeded)):
        status = 409
    elif isinstance(error, ClockError) and not isinstance(error, ClockConfigurationError):
        status = 409
    elif isinstance(error, MatchError):
        status = 400
    elif isinstance(error, CommentaryGenerationFailure):
        status = 502
    else:
        logger.exception("Unexpected error while handling %s %s", request.method, request.path)
        status = 500
    return jsonify({"success": False, "error": str(error)}), status


def create_app(session: Optional[MatchSession] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        session: Match session to serve; a new one is built by the
                 ServiceFactory when omitted

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    match = session or ServiceFactory().create_match_session()
    app.config["MATCH_SESSION"] = match

    # ==================== Scoreboard ==================== #

    @app.route("/api/state", methods=["GET"])
    def get_state():
        """Get the full scoreboard snapshot."""
        try:
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/score", methods=["POST"])
    def add_score():
        """Apply a scoring event."""
        try:
            event = parse_score_event(_json_body())
            outcome = match.add_score(event)
            return jsonify({
                "success": True,
                "summary": outcome.summary.to_dict(),
                "state": match.snapshot(),
            })
        except Exception as e:
            return _error_response(e)

    @app.route("/api/empty-raid", methods=["POST"])
    def empty_raid():
        """Register a raid that scored nothing."""
        try:
            req = parse_empty_raid(_json_body())
            outcome = match.declare_empty_raid(req.team_id, req.raider_id)
            return jsonify({
                "success": True,
                "do_or_die_fail": outcome.do_or_die_fail,
                "summary": outcome.summary.to_dict(),
                "state": match.snapshot(),
            })
        except Exception as e:
            return _error_response(e)

    @app.route("/api/substitute", methods=["POST"])
    def substitute():
        """Swap a benched player in for an active one during a break."""
        try:
            req = parse_substitution(_json_body())
            match.substitute(req.team_id, req.player_in_id, req.player_out_id)
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    # ==================== Clock ==================== #

    @app.route("/api/timeout", methods=["POST"])
    def take_timeout():
        """Call a team timeout."""
        try:
            data = _json_body()
            match.take_timeout(_int_field(data, "teamId"))
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/clock/toggle", methods=["POST"])
    def toggle_clock():
        """Start, pause or resume the match clock."""
        try:
            match.toggle_clock()
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/clock/reset", methods=["POST"])
    def reset_match():
        """Reset the clock, squads, scores and commentary."""
        try:
            match.reset()
            return jsonify({"success": True, "message": "Match reset", "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/clock/duration", methods=["POST"])
    def set_duration():
        """Configure the half length in minutes before the match starts."""
        try:
            data = _json_body()
            try:
                minutes = int(data.get("minutes"))
            except (TypeError, ValueError):
                raise ClockConfigurationError("minutes must be a whole number") from None
            match.set_half_duration(minutes)
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    # ==================== Teams and players ==================== #

    @app.route("/api/teams/<int:team_id>", methods=["PUT"])
    def update_team(team_id: int):
        """Edit team name, coach or city."""
        try:
            data = _json_body()
            match.update_team(team_id, name=data.get("name"), coach=data.get("coach"), city=data.get("city"))
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/teams/<int:team_id>/players/<int:player_id>", methods=["PUT"])
    def rename_player(team_id: int, player_id: int):
        """Change a player's display name."""
        try:
            data = _json_body()
            match.rename_player(team_id, player_id, data.get("name") or "")
            return jsonify({"success": True, "state": match.snapshot()})
        except Exception as e:
            return _error_response(e)

    @app.route("/api/undo", methods=["POST"])
    def undo_action():
        """Undo the last scoring action."""
        try:
            if match.undo():
                return jsonify({"success": True, "message": "Action undone", "state": match.snapshot()})
            return jsonify({"success": False, "error": "Nothing to undo"}), 400
        except Exception as e:
            return _error_response(e)

    @app.route("/api/redo", methods=["POST"])
    def redo_action():
        """Redo the last undone action."""
        try:
            if match.redo():
                return jsonify({"success": True, "message": "Action redone", "state": match.snapshot()})
            return jsonify({"success": False, "error": "Nothing to redo"}), 400
        except Exception as e:
            return _error_response(e)

    # ==================== Commentary ==================== #

    @app.route("/api/commentary", methods=["GET"])
    def get_commentary():
        """Get the commentary log, newest first."""
        try:
            return jsonify({
                "success": True,
                "commentary": match.commentary.log,
                "busy": match.commentary.is_busy,
            })
        except Exception as e:
            return _error_response(e)

    @app.route("/api/foul-play", methods=["POST"])
    def analyze_foul_play():
        """Ask the commentary provider to judge a described play."""
        try:
            data = _json_body()
            result = match.analyze_foul_play(data.get("description") or "")
            return jsonify({"success": True, **result.to_dict()})
        except Exception as e:
            return _error_response(e)

    # ==================== Exports ==================== #

    @app.route("/api/export/stats", methods=["GET"])
    def export_stats():
        """Export the player statistics workbook as CSV."""
        try:
            return Response(
                match.export_stats_csv(),
                mimetype="text/csv",
                headers={"Content-Disposition": "attachment; filename=kabaddi_match_stats.csv"},
            )
        except Exception as e:
            return _error_response(e)

    @app.route("/api/export/commentary", methods=["GET"])
    def export_commentary():
        """Export the commentary log as a text document."""
        try:
            return Response(
                match.export_commentary_document(),
                mimetype="text/plain",
                headers={"Content-Disposition": "attachment; filename=kabaddi_match_commentary.txt"},
            )
        except Exception as e:
            return _error_response(e)

    return app


def _int_field(data: Dict[str, Any], key: str) -> int:
    try:
        return int(data.get(key))
    except (TypeError, ValueError):
        raise UnknownEntity(f"Invalid {key}: {data.get(key)!r}") from None


def run_web_app(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """
    Run the web application.

    Args:
        host: Host address to bind to (default: localhost only)
        port: Port number to listen on
    """
    app = create_app()
    try:
        app.run(host=host, port=port, debug=False, threaded=True)
    finally:
        app.config["MATCH_SESSION"].shutdown()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_web_app()
