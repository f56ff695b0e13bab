"""Routes for the leaderboard blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify, request

from bracketeer.core.forms import validate_form
from bracketeer.errors import NotFoundError, ValidationError

from . import bp
from .forms import UpdateLeaderboardsForm
from .services import LeaderboardService


@bp.route("/<string:scope>", methods=["GET"])
def get_leaderboard(scope: str) -> Any:
    """Return a ranked leaderboard for a scope (global, a game or a league)."""
    limit_str = request.args.get("limit", "")
    limit = current_app.config["LEADERBOARD_PAGE_SIZE"]
    if limit_str:
        try:
            limit = int(limit_str)
        except ValueError:
            raise ValidationError("limit must be an integer.") from None
        if limit < 1:
            raise ValidationError("limit must be positive.")

    entries = LeaderboardService(firestore.client()).get_leaderboard(scope, limit)
    return jsonify({"success": True, "scope": scope, "entries": entries})


@bp.route("/<string:scope>/<string:user_id>", methods=["GET"])
def get_entry(scope: str, user_id: str) -> Any:
    """Return one player's entry within a scope."""
    entry = LeaderboardService(firestore.client()).get_entry(scope, user_id)
    if entry is None:
        raise NotFoundError(f"No {scope} leaderboard entry for {user_id}.")
    return jsonify({"success": True, "entry": entry})


@bp.route("/update", methods=["POST"])
def update_leaderboards() -> Any:
    """Fold a competition's stored wrap report into the leaderboards.

    Calling this twice for the same competition counts its results twice.
    """
    from bracketeer.report.services import WrapReportService

    form = validate_form(UpdateLeaderboardsForm())
    db = firestore.client()
    report = WrapReportService(db).get(form.competitionId.data)
    LeaderboardService(db).update(report, form.gameId.data, form.leagueId.data or None)
    current_app.logger.info(
        f"Leaderboards updated from {form.competitionId.data} report"
    )
    return jsonify({"success": True})
