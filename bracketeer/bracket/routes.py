"""Routes for the bracket blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify, request

from bracketeer.core.forms import validate_form
from bracketeer.ticket.services import TicketService

from . import bp
from .forms import ReplaceBracketForm, ResolveTieForm, ScoreSubmissionForm
from .models import Bracket
from .services import BracketService, ScoreService


def _score_service() -> ScoreService:
    db = firestore.client()
    tickets = TicketService(db, code_length=current_app.config["TICKET_CODE_LENGTH"])
    return ScoreService(db, tickets=tickets)


@bp.route("/<string:competition_id>/bracket", methods=["GET"])
def get_bracket(competition_id: str) -> Any:
    """Return the full bracket of a competition."""
    bracket = BracketService(firestore.client()).get_bracket(competition_id)
    return jsonify({"success": True, "bracket": bracket.to_dict()})


@bp.route("/<string:competition_id>/bracket", methods=["PUT"])
def replace_bracket(competition_id: str) -> Any:
    """Replace a bracket, guarded by the version the caller last read."""
    form = validate_form(ReplaceBracketForm())
    payload = dict(request.get_json(silent=True) or {})
    payload.pop("expectedVersion", None)
    bracket = Bracket.from_dict(payload, competition_id)
    saved = BracketService(firestore.client()).replace_bracket(
        competition_id, bracket, form.expectedVersion.data
    )
    return jsonify({"success": True, "bracket": saved.to_dict()})


@bp.route("/<string:competition_id>/scores", methods=["POST"])
def submit_score(competition_id: str) -> Any:
    """Report a player's score for a match using a ticket code."""
    form = validate_form(ScoreSubmissionForm())
    match = _score_service().submit_score(
        form.userId.data,
        competition_id,
        form.matchId.data,
        form.code.data,
        form.score_value,
    )
    current_app.logger.info(
        f"Score for {form.userId.data} recorded on {competition_id}/{match.match_id}"
    )
    return jsonify(
        {
            "success": True,
            "message": "Score submitted successfully",
            "result": {
                "matchId": match.match_id,
                "scores": match.scores,
                "winner": match.winner,
                "status": match.status,
            },
        }
    )


@bp.route(
    "/<string:competition_id>/matches/<string:match_id>/resolve", methods=["POST"]
)
def resolve_tie(competition_id: str, match_id: str) -> Any:
    """Manually pick the winner of a tied match."""
    form = validate_form(ResolveTieForm())
    match = _score_service().resolve_tie(competition_id, match_id, form.winnerId.data)
    return jsonify({"success": True, "match": match.to_dict()})
