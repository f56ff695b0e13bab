"""Routes for the ticket blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify, request

from bracketeer.core.forms import validate_form
from bracketeer.errors import ValidationError

from . import bp
from .forms import IssueTicketForm, TicketCodeForm
from .services import TicketService


def _service() -> TicketService:
    return TicketService(
        firestore.client(), code_length=current_app.config["TICKET_CODE_LENGTH"]
    )


@bp.route("/", methods=["POST"])
def issue_ticket() -> Any:
    """Issue a ticket for a user in one competition round."""
    form = validate_form(IssueTicketForm())
    ttl = form.ttlMinutes.data or current_app.config["TICKET_TTL_MINUTES"]
    issued = _service().issue(
        form.userId.data,
        form.competitionId.data,
        form.roundId.data,
        ttl,
    )
    return jsonify({"success": True, "ticket": issued}), 201


@bp.route("/validate", methods=["POST"])
def validate_ticket() -> Any:
    """Check whether a ticket code is usable for a competition."""
    form = validate_form(TicketCodeForm())
    valid = _service().validate(form.code.data, form.competitionId.data)
    return jsonify({"success": True, "valid": valid})


@bp.route("/revoke", methods=["POST"])
def revoke_ticket() -> Any:
    """Revoke a ticket before it expires."""
    form = validate_form(TicketCodeForm())
    revoked = _service().revoke(form.code.data, form.competitionId.data)
    return jsonify({"success": True, "revoked": revoked})


@bp.route("/", methods=["GET"])
def list_tickets() -> Any:
    """List tickets for a competition or for a user."""
    competition_id = request.args.get("competition_id", "").strip()
    user_id = request.args.get("user_id", "").strip()

    service = _service()
    if competition_id:
        tickets = service.list_for_competition(competition_id)
    elif user_id:
        tickets = service.list_for_user(user_id)
    else:
        raise ValidationError("Provide competition_id or user_id.")

    return jsonify({"success": True, "tickets": tickets})
