"""Routes for the wrap report blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import current_app, jsonify

from . import bp
from .services import WrapReportService


@bp.route("/<string:competition_id>/report", methods=["POST"])
def generate_report(competition_id: str) -> Any:
    """Generate (or regenerate) the wrap report of a competition."""
    report = WrapReportService(firestore.client()).generate(competition_id)
    current_app.logger.info(f"Wrap report requested for {competition_id}")
    return jsonify({"success": True, "report": report}), 201


@bp.route("/<string:competition_id>/report", methods=["GET"])
def get_report(competition_id: str) -> Any:
    """Return the stored wrap report of a competition."""
    report = WrapReportService(firestore.client()).get(competition_id)
    return jsonify({"success": True, "report": report})


@bp.route("/<string:competition_id>/report/exists", methods=["GET"])
def report_exists(competition_id: str) -> Any:
    """Tell whether a wrap report has been generated."""
    exists = WrapReportService(firestore.client()).has(competition_id)
    return jsonify({"success": True, "exists": exists})
