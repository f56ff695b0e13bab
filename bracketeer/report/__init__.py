"""Wrap report blueprint."""

from flask import Blueprint

bp = Blueprint("report", __name__, url_prefix="/competitions")

from . import routes  # noqa: E402, F401
from .models import PlayerStats, WrapReport  # noqa: E402
from .services import WrapReportService  # noqa: E402

__all__ = ["PlayerStats", "WrapReport", "WrapReportService", "routes"]
