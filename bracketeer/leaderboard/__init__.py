"""Leaderboard blueprint."""

from flask import Blueprint

bp = Blueprint("leaderboard", __name__, url_prefix="/leaderboards")

from . import routes  # noqa: E402, F401
from .models import LeaderboardEntry, RankedEntry  # noqa: E402
from .services import LeaderboardService  # noqa: E402

__all__ = ["LeaderboardEntry", "LeaderboardService", "RankedEntry", "routes"]
