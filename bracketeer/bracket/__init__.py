"""Bracket blueprint."""

from flask import Blueprint

bp = Blueprint("bracket", __name__, url_prefix="/competitions")

from . import routes  # noqa: E402, F401
from .models import Bracket, Match, Round  # noqa: E402
from .services import BracketService, ScoreService  # noqa: E402

__all__ = ["Bracket", "BracketService", "Match", "Round", "ScoreService", "routes"]
