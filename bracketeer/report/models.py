"""Data models for the wrap report blueprint."""

from __future__ import annotations

from typing import Any, Optional, TypedDict


class PlayerStats(TypedDict):
    """A player's aggregate record over one competition."""

    wins: int
    losses: int
    totalPoints: Any


class ReportMatch(TypedDict):
    """A flattened match as it appears in a wrap report."""

    matchId: str
    players: list[Optional[str]]
    scores: dict[str, Any]
    winner: Optional[str]
    status: str
    roundNumber: int


class ReportSummary(TypedDict):
    totalPlayers: int
    completedMatches: int
    averagePointsPerPlayer: float


class WrapReport(TypedDict):
    """The final report document of a competition."""

    competitionId: str
    completedAt: str
    champion: Optional[str]
    totalMatches: int
    totalRounds: int
    matches: list[ReportMatch]
    stats: dict[str, PlayerStats]
    summary: ReportSummary
