"""Data models for the leaderboard blueprint."""

from __future__ import annotations

from typing import Any, TypedDict


class LeaderboardEntry(TypedDict):
    """A player's cumulative record within one leaderboard scope."""

    wins: int
    losses: int
    totalPoints: Any
    titles: int
    gamesPlayed: int
    lastUpdated: str


class RankedEntry(LeaderboardEntry, total=False):
    """A leaderboard entry as served to readers."""

    userId: str
    rank: int
    score: int
    winRate: float
    tier: str
