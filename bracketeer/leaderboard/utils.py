"""Utility functions for merging and ranking leaderboard entries."""

from __future__ import annotations

from typing import Any, Optional

from .models import LeaderboardEntry, RankedEntry

# (tier, minimum score, minimum win rate), best first
TIERS = [
    ("Grandmaster", 3000, 0.8),
    ("Master", 2500, 0.75),
    ("Diamond", 2000, 0.7),
    ("Platinum", 1500, 0.65),
    ("Gold", 1000, 0.6),
    ("Silver", 500, 0.5),
]
BASE_TIER = "Bronze"


def empty_entry(now: str) -> LeaderboardEntry:
    return {
        "wins": 0,
        "losses": 0,
        "totalPoints": 0,
        "titles": 0,
        "gamesPlayed": 0,
        "lastUpdated": now,
    }


def merge_entry(
    existing: Optional[dict[str, Any]],
    stats: dict[str, Any],
    is_champion: bool,
    now: str,
) -> LeaderboardEntry:
    """Add one competition's stats onto an existing entry."""
    base = existing or {}
    wins = stats.get("wins", 0)
    losses = stats.get("losses", 0)
    return {
        "wins": (base.get("wins") or 0) + wins,
        "losses": (base.get("losses") or 0) + losses,
        "totalPoints": (base.get("totalPoints") or 0) + stats.get("totalPoints", 0),
        "titles": (base.get("titles") or 0) + (1 if is_champion else 0),
        "gamesPlayed": (base.get("gamesPlayed") or 0) + wins + losses,
        "lastUpdated": now,
    }


def calculate_win_rate(wins: int, losses: int) -> float:
    games = wins + losses
    return wins / games if games > 0 else 0.0


def calculate_score(wins: int, losses: int, total_points: float) -> int:
    """Rating used to order a leaderboard: wins, points, and a win-rate bonus."""
    win_rate = calculate_win_rate(wins, losses)
    return round(wins * 100 + total_points * 0.1 + win_rate * 500)


def calculate_tier(score: int, win_rate: float) -> str:
    for tier, min_score, min_win_rate in TIERS:
        if score >= min_score and win_rate >= min_win_rate:
            return tier
    return BASE_TIER


def rank_entries(entries: dict[str, dict[str, Any]]) -> list[RankedEntry]:
    """Score, tier and rank a scope's entries, best first."""
    ranked: list[RankedEntry] = []
    for user_id, data in entries.items():
        wins = data.get("wins") or 0
        losses = data.get("losses") or 0
        total_points = data.get("totalPoints") or 0
        win_rate = calculate_win_rate(wins, losses)
        score = calculate_score(wins, losses, total_points)
        ranked.append(
            {
                "userId": user_id,
                "wins": wins,
                "losses": losses,
                "totalPoints": total_points,
                "titles": data.get("titles") or 0,
                "gamesPlayed": data.get("gamesPlayed") or 0,
                "lastUpdated": data.get("lastUpdated", ""),
                "winRate": win_rate,
                "score": score,
                "tier": calculate_tier(score, win_rate),
            }
        )

    # Sort by score (desc), then titles (desc), then user id for stable output
    ranked.sort(key=lambda e: (-e["score"], -e["titles"], e["userId"]))
    for index, entry in enumerate(ranked, start=1):
        entry["rank"] = index
    return ranked
