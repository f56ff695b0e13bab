"""Utility functions for building wrap reports from a bracket."""

from __future__ import annotations

from typing import Optional

from bracketeer.bracket.models import Bracket
from bracketeer.core.constants import MATCH_COMPLETED

from .models import PlayerStats, ReportMatch, ReportSummary, WrapReport


def flatten_matches(bracket: Bracket) -> list[ReportMatch]:
    """List every identifiable match of the bracket with its round number."""
    matches: list[ReportMatch] = []
    for round_ in bracket.rounds:
        for match in round_.matches:
            if not match.match_id:
                continue
            matches.append(
                {
                    "matchId": match.match_id,
                    "players": list(match.players),
                    "scores": dict(match.scores),
                    "winner": match.winner,
                    "status": match.status,
                    "roundNumber": round_.round_number,
                }
            )
    return matches


def aggregate_player_stats(matches: list[ReportMatch]) -> dict[str, PlayerStats]:
    """Build wins, losses and total points per player.

    Every appearance adds the player's score (0 if missing). A decided match
    gives the winner a win and the other player a loss; ties and unfinished
    matches only add points.
    """
    stats: dict[str, PlayerStats] = {}
    for match in matches:
        winner = match["winner"]
        for player in match["players"]:
            if not player:
                continue
            if player not in stats:
                stats[player] = {"wins": 0, "losses": 0, "totalPoints": 0}

            score = match["scores"].get(player)
            stats[player]["totalPoints"] += score if score is not None else 0

            if winner == player:
                stats[player]["wins"] += 1
            elif winner:
                stats[player]["losses"] += 1
    return stats


def find_champion(matches: list[ReportMatch], total_rounds: int) -> Optional[str]:
    """Return the winner of the last round, if it has been decided."""
    champion = None
    for match in matches:
        if match["roundNumber"] == total_rounds and match["winner"]:
            champion = match["winner"]
    return champion


def summarize(
    matches: list[ReportMatch], stats: dict[str, PlayerStats]
) -> ReportSummary:
    total_players = len(stats)
    total_points = sum(s["totalPoints"] for s in stats.values())
    return {
        "totalPlayers": total_players,
        "completedMatches": sum(1 for m in matches if m["status"] == MATCH_COMPLETED),
        "averagePointsPerPlayer": (
            total_points / total_players if total_players > 0 else 0
        ),
    }


def build_report(bracket: Bracket, completed_at: str) -> WrapReport:
    """Replay a bracket into a wrap report."""
    matches = flatten_matches(bracket)
    stats = aggregate_player_stats(matches)
    total_rounds = len(bracket.rounds)
    return {
        "competitionId": bracket.competition_id,
        "completedAt": completed_at,
        "champion": find_champion(matches, total_rounds),
        "totalMatches": len(matches),
        "totalRounds": total_rounds,
        "matches": matches,
        "stats": stats,
        "summary": summarize(matches, stats),
    }
