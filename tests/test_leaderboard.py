"""Tests for leaderboard aggregation and ranking."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from bracketeer.bracket.models import Bracket
from bracketeer.errors import AggregationError
from bracketeer.leaderboard.services import LeaderboardService
from bracketeer.leaderboard.utils import (
    calculate_score,
    calculate_tier,
    calculate_win_rate,
    merge_entry,
    rank_entries,
)
from bracketeer.report.utils import build_report
from tests.conftest import FirestoreTestCase, played_bracket


class LeaderboardUtilsTestCase(unittest.TestCase):
    """Test case for the pure leaderboard helpers."""

    def test_merge_into_empty_entry(self) -> None:
        entry = merge_entry(
            None, {"wins": 2, "losses": 0, "totalPoints": 46}, True, "t1"
        )
        self.assertEqual(
            entry,
            {
                "wins": 2,
                "losses": 0,
                "totalPoints": 46,
                "titles": 1,
                "gamesPlayed": 2,
                "lastUpdated": "t1",
            },
        )

    def test_merge_adds_to_existing(self) -> None:
        existing = merge_entry(
            None, {"wins": 1, "losses": 1, "totalPoints": 34}, False, "t1"
        )
        entry = merge_entry(
            existing, {"wins": 0, "losses": 1, "totalPoints": 10}, False, "t2"
        )
        self.assertEqual(entry["wins"], 1)
        self.assertEqual(entry["losses"], 2)
        self.assertEqual(entry["totalPoints"], 44)
        self.assertEqual(entry["titles"], 0)
        self.assertEqual(entry["gamesPlayed"], 3)
        self.assertEqual(entry["lastUpdated"], "t2")

    def test_win_rate_and_score(self) -> None:
        self.assertEqual(calculate_win_rate(0, 0), 0.0)
        self.assertEqual(calculate_win_rate(3, 1), 0.75)
        # 2 wins, 46 points, 100% win rate
        self.assertEqual(calculate_score(2, 0, 46), 705)
        self.assertEqual(calculate_score(0, 0, 0), 0)

    def test_tiers(self) -> None:
        self.assertEqual(calculate_tier(3200, 0.9), "Grandmaster")
        self.assertEqual(calculate_tier(3200, 0.6), "Gold")
        self.assertEqual(calculate_tier(1200, 0.55), "Silver")
        self.assertEqual(calculate_tier(705, 1.0), "Silver")
        self.assertEqual(calculate_tier(100, 0.2), "Bronze")

    def test_rank_entries(self) -> None:
        ranked = rank_entries(
            {
                "b": {"wins": 1, "losses": 1, "totalPoints": 30, "titles": 0},
                "a": {"wins": 1, "losses": 1, "totalPoints": 30, "titles": 0},
                "c": {"wins": 1, "losses": 1, "totalPoints": 30, "titles": 1},
                "d": {"wins": 3, "losses": 0, "totalPoints": 60, "titles": 1},
            }
        )
        self.assertEqual([e["userId"] for e in ranked], ["d", "c", "a", "b"])
        self.assertEqual([e["rank"] for e in ranked], [1, 2, 3, 4])
        self.assertEqual(ranked[0]["winRate"], 1.0)
        self.assertEqual(ranked[0]["score"], 806)
        self.assertEqual(ranked[0]["tier"], "Silver")


class LeaderboardServiceTestCase(FirestoreTestCase):
    """Test case for folding reports into stored leaderboards."""

    def setUp(self) -> None:
        super().setUp()
        self.service = LeaderboardService(self.db)
        self.report = build_report(
            Bracket.from_dict(played_bracket(), "compA"), "2025-03-01"
        )

    def test_scopes(self) -> None:
        self.assertEqual(LeaderboardService.scopes_for("cod"), ["global", "cod"])
        self.assertEqual(
            LeaderboardService.scopes_for("cod", "spring"),
            ["global", "cod", "spring"],
        )

    def test_update_writes_every_scope(self) -> None:
        self.service.update(self.report, "cod", "spring")

        for scope in ("global", "cod", "spring"):
            user1 = self.service.get_entry(scope, "user1")
            self.assertEqual(user1["wins"], 2)
            self.assertEqual(user1["titles"], 1)
            self.assertEqual(user1["totalPoints"], 46)
            user3 = self.service.get_entry(scope, "user3")
            self.assertEqual(user3["titles"], 0)
            self.assertEqual(user3["gamesPlayed"], 2)

        self.assertIsNone(self.service.get_entry("other-game", "user1"))
        self.assertIsNone(self.service.get_entry("global", "nobody"))

    def test_applying_a_report_twice_counts_twice(self) -> None:
        self.service.update(self.report, "cod")
        self.service.update(self.report, "cod")

        entry = self.service.get_entry("global", "user1")
        self.assertEqual(entry["wins"], 4)
        self.assertEqual(entry["titles"], 2)
        self.assertEqual(entry["totalPoints"], 92)

    def test_get_leaderboard_ranks_and_limits(self) -> None:
        self.service.update(self.report, "cod")

        board = self.service.get_leaderboard("cod")
        self.assertEqual(
            [e["userId"] for e in board], ["user1", "user3", "user2", "user4"]
        )
        self.assertEqual(board[0]["rank"], 1)
        self.assertEqual(board[0]["score"], 705)

        self.assertEqual(len(self.service.get_leaderboard("cod", limit=2)), 2)
        self.assertEqual(self.service.get_leaderboard("empty-scope"), [])

    def test_failed_merge_raises_aggregation_error(self) -> None:
        with patch.object(
            LeaderboardService, "_merge_player", side_effect=RuntimeError("down")
        ):
            with self.assertRaises(AggregationError) as ctx:
                self.service.update(self.report, "cod")

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn("global", ctx.exception.message)


if __name__ == "__main__":
    unittest.main()
