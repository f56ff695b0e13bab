"""Tests for parsing and serializing bracket documents."""

from __future__ import annotations

import unittest

from bracketeer.bracket.models import Bracket, Match
from bracketeer.errors import BracketDataCorruptError
from tests.conftest import four_player_bracket, make_match


class BracketModelsTestCase(unittest.TestCase):
    """Test case for the bracket dataclasses."""

    def test_parse_four_player_bracket(self) -> None:
        """Test that rounds and matches are parsed in order."""
        bracket = Bracket.from_dict(four_player_bracket(), "compA")

        self.assertEqual(bracket.competition_id, "compA")
        self.assertEqual(bracket.version, 0)
        self.assertEqual([r.round_number for r in bracket.rounds], [1, 2])
        self.assertEqual(
            [m.match_id for m in bracket.rounds[0].matches], ["R1M1", "R1M2"]
        )
        self.assertEqual(bracket.rounds[0].matches[0].players, ["user1", "user2"])
        self.assertEqual(bracket.rounds[0].matches[0].status, "pending")

    def test_find_match(self) -> None:
        """Test locating a match by id."""
        bracket = Bracket.from_dict(four_player_bracket(), "compA")

        round_index, match = bracket.find_match("R1M2")
        self.assertEqual(round_index, 0)
        self.assertEqual(match.players, ["user3", "user4"])
        self.assertIsNone(bracket.find_match("missing"))
        self.assertIs(bracket.next_round(0), bracket.rounds[1])
        self.assertIsNone(bracket.next_round(1))

    def test_unknown_fields_survive_round_trip(self) -> None:
        """Test that fields the models do not know are written back."""
        data = four_player_bracket()
        data["format"] = "single-elimination"
        data["rounds"][0]["label"] = "Semi-finals"
        data["rounds"][0]["matches"][0]["court"] = 3
        data["version"] = 4

        result = Bracket.from_dict(data, "compA").to_dict()

        self.assertEqual(result["format"], "single-elimination")
        self.assertEqual(result["version"], 4)
        self.assertEqual(result["rounds"][0]["label"], "Semi-finals")
        self.assertEqual(result["rounds"][0]["matches"][0]["court"], 3)
        self.assertEqual(result["rounds"][0]["matches"][0]["ticketCodes"], {})

    def test_missing_rounds_is_corrupt(self) -> None:
        """Test that a document without a rounds list is rejected."""
        for data in ({}, {"rounds": "R1"}, {"rounds": None}, None):
            with self.subTest(data=data):
                with self.assertRaises(BracketDataCorruptError) as ctx:
                    Bracket.from_dict(data, "compA")
                self.assertEqual(ctx.exception.status_code, 422)

    def test_bad_match_shape_is_corrupt(self) -> None:
        """Test that malformed matches are rejected."""
        bad_matches = [
            "R1M1",
            {"matchId": "R1M1", "players": "user1"},
            {"matchId": "R1M1", "players": [], "scores": {"user1": "ten"}},
            {"matchId": "R1M1", "players": [], "scores": {"user1": float("nan")}},
            {"matchId": "R1M1", "players": [], "status": "abandoned"},
        ]
        for match in bad_matches:
            with self.subTest(match=match):
                data = {"rounds": [{"roundNumber": 1, "matches": [match]}]}
                with self.assertRaises(BracketDataCorruptError):
                    Bracket.from_dict(data, "compA")

    def test_round_without_matches_is_corrupt(self) -> None:
        """Test that a round needs a list of matches."""
        with self.assertRaises(BracketDataCorruptError):
            Bracket.from_dict({"rounds": [{"roundNumber": 1}]}, "compA")

    def test_open_slot(self) -> None:
        """Test detection of matches still waiting for players."""
        self.assertTrue(Match.from_dict(make_match("M", []), "c").has_open_slot)
        self.assertTrue(Match.from_dict(make_match("M", ["a"]), "c").has_open_slot)
        self.assertTrue(
            Match.from_dict(make_match("M", ["a", None]), "c").has_open_slot
        )
        self.assertFalse(
            Match.from_dict(make_match("M", ["a", "b"]), "c").has_open_slot
        )


if __name__ == "__main__":
    unittest.main()
