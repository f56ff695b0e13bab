"""Data models for the bracket blueprint.

A bracket is stored as one Firestore document per competition::

    {"version": 3, "rounds": [{"roundNumber": 1, "matches": [...]}, ...]}

The documents are parsed into the dataclasses below on load. Anything that
does not have the expected shape raises ``BracketDataCorruptError`` instead of
leaking half-parsed dictionaries into the scoring code. Fields the models do
not know about are carried in ``extra`` so that a whole-document write does
not drop them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from bracketeer.core.constants import MATCH_PENDING, MATCH_STATUSES
from bracketeer.errors import BracketDataCorruptError

Score = Union[int, float]

_MATCH_KEYS = {"matchId", "players", "scores", "winner", "status", "ticketCodes"}
_ROUND_KEYS = {"roundNumber", "matches"}
_BRACKET_KEYS = {"rounds", "version"}


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass
class Match:
    """A single head-to-head match inside a round."""

    match_id: str
    players: list[Optional[str]] = field(default_factory=list)
    scores: dict[str, Optional[Score]] = field(default_factory=dict)
    winner: Optional[str] = None
    status: str = MATCH_PENDING
    ticket_codes: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def has_open_slot(self) -> bool:
        """True if the match still waits for a player."""
        return len(self.players) < 2 or None in self.players

    def score_for(self, player_id: Optional[str]) -> Optional[Score]:
        if player_id is None:
            return None
        return self.scores.get(player_id)

    @classmethod
    def from_dict(cls, data: Any, competition_id: str) -> Match:
        if not isinstance(data, dict):
            raise BracketDataCorruptError(competition_id, "match is not a mapping")

        players = data.get("players") or []
        scores = data.get("scores") or {}
        ticket_codes = data.get("ticketCodes") or {}
        status = data.get("status") or MATCH_PENDING
        match_id = data.get("matchId") or ""

        if not isinstance(players, list):
            raise BracketDataCorruptError(competition_id, f"match {match_id} players")
        if not isinstance(scores, dict) or not all(
            v is None or _is_number(v) for v in scores.values()
        ):
            raise BracketDataCorruptError(competition_id, f"match {match_id} scores")
        if not isinstance(ticket_codes, dict):
            raise BracketDataCorruptError(
                competition_id, f"match {match_id} ticket codes"
            )
        if status not in MATCH_STATUSES:
            raise BracketDataCorruptError(
                competition_id, f"match {match_id} status {status!r}"
            )

        return cls(
            match_id=str(match_id),
            players=list(players),
            scores=dict(scores),
            winner=data.get("winner") or None,
            status=status,
            ticket_codes=dict(ticket_codes),
            extra={k: v for k, v in data.items() if k not in _MATCH_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "matchId": self.match_id,
            "players": list(self.players),
            "scores": dict(self.scores),
            "winner": self.winner,
            "status": self.status,
            "ticketCodes": dict(self.ticket_codes),
        }


@dataclass
class Round:
    """One round of the bracket."""

    round_number: int
    matches: list[Match] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    def first_open_match(self) -> Optional[Match]:
        """Return the first match that still has an unfilled player slot."""
        for match in self.matches:
            if match.has_open_slot:
                return match
        return None

    @classmethod
    def from_dict(cls, data: Any, competition_id: str) -> Round:
        if not isinstance(data, dict):
            raise BracketDataCorruptError(competition_id, "round is not a mapping")
        matches = data.get("matches")
        if not isinstance(matches, list):
            raise BracketDataCorruptError(competition_id, "round has no match list")
        round_number = data.get("roundNumber") or 0
        if not isinstance(round_number, int):
            raise BracketDataCorruptError(competition_id, "round number")
        return cls(
            round_number=round_number,
            matches=[Match.from_dict(m, competition_id) for m in matches],
            extra={k: v for k, v in data.items() if k not in _ROUND_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "roundNumber": self.round_number,
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass
class Bracket:
    """The full single-elimination bracket of a competition."""

    competition_id: str
    rounds: list[Round] = field(default_factory=list)
    version: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    def find_match(self, match_id: str) -> Optional[tuple[int, Match]]:
        """Locate a match by id, returning its round index and the match."""
        for round_index, round_ in enumerate(self.rounds):
            for match in round_.matches:
                if match.match_id == match_id:
                    return round_index, match
        return None

    def next_round(self, round_index: int) -> Optional[Round]:
        if round_index + 1 < len(self.rounds):
            return self.rounds[round_index + 1]
        return None

    @classmethod
    def from_dict(cls, data: Any, competition_id: str) -> Bracket:
        """Parse a bracket document, raising BracketDataCorruptError on bad shape."""
        if not isinstance(data, dict):
            raise BracketDataCorruptError(competition_id, "document is empty")
        rounds = data.get("rounds")
        if not isinstance(rounds, list):
            raise BracketDataCorruptError(competition_id)
        version = data.get("version") or 0
        if not isinstance(version, int):
            raise BracketDataCorruptError(competition_id, "version")
        return cls(
            competition_id=competition_id,
            rounds=[Round.from_dict(r, competition_id) for r in rounds],
            version=version,
            extra={k: v for k, v in data.items() if k not in _BRACKET_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "rounds": [r.to_dict() for r in self.rounds],
            "version": self.version,
        }
