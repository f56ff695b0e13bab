"""Common utilities for tests."""

from __future__ import annotations

import copy
import unittest
import unittest.mock
from typing import Any, Optional

from mockfirestore import CollectionReference, MockFirestore, Query
from mockfirestore.document import DocumentReference


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and transactions."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:  # noqa: E501
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    # Patch DocumentReference.get to handle transaction argument
    if not hasattr(DocumentReference, "_orig_get"):
        DocumentReference._orig_get = DocumentReference.get

        def doc_ref_get(self: Any, transaction: Any = None) -> Any:
            """Handle transaction argument in get."""
            return self._orig_get()

        DocumentReference.get = doc_ref_get


patch_mockfirestore()


class MockTransaction:
    """Stands in for a Firestore transaction by writing through immediately."""

    def __init__(self) -> None:
        self.writes: list[tuple[Any, Any]] = []

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append((ref, data))
        ref.set(data, merge=merge)

    def update(self, ref: Any, data: Any) -> None:
        self.writes.append((ref, data))
        ref.update(data)


def make_match(
    match_id: str,
    players: list[Optional[str]],
    scores: Optional[dict[str, Any]] = None,
    winner: Optional[str] = None,
    status: str = "pending",
) -> dict[str, Any]:
    """Build a raw match dictionary as stored in the bracket document."""
    return {
        "matchId": match_id,
        "players": list(players),
        "scores": scores if scores is not None else {p: None for p in players if p},
        "winner": winner,
        "status": status,
        "ticketCodes": {},
    }


def four_player_bracket() -> dict[str, Any]:
    """Two semi-finals feeding an empty final."""
    return {
        "rounds": [
            {
                "roundNumber": 1,
                "matches": [
                    make_match("R1M1", ["user1", "user2"]),
                    make_match("R1M2", ["user3", "user4"]),
                ],
            },
            {"roundNumber": 2, "matches": [make_match("R2M1", [])]},
        ]
    }


class FirestoreTestCase(unittest.TestCase):
    """Base test case backed by an in-memory Firestore."""

    def setUp(self) -> None:
        """Create a fresh mock database and make transactions run inline."""
        self.db = MockFirestore()
        self.transaction = MockTransaction()
        self.db.transaction = unittest.mock.MagicMock(return_value=self.transaction)

        transactional = unittest.mock.patch(
            "firebase_admin.firestore.transactional", side_effect=lambda f: f
        )
        transactional.start()
        self.addCleanup(transactional.stop)

    def seed_competition(
        self,
        competition_id: str = "compA",
        bracket: Optional[dict[str, Any]] = None,
        **fields: Any,
    ) -> None:
        """Store a competition document and its bracket."""
        competition = {"name": competition_id, "status": "live", "game": "cod"}
        competition.update(fields)
        self.db.collection("tournaments").document(competition_id).set(competition)
        if bracket is None:
            bracket = four_player_bracket()
        self.bracket_ref(competition_id).set(copy.deepcopy(bracket))

    def bracket_ref(self, competition_id: str = "compA") -> Any:
        return (
            self.db.collection("tournaments")
            .document(competition_id)
            .collection("bracket")
            .document("bracketDoc")
        )

    def stored_bracket(self, competition_id: str = "compA") -> dict[str, Any]:
        return self.bracket_ref(competition_id).get().to_dict()


def played_bracket() -> dict[str, Any]:
    """A four-player bracket with every match decided; user1 takes the title."""
    return {
        "version": 6,
        "rounds": [
            {
                "roundNumber": 1,
                "matches": [
                    make_match(
                        "R1M1",
                        ["user1", "user2"],
                        scores={"user1": 25, "user2": 18},
                        winner="user1",
                        status="completed",
                    ),
                    make_match(
                        "R1M2",
                        ["user3", "user4"],
                        scores={"user3": 15, "user4": 12},
                        winner="user3",
                        status="completed",
                    ),
                ],
            },
            {
                "roundNumber": 2,
                "matches": [
                    make_match(
                        "R2M1",
                        ["user1", "user3"],
                        scores={"user1": 21, "user3": 19},
                        winner="user1",
                        status="completed",
                    )
                ],
            },
        ],
    }
