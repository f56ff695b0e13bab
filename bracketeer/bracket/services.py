"""Service layer for bracket storage and score submission."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, cast

from firebase_admin import firestore

from bracketeer.core.constants import (
    BRACKET_DOCUMENT,
    BRACKET_SUBCOLLECTION,
    COMPETITIONS_COLLECTION,
    MATCH_COMPLETED,
)
from bracketeer.errors import (
    BracketNotFoundError,
    ConcurrentUpdateError,
    MatchNotFoundError,
    ValidationError,
)
from bracketeer.ticket.services import TicketService

from .models import Bracket, Match, Score
from .utils import advance_winner, record_score

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction


class BracketService:
    """Reads and writes the per-competition bracket document.

    Every write bumps ``version``. Writes happen inside a Firestore
    transaction so two requests mutating the same bracket are serialized by
    the store rather than the later one silently overwriting the earlier.
    """

    def __init__(self, db: Client) -> None:
        self.db = db

    def bracket_ref(self, competition_id: str) -> DocumentReference:
        return (
            self.db.collection(COMPETITIONS_COLLECTION)
            .document(competition_id)
            .collection(BRACKET_SUBCOLLECTION)
            .document(BRACKET_DOCUMENT)
        )

    def load(
        self, competition_id: str, transaction: Optional[Transaction] = None
    ) -> Bracket:
        """Load and parse a bracket, optionally as part of a transaction."""
        ref = self.bracket_ref(competition_id)
        if transaction is not None:
            snapshot = cast("DocumentSnapshot", ref.get(transaction=transaction))
        else:
            snapshot = cast("DocumentSnapshot", ref.get())
        if not snapshot.exists:
            raise BracketNotFoundError(competition_id)
        return Bracket.from_dict(snapshot.to_dict(), competition_id)

    def get_bracket(self, competition_id: str) -> Bracket:
        """Fetch the current bracket of a competition."""
        return self.load(competition_id)

    def write(self, transaction: Transaction, bracket: Bracket) -> None:
        """Queue a whole-document write of the bracket with a bumped version."""
        bracket.version += 1
        transaction.set(self.bracket_ref(bracket.competition_id), bracket.to_dict())

    def replace_bracket(
        self, competition_id: str, bracket: Bracket, expected_version: int
    ) -> Bracket:
        """Overwrite a bracket if nobody else has written since expected_version."""

        @firestore.transactional
        def replace_in_transaction(transaction: Transaction) -> Bracket:
            current = self.load(competition_id, transaction=transaction)
            if current.version != expected_version:
                raise ConcurrentUpdateError(
                    f"Bracket for {competition_id} is at version {current.version}, "
                    f"not {expected_version}."
                )
            bracket.competition_id = competition_id
            bracket.version = current.version
            self.write(transaction, bracket)
            return bracket

        return replace_in_transaction(self.db.transaction())


class ScoreService:
    """Records reported scores and moves winners through the bracket."""

    def __init__(
        self,
        db: Client,
        tickets: Optional[TicketService] = None,
        brackets: Optional[BracketService] = None,
    ) -> None:
        self.db = db
        self.tickets = tickets or TicketService(db)
        self.brackets = brackets or BracketService(db)

    def submit_score(
        self,
        user_id: str,
        competition_id: str,
        match_id: str,
        ticket_code: str,
        score: Score,
    ) -> Match:
        """Record a player's score for a match and return the updated match.

        The ticket is checked but not consumed: it stays usable until it
        expires or is revoked, which lets a player correct a score.

        Raises:
            InvalidTicketError: If the ticket is unknown, expired or revoked.
            BracketNotFoundError: If the competition has no bracket.
            BracketDataCorruptError: If the bracket cannot be parsed.
            MatchNotFoundError: If no match has the given id.
        """
        self.tickets.require_valid(ticket_code, competition_id)

        @firestore.transactional
        def submit_in_transaction(transaction: Transaction) -> Match:
            bracket = self.brackets.load(competition_id, transaction=transaction)
            located = bracket.find_match(match_id)
            if located is None:
                raise MatchNotFoundError(match_id)
            round_index, match = located

            record_score(match, user_id, score)
            if match.status == MATCH_COMPLETED:
                advance_winner(bracket, round_index, match, ticket_code)

            self.brackets.write(transaction, bracket)
            return match

        match = submit_in_transaction(self.db.transaction())
        logging.info(
            f"Score submitted for {user_id} in {competition_id}, match {match_id} "
            f"({match.status})"
        )
        return match

    def resolve_tie(
        self, competition_id: str, match_id: str, winner_id: str
    ) -> Match:
        """Pick the winner of a tied match and advance them.

        The choice is not sticky. A later score submission for the match
        re-derives the result from the scores alone, so if they still tie the
        winner is cleared again and the match can be resolved anew. The
        player already advanced keeps their next-round seat, the same way a
        corrected score that flips the winner does not unseat anyone.
        """

        @firestore.transactional
        def resolve_in_transaction(transaction: Transaction) -> Match:
            bracket = self.brackets.load(competition_id, transaction=transaction)
            located = bracket.find_match(match_id)
            if located is None:
                raise MatchNotFoundError(match_id)
            round_index, match = located

            if match.status != MATCH_COMPLETED or match.winner is not None:
                raise ValidationError(f"Match {match_id} is not an unresolved tie.")
            if winner_id not in match.players:
                raise ValidationError(f"{winner_id} did not play in match {match_id}.")

            match.winner = winner_id
            advance_winner(
                bracket, round_index, match, match.ticket_codes.get(winner_id)
            )
            self.brackets.write(transaction, bracket)
            return match

        match = resolve_in_transaction(self.db.transaction())
        logging.info(f"Tie in {competition_id}, match {match_id} resolved for {winner_id}")
        return match
