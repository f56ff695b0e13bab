"""Service layer for multi-scope leaderboards."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, cast

from firebase_admin import firestore

from bracketeer.core.constants import (
    DEFAULT_LEADERBOARD_PAGE_SIZE,
    GLOBAL_SCOPE,
    LEADERBOARD_PLAYERS_SUBCOLLECTION,
    LEADERBOARDS_COLLECTION,
)
from bracketeer.core.utils import utc_timestamp
from bracketeer.errors import AggregationError

from .models import LeaderboardEntry, RankedEntry
from .utils import merge_entry, rank_entries

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.collection import CollectionReference
    from google.cloud.firestore_v1.document import DocumentReference
    from google.cloud.firestore_v1.transaction import Transaction

    from bracketeer.report.models import WrapReport


class LeaderboardService:
    """Folds wrap reports into global, game and league leaderboards.

    Each (scope, player) entry is updated in its own transaction, so reports
    landing concurrently for the same player never lose an update. Applying
    the same report twice counts it twice: no record of applied reports is
    kept.
    """

    def __init__(self, db: Client) -> None:
        self.db = db

    def _players(self, scope: str) -> CollectionReference:
        return (
            self.db.collection(LEADERBOARDS_COLLECTION)
            .document(scope)
            .collection(LEADERBOARD_PLAYERS_SUBCOLLECTION)
        )

    @staticmethod
    def scopes_for(game_id: str, league_id: Optional[str] = None) -> list[str]:
        scopes = [GLOBAL_SCOPE, game_id]
        if league_id:
            scopes.append(league_id)
        return scopes

    def _merge_player(
        self,
        entry_ref: DocumentReference,
        stats: dict[str, Any],
        is_champion: bool,
    ) -> LeaderboardEntry:
        @firestore.transactional
        def merge_in_transaction(transaction: Transaction) -> LeaderboardEntry:
            snapshot = cast("DocumentSnapshot", entry_ref.get(transaction=transaction))
            existing = snapshot.to_dict() if snapshot.exists else None
            updated = merge_entry(existing, stats, is_champion, utc_timestamp())
            transaction.set(entry_ref, updated)
            return updated

        return merge_in_transaction(self.db.transaction())

    def update(
        self, report: WrapReport, game_id: str, league_id: Optional[str] = None
    ) -> None:
        """Add every player's stats from a report to each target scope.

        Raises:
            AggregationError: If any entry could not be updated. Entries
                already merged before the failure stay merged.
        """
        scopes = self.scopes_for(game_id, league_id)
        logging.info(f"Updating leaderboards for scopes: {', '.join(scopes)}")

        champion = report.get("champion")
        for scope in scopes:
            players = self._players(scope)
            for user_id, stats in (report.get("stats") or {}).items():
                try:
                    self._merge_player(
                        players.document(user_id),
                        cast(dict[str, Any], stats),
                        user_id == champion,
                    )
                except Exception as e:
                    raise AggregationError(
                        f"Failed to update {scope} leaderboard for {user_id}: {e}"
                    ) from e
            logging.info(f"Leaderboard {scope} updated")

    def get_entry(self, scope: str, user_id: str) -> Optional[LeaderboardEntry]:
        """Fetch one player's entry in a scope."""
        snapshot = cast("DocumentSnapshot", self._players(scope).document(user_id).get())
        if not snapshot.exists:
            return None
        return cast(LeaderboardEntry, snapshot.to_dict() or {})

    def get_leaderboard(
        self, scope: str, limit: int = DEFAULT_LEADERBOARD_PAGE_SIZE
    ) -> list[RankedEntry]:
        """Return a scope's entries ranked best first."""
        entries = {
            doc.id: doc.to_dict() or {} for doc in self._players(scope).stream()
        }
        return rank_entries(entries)[:limit]
