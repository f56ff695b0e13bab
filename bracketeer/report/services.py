"""Service layer for end-of-competition wrap reports."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, cast

from bracketeer.bracket.services import BracketService
from bracketeer.core.constants import (
    COMPETITION_COMPLETED,
    COMPETITIONS_COLLECTION,
    FINAL_REPORT_DOCUMENT,
    REPORTS_SUBCOLLECTION,
    UNKNOWN_GAME,
)
from bracketeer.core.utils import utc_timestamp
from bracketeer.errors import CompetitionNotFoundError, ReportNotFoundError
from bracketeer.leaderboard.services import LeaderboardService

from .models import WrapReport
from .utils import build_report

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference


class WrapReportService:
    """Generates, stores and reads the final report of a competition."""

    def __init__(
        self,
        db: Client,
        brackets: Optional[BracketService] = None,
        leaderboards: Optional[LeaderboardService] = None,
    ) -> None:
        self.db = db
        self.brackets = brackets or BracketService(db)
        self.leaderboards = leaderboards or LeaderboardService(db)

    def _competition_ref(self, competition_id: str) -> DocumentReference:
        return self.db.collection(COMPETITIONS_COLLECTION).document(competition_id)

    def _report_ref(self, competition_id: str) -> DocumentReference:
        return (
            self.db.collection(COMPETITIONS_COLLECTION)
            .document(competition_id)
            .collection(REPORTS_SUBCOLLECTION)
            .document(FINAL_REPORT_DOCUMENT)
        )

    def generate(self, competition_id: str) -> WrapReport:
        """Replay the bracket into a report, store it and close the competition.

        Regenerating overwrites the previous report. The leaderboards are
        updated last and on a best-effort basis: by then the report is stored
        and the competition is completed, so an aggregation failure is logged
        and not raised.

        Raises:
            BracketNotFoundError: If the competition has no bracket.
            BracketDataCorruptError: If the bracket cannot be parsed.
            CompetitionNotFoundError: If the competition document is missing.
                Nothing is written in that case.
        """
        bracket = self.brackets.load(competition_id)

        competition_ref = self._competition_ref(competition_id)
        snapshot = cast("DocumentSnapshot", competition_ref.get())
        if not snapshot.exists:
            raise CompetitionNotFoundError(competition_id)
        competition = snapshot.to_dict() or {}

        report = build_report(bracket, utc_timestamp())

        self._report_ref(competition_id).set(report)
        logging.info(
            f"Wrap report generated for {competition_id}: "
            f"champion={report['champion'] or 'none'}, "
            f"matches={report['totalMatches']}, "
            f"players={report['summary']['totalPlayers']}, "
            f"completed={report['summary']['completedMatches']}"
        )

        competition_ref.update({"status": COMPETITION_COMPLETED})
        logging.info(f"Competition {competition_id} marked as completed")

        try:
            game_id = competition.get("game") or UNKNOWN_GAME
            self.leaderboards.update(report, game_id, competition.get("leagueId"))
        except Exception as e:
            logging.exception(
                f"Failed to update leaderboards for {competition_id}: {e}"
            )

        return report

    def get(self, competition_id: str) -> WrapReport:
        """Fetch the stored report of a competition."""
        snapshot = cast("DocumentSnapshot", self._report_ref(competition_id).get())
        if not snapshot.exists:
            raise ReportNotFoundError(competition_id)
        return cast(WrapReport, snapshot.to_dict() or {})

    def has(self, competition_id: str) -> bool:
        """Return whether a report has been generated for a competition."""
        snapshot = cast("DocumentSnapshot", self._report_ref(competition_id).get())
        return bool(snapshot.exists)
