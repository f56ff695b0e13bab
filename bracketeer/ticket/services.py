"""Service layer for issuing, validating and revoking score tickets."""

from __future__ import annotations

import datetime
import logging
import secrets
from typing import TYPE_CHECKING, Any, cast

from google.cloud.firestore import FieldFilter

from bracketeer.core.constants import (
    DEFAULT_TICKET_CODE_LENGTH,
    DEFAULT_TICKET_TTL_MINUTES,
    TICKET_CODE_ALPHABET,
    TICKETS_COLLECTION,
)
from bracketeer.core.utils import utc_now, utc_timestamp
from bracketeer.errors import InvalidTicketError

from .models import IssuedTicket, Ticket

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client


def generate_code(length: int = DEFAULT_TICKET_CODE_LENGTH) -> str:
    """Generate a random upper-case alphanumeric ticket code."""
    return "".join(secrets.choice(TICKET_CODE_ALPHABET) for _ in range(length))


class TicketService:
    """Issues and checks time-limited tickets that gate score reporting.

    Codes are not checked for uniqueness at issuance. With 36**10 possible
    codes the collision risk is ignored rather than retried.
    """

    def __init__(
        self, db: Client, code_length: int = DEFAULT_TICKET_CODE_LENGTH
    ) -> None:
        self.db = db
        self.code_length = code_length

    def _find(self, code: str, competition_id: str) -> DocumentSnapshot | None:
        query = (
            self.db.collection(TICKETS_COLLECTION)
            .where(filter=FieldFilter("code", "==", code))
            .where(filter=FieldFilter("competitionId", "==", competition_id))
            .limit(1)
        )
        for doc in query.stream():
            return cast("DocumentSnapshot", doc)
        return None

    def issue(
        self,
        user_id: str,
        competition_id: str,
        round_id: str,
        ttl_minutes: int = DEFAULT_TICKET_TTL_MINUTES,
    ) -> IssuedTicket:
        """Issue a ticket for one user, competition and round."""
        now = utc_now()
        code = generate_code(self.code_length)
        payload: Ticket = {
            "code": code,
            "userId": user_id,
            "competitionId": competition_id,
            "roundId": round_id,
            "valid": True,
            "issuedAt": utc_timestamp(now),
            "expiresAt": utc_timestamp(now + datetime.timedelta(minutes=ttl_minutes)),
        }
        _, ref = self.db.collection(TICKETS_COLLECTION).add(payload)
        logging.info(
            f"Ticket issued for {user_id} in {competition_id} ({round_id}), "
            f"valid for {ttl_minutes} minutes"
        )
        return {"id": str(ref.id), "code": code}

    def validate(self, code: str, competition_id: str) -> bool:
        """Return True if the ticket exists, is valid and has not expired."""
        doc = self._find(code, competition_id)
        if doc is None:
            return False

        data = doc.to_dict() or {}
        if not data.get("valid"):
            return False

        expires_at = data.get("expiresAt")
        if not isinstance(expires_at, str):
            return False
        return not expires_at < utc_timestamp(utc_now())

    def require_valid(self, code: str, competition_id: str) -> None:
        """Raise InvalidTicketError unless the ticket validates."""
        if not self.validate(code, competition_id):
            raise InvalidTicketError()

    def revoke(self, code: str, competition_id: str) -> bool:
        """Mark a ticket invalid. Returns whether a ticket was found."""
        doc = self._find(code, competition_id)
        if doc is None:
            return False
        doc.reference.update({"valid": False, "revokedAt": utc_timestamp(utc_now())})
        logging.info(f"Ticket revoked in {competition_id}")
        return True

    def get_by_code(self, code: str, competition_id: str) -> Ticket | None:
        """Fetch a single ticket by code within a competition."""
        doc = self._find(code, competition_id)
        if doc is None:
            return None
        data = cast(Ticket, doc.to_dict() or {})
        data["id"] = doc.id
        return data

    def _list(self, field: str, value: str) -> list[Ticket]:
        docs = (
            self.db.collection(TICKETS_COLLECTION)
            .where(filter=FieldFilter(field, "==", value))
            .stream()
        )
        tickets: list[Ticket] = []
        for doc in docs:
            data = cast(dict[str, Any], doc.to_dict() or {})
            data["id"] = doc.id
            tickets.append(cast(Ticket, data))
        tickets.sort(key=lambda t: t.get("issuedAt", ""))
        return tickets

    def list_for_user(self, user_id: str) -> list[Ticket]:
        """List every ticket issued to a user, oldest first."""
        return self._list("userId", user_id)

    def list_for_competition(self, competition_id: str) -> list[Ticket]:
        """List every ticket issued for a competition, oldest first."""
        return self._list("competitionId", competition_id)
