"""Data models for the ticket blueprint."""

from __future__ import annotations

from typing import TypedDict

from bracketeer.core.types import FirestoreDocument


class Ticket(FirestoreDocument, total=False):
    """A ticket document in Firestore."""

    code: str
    userId: str
    competitionId: str
    roundId: str
    valid: bool
    issuedAt: str
    expiresAt: str
    revokedAt: str


class IssuedTicket(TypedDict):
    """Result of issuing a ticket."""

    id: str
    code: str
