"""Core data types for the bracketeer application."""

from typing import TypedDict


class FirestoreDocument(TypedDict, total=False):
    """Fields added to a Firestore document when it is read back."""

    id: str
