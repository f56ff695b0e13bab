"""Core module for the bracketeer application."""

from .types import FirestoreDocument
from .utils import utc_now, utc_timestamp

__all__ = ["FirestoreDocument", "utc_now", "utc_timestamp"]
