"""
Generate the wrap report of a finished competition and fold it into the leaderboards.
"""

from __future__ import annotations

import logging
import os
import sys

import firebase_admin
from firebase_admin import credentials, firestore

from bracketeer.report.services import WrapReportService


def initialize_app() -> firebase_admin.App:
    """Initializes the Firebase app from the service account at KEY_PATH."""
    key_path = os.environ.get("KEY_PATH")
    if not key_path:
        print("Error: KEY_PATH environment variable must be set.")
        sys.exit(1)
    return firebase_admin.initialize_app(credentials.Certificate(key_path))


def main() -> None:
    """Main entry point for the wrap-up script."""
    logging.basicConfig(level=logging.INFO)

    competition_id = os.environ.get("COMPETITION_ID")
    if not competition_id:
        print("Error: COMPETITION_ID environment variable must be set.")
        sys.exit(1)

    try:
        db = firestore.client(app=initialize_app())
        report = WrapReportService(db).generate(competition_id)
    except Exception as e:
        print(f"\nAn error occurred during wrap-up: {e}")
        sys.exit(1)

    summary = report["summary"]
    print(f"\nWrap-up of {competition_id} completed.")
    print(f"  Champion: {report['champion'] or 'undecided'}")
    print(f"  Matches: {summary['completedMatches']}/{report['totalMatches']} completed")
    print(f"  Players: {summary['totalPlayers']}")
    print(f"  Average points per player: {summary['averagePointsPerPlayer']:.1f}")


if __name__ == "__main__":
    main()
