"""
Issue score tickets to every player seated in one round of a bracket.
"""

from __future__ import annotations

import os
import sys

import firebase_admin
from firebase_admin import credentials, firestore

from bracketeer.bracket.services import BracketService
from bracketeer.ticket.services import TicketService

DEFAULT_TTL_MINUTES = 120


def initialize_app() -> firebase_admin.App:
    """Initializes the Firebase app from the service account at KEY_PATH."""
    key_path = os.environ.get("KEY_PATH")
    if not key_path:
        print("Error: KEY_PATH environment variable must be set.")
        sys.exit(1)
    return firebase_admin.initialize_app(credentials.Certificate(key_path))


def main() -> None:
    """Main entry point for the ticket script."""
    competition_id = os.environ.get("COMPETITION_ID")
    if not competition_id:
        print("Error: COMPETITION_ID environment variable must be set.")
        sys.exit(1)
    round_number = int(os.environ.get("ROUND_NUMBER") or 1)
    ttl_minutes = int(os.environ.get("TTL_MINUTES") or DEFAULT_TTL_MINUTES)

    try:
        db = firestore.client(app=initialize_app())
        bracket = BracketService(db).get_bracket(competition_id)
        tickets = TicketService(db)

        round_ = next(
            (r for r in bracket.rounds if r.round_number == round_number), None
        )
        if round_ is None:
            print(f"Round {round_number} not found in {competition_id}.")
            sys.exit(1)

        print(f"Issuing tickets for {competition_id}, round {round_number}...")
        issued = 0
        for match in round_.matches:
            for player in match.players:
                if not player:
                    continue
                ticket = tickets.issue(
                    player, competition_id, f"R{round_number}", ttl_minutes
                )
                print(f"  {match.match_id} {player}: {ticket['code']}")
                issued += 1

        print(f"\nIssued {issued} tickets, valid for {ttl_minutes} minutes.")
    except Exception as e:
        print(f"\nAn error occurred while issuing tickets: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
