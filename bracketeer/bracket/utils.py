"""Match state machine and winner advancement."""

from __future__ import annotations

from typing import Optional

from bracketeer.core.constants import MATCH_COMPLETED, MATCH_LIVE, MATCH_PENDING

from .models import Bracket, Match, Score


def settle_match(match: Match) -> None:
    """Derive status and winner from the recorded scores.

    Both players scored: the higher score wins, an equal score leaves
    ``winner`` empty for manual resolution. Either way the match completes.
    """
    p1 = match.players[0] if len(match.players) > 0 else None
    p2 = match.players[1] if len(match.players) > 1 else None
    s1 = match.score_for(p1)
    s2 = match.score_for(p2)

    if s1 is not None and s2 is not None:
        if s1 > s2:
            match.winner = p1
        elif s2 > s1:
            match.winner = p2
        else:
            match.winner = None
        match.status = MATCH_COMPLETED
    elif match.scores and any(v is not None for v in match.scores.values()):
        match.winner = None
        match.status = MATCH_LIVE
    else:
        match.winner = None
        match.status = MATCH_PENDING


def record_score(match: Match, user_id: str, score: Score) -> None:
    """Record (or overwrite) a player's score and re-derive the match state."""
    match.scores[user_id] = score
    settle_match(match)


def advance_winner(
    bracket: Bracket, round_index: int, match: Match, ticket_code: Optional[str]
) -> Optional[Match]:
    """Place the winner of a completed match into the next round.

    The winner goes into the first next-round match with an unfilled slot,
    replacing a ``None`` placeholder if there is one. The ticket code that
    settled the match is carried along under the winner's id. Returns the
    match the winner landed in, or None for a final, a tie, or a full round.
    """
    if match.status != MATCH_COMPLETED or not match.winner:
        return None

    next_round = bracket.next_round(round_index)
    if next_round is None:
        return None

    # A resubmitted score must not seat the same winner twice.
    for candidate in next_round.matches:
        if match.winner in candidate.players:
            return candidate

    target = next_round.first_open_match()
    if target is None:
        return None

    if None in target.players:
        target.players[target.players.index(None)] = match.winner
    else:
        target.players.append(match.winner)
    if ticket_code:
        target.ticket_codes[match.winner] = ticket_code
    return target
