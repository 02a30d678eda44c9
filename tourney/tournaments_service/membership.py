"""
Tournament lifecycle and participant-set rules.

Membership is a set kept in join order:
- the creator is owner and first participant;
- joining twice is a no-op that returns the current state, never an error.
"""

import logging
from typing import Dict, Iterable, List

from tourney.database.models import CallerIdentity, Tournament
from tourney.errors import NotFound

# tournament_id is a PostgreSQL INTEGER column
MAX_TOURNAMENT_ID = 2**31 - 1


def create_tournament(tournaments, name: str, description: str, caller: CallerIdentity) -> Tournament:
    tournament = tournaments.create(name, description, caller.subject_id)
    logging.info(
        f"[Tournaments] Created tournament_id={tournament.tournament_id} "
        f"owner={caller.subject_id}"
    )
    return tournament


def list_tournaments(tournaments) -> List[Tournament]:
    """All tournaments in store order. No authentication needed."""
    return tournaments.list_all()


def resolve_emails(users, tournaments: Iterable[Tournament]) -> Dict[int, str]:
    """Look up the email of every owner and participant referenced by `tournaments`."""
    ids = set()
    for t in tournaments:
        ids.add(t.owner_id)
        ids.update(t.participant_ids)
    return users.emails_by_id(ids)


def join_tournament(tournaments, tournament_id: int, caller: CallerIdentity) -> Tournament:
    """
    Add the caller to a tournament's participants.

    Raises:
        NotFound: If the tournament does not exist (or vanished mid-join).
    """
    if not 0 < tournament_id <= MAX_TOURNAMENT_ID:
        raise NotFound()

    tournament = tournaments.get(tournament_id)
    if tournament is None:
        raise NotFound()

    if caller.subject_id in tournament.participant_ids:
        return tournament

    # The store's add is itself idempotent, so a concurrent join by the same
    # caller between the read above and this write is harmless.
    updated = tournaments.add_participant(tournament_id, caller.subject_id)
    if updated is None:
        raise NotFound()

    logging.info(f"[Tournaments] user_id={caller.subject_id} joined tournament_id={tournament_id}")
    return updated
