"""
Plain value types shared by the stores and the services.

Tournaments reference users by id only. Turning ids into emails for
display is an explicit lookup (see UserStore.emails_by_id).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass(frozen=True)
class User:
    user_id: int
    email: str
    password_hash: str = field(repr=False)


@dataclass(frozen=True)
class CallerIdentity:
    """The verified identity carried by a bearer token."""
    subject_id: int
    email: str


@dataclass
class Tournament:
    tournament_id: int
    name: str
    description: str
    owner_id: int
    participant_ids: List[int] = field(default_factory=list)

    def to_dict(self, emails: Optional[Dict[int, str]] = None) -> Dict[str, Any]:
        """
        Serialize for the JSON API.

        Args:
            emails (dict, optional): user_id -> email map. When given, owner and
                participants are rendered as {"id", "email"} objects instead of
                bare ids.
        """
        if emails is None:
            owner: Any = self.owner_id
            participants: List[Any] = list(self.participant_ids)
        else:
            owner = _user_ref(self.owner_id, emails)
            participants = [_user_ref(uid, emails) for uid in self.participant_ids]

        return {
            "id": self.tournament_id,
            "name": self.name,
            "description": self.description,
            "owner": owner,
            "participants": participants,
        }


def _user_ref(user_id: int, emails: Dict[int, str]) -> Dict[str, Any]:
    return {"id": user_id, "email": emails.get(user_id)}
