"""Stored user models and enums.

Defines the persisted representation of a chat participant known to the bot.
"""

from enum import IntEnum
from typing import Optional, Set

from pydantic import BaseModel, ConfigDict, Field


class Team(IntEnum):
    """Teams a user can belong to. Values are persisted, never renumber."""

    GUEST = 0
    ABC = 1
    CBC = 2

    @property
    def label(self) -> str:
        """Human readable team name."""
        return self.name if self is not Team.GUEST else "Guest"


class StoredUser(BaseModel):
    """A registered chat participant.

    Identity is the Signal UUID; everything else is descriptive or
    authorization state owned by the user store.
    """

    model_config = ConfigDict(use_enum_values=False)

    uuid: str = Field(..., description="Stable Signal identity")
    name: str = Field(default="", description="Display name at registration time")
    number: str = Field(default="", description="Phone number, may be empty")
    trusted: bool = Field(default=False, description="Passes the trust gate")
    linked_id: Optional[int] = Field(
        default=None, description="Linked user id in the external ledger system"
    )
    teams: Set[Team] = Field(default_factory=set, description="Team memberships")

    def team_labels(self) -> str:
        """Comma separated team names, sorted by team value."""
        return ", ".join(team.label for team in sorted(self.teams))
