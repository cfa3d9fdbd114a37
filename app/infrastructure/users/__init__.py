"""User store collaborator.

Persistent registry of chat participants with trust, external-link and
team state, consumed by the command core for trust and policy decisions.
"""

from infrastructure.users.models import StoredUser, Team
from infrastructure.users.store import UserStore

__all__ = ["StoredUser", "Team", "UserStore"]
