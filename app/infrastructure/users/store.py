"""JSON file backed user store.

The store is the only runtime-mutable resource shared between concurrent
command invocations. Every mutation holds the store lock across the
read-modify-write and the save, so concurrent writers never lose updates;
the last writer wins.
"""

import asyncio
import json
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from infrastructure.users.models import StoredUser, Team

logger = get_module_logger()


class UserStore:
    """Persistent key-value store of StoredUser records keyed by uuid.

    Attributes:
        file_path: Location of the JSON document
        admin_uuid: Identity that is always trusted and is the administrator

    Example:
        store = UserStore("/data/users.json", admin_uuid="abcd-...")
        await store.load()

        if store.is_trusted(sender_id):
            ...
    """

    def __init__(self, file_path: str, admin_uuid: str = ""):
        self.file_path = Path(file_path)
        self.admin_uuid = admin_uuid
        self._users: Dict[str, StoredUser] = {}
        self._loaded = False
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        """Load users from disk.

        A missing or unreadable file results in an empty store that is
        written back immediately. The store is marked loaded either way.
        """
        async with self._lock:
            try:
                raw = await asyncio.to_thread(self.file_path.read_text, "utf-8")
                records = json.loads(raw)
                users = [StoredUser.model_validate(record) for record in records]
                self._users = {user.uuid: user for user in users}
                logger.info("users_loaded", count=len(self._users))
            except FileNotFoundError:
                logger.info("users_file_missing", path=str(self.file_path))
                self._users = {}
                await self._save()
            except (OSError, ValueError, TypeError, ValidationError) as e:
                logger.error(
                    "users_file_unreadable", path=str(self.file_path), error=str(e)
                )
                self._users = {}
                await self._save()
            finally:
                self._loaded = True
                admin = self._users.get(self.admin_uuid) if self.admin_uuid else None
                if admin is not None:
                    admin.trusted = True

    async def _save(self, users: Optional[Dict[str, StoredUser]] = None) -> None:
        records = self._users if users is None else users
        payload = json.dumps(
            [user.model_dump(mode="json") for user in records.values()],
            indent=2,
        )
        await asyncio.to_thread(self._write, payload)

    def _write(self, payload: str) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        self.file_path.write_text(payload, encoding="utf-8")

    def is_loaded(self) -> bool:
        """Whether load() has completed."""
        return self._loaded

    def is_admin(self, uuid: Optional[str]) -> bool:
        """Whether the identity is the configured administrator."""
        return bool(uuid) and bool(self.admin_uuid) and uuid == self.admin_uuid

    def is_trusted(self, uuid: Optional[str]) -> bool:
        """Whether the identity passes the trust gate."""
        if not uuid:
            return False
        if self.is_admin(uuid):
            return True
        user = self._users.get(uuid)
        return user.trusted if user else False

    def get_user(self, uuid: Optional[str]) -> Optional[StoredUser]:
        """Look up a user by uuid."""
        if not uuid:
            return None
        return self._users.get(uuid)

    def find_user(self, identifier: str) -> Optional[StoredUser]:
        """Look up a user by a directly typed identifier.

        Numeric identifiers match the linked external id first; anything
        else (and numeric identifiers without a linked match) is treated
        as a uuid.
        """
        identifier = identifier.strip()
        if not identifier:
            return None
        if identifier.isascii() and identifier.isdigit():
            linked_id = int(identifier)
            for user in self._users.values():
                if user.linked_id == linked_id:
                    return user
        return self._users.get(identifier)

    def trusted(self) -> List[StoredUser]:
        """All users passing the trust gate."""
        return [user for user in self._users.values() if self.is_trusted(user.uuid)]

    async def register_user(self, uuid: str, name: str, number: str = "") -> StoredUser:
        """Register (or re-register) an identity.

        Re-registration refreshes name and number and keeps trust, link
        and team state.
        """
        async with self._lock:
            existing = self._users.get(uuid)
            if existing is not None:
                user = existing.model_copy(update={"name": name, "number": number})
            else:
                user = StoredUser(
                    uuid=uuid,
                    name=name,
                    number=number,
                    trusted=self.is_admin(uuid),
                )
            await self._commit(user)
        logger.info("user_registered", uuid=uuid, name=name)
        return user

    async def trust(self, uuid: str) -> bool:
        """Mark a registered user trusted. Returns False if unknown."""

        def _trust(user: StoredUser) -> None:
            user.trusted = True

        return await self._update(uuid, "trusted", _trust)

    async def untrust(self, uuid: str) -> bool:
        """Remove trust from a registered user. Returns False if unknown."""

        def _untrust(user: StoredUser) -> None:
            user.trusted = False

        return await self._update(uuid, "untrusted", _untrust)

    async def link(self, uuid: str, linked_id: int) -> bool:
        """Link a registered user to an external ledger id."""

        def _link(user: StoredUser) -> None:
            user.linked_id = linked_id

        return await self._update(uuid, "linked", _link)

    async def unlink(self, uuid: str) -> bool:
        """Clear the external ledger link of a registered user."""

        def _unlink(user: StoredUser) -> None:
            user.linked_id = None

        return await self._update(uuid, "unlinked", _unlink)

    async def add_team(self, uuid: str, team: Team) -> bool:
        """Add a team membership to a registered user."""
        return await self._update(uuid, "team_added", lambda user: user.teams.add(team))

    async def remove_team(self, uuid: str, team: Team) -> bool:
        """Remove a team membership from a registered user."""
        return await self._update(
            uuid, "team_removed", lambda user: user.teams.discard(team)
        )

    async def _update(
        self, uuid: str, action: str, mutate: Callable[[StoredUser], None]
    ) -> bool:
        async with self._lock:
            user = self._users.get(uuid)
            if user is None:
                logger.warning("user_update_unknown_user", uuid=uuid, action=action)
                return False
            updated = user.model_copy(deep=True)
            mutate(updated)
            await self._commit(updated)
        logger.info("user_updated", uuid=uuid, action=action)
        return True

    async def _commit(self, user: StoredUser) -> None:
        """Persist user and publish it once the write succeeded.

        Must be called with the lock held.
        """
        users = {**self._users, user.uuid: user}
        await self._save(users)
        self._users = users
