"""Shared fixtures.

The default user store holds:
    admin-uuid  administrator (trusted through configuration)
    alice-uuid  trusted, linked to 42, ABC
    bob-uuid    trusted, guest
    carol-uuid  registered, not trusted
    dave-uuid   trusted, CBC
"""

import json

import pytest
import pytest_asyncio

from infrastructure.users import Team, UserStore
from tests.factories.users import ADMIN_UUID, make_stored_user


def default_users():
    return [
        make_stored_user(ADMIN_UUID, name="Admin", trusted=False),
        make_stored_user(
            "alice-uuid", number="+31611111111", linked_id=42, teams=[Team.ABC]
        ),
        make_stored_user("bob-uuid", teams=[Team.GUEST]),
        make_stored_user("carol-uuid", trusted=False),
        make_stored_user("dave-uuid", teams=[Team.CBC]),
    ]


@pytest.fixture
def users_file(tmp_path):
    """Path of the JSON document backing the user store."""
    return tmp_path / "data" / "users.json"


@pytest.fixture
def user_store_factory(users_file):
    """Factory for user stores backed by a temporary file.

    Returns:
        Async callable (users=None, admin_uuid=ADMIN_UUID, load=True)
    """

    async def _factory(users=None, admin_uuid: str = ADMIN_UUID, load: bool = True):
        if users is not None:
            users_file.parent.mkdir(parents=True, exist_ok=True)
            users_file.write_text(
                json.dumps([user.model_dump(mode="json") for user in users]),
                encoding="utf-8",
            )
        store = UserStore(str(users_file), admin_uuid=admin_uuid)
        if load:
            await store.load()
        return store

    return _factory


@pytest_asyncio.fixture
async def user_store(user_store_factory):
    """Loaded user store with the default users."""
    return await user_store_factory(users=default_users())
