"""Fixtures for unit tests: ProfileManager over mocked collaborators."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from profile_service.config import PersonType
from profile_service.core.errors import UserNotFoundError
from profile_service.core.permissions import site_reference
from profile_service.models.person import PersonRecords
from profile_service.models.user import Users
from profile_service.services.profile_manager import ProfileManager


def make_person(
    agent_uuid: str,
    type_uuid: str = PersonType.USER_MUTABLE,
    **fields,
) -> PersonRecords:
    """Build an unsaved person record."""
    fields.setdefault("uid", agent_uuid)
    return PersonRecords(agent_uuid=agent_uuid, type_uuid=type_uuid, **fields)


@pytest.fixture
def person_factory():
    return make_person


@pytest.fixture
def person_store():
    """Person store with no records at all."""
    store = AsyncMock()
    store.get_person.return_value = None
    store.get_persons.return_value = {}
    store.find_persons.return_value = []
    store.create.side_effect = lambda agent_uuid, type_uuid, uid=None: make_person(
        agent_uuid, type_uuid, uid=uid or agent_uuid
    )
    return store


@pytest.fixture
def user_directory():
    """Directory knowing alice, bob and admin."""
    known = {
        "alice": Users(user_id="alice", eid="asmith"),
        "bob": Users(user_id="bob", eid="bjones"),
        "admin": Users(user_id="admin", eid="admin"),
    }

    async def get_user(user_id: str) -> Users:
        if user_id not in known:
            raise UserNotFoundError(user_id)
        return known[user_id]

    directory = AsyncMock()
    directory.get_user.side_effect = get_user
    return directory


@pytest.fixture
def security_service():
    """Requester is not a superuser; every grant check succeeds."""
    security = AsyncMock()
    security.is_super_user.return_value = False
    security.unlock.return_value = True
    return security


@pytest.fixture
def site_service(session_context):
    site = MagicMock()
    site.get_current_site_id.side_effect = lambda: session_context.site_id
    site.site_reference.side_effect = site_reference
    return site


@pytest.fixture
def server_properties() -> dict[str, str]:
    return {}


@pytest.fixture
def server_configuration(server_properties):
    config = MagicMock()
    config.get_string.side_effect = lambda key, default="": server_properties.get(key, default)
    return config


@pytest.fixture
def manager(
    person_store,
    user_directory,
    security_service,
    site_service,
    server_configuration,
    session_context,
) -> ProfileManager:
    return ProfileManager(
        person_store=person_store,
        user_directory=user_directory,
        security_service=security_service,
        site_service=site_service,
        server_configuration=server_configuration,
        session_context=session_context,
        admin_user_id="admin",
        anonymous_user_id="Anonymous",
    )
