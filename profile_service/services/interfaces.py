"""
Collaborator contracts consumed by ProfileManager.

Each protocol is the narrow slice of an external service the visibility rules
need. The SQL-backed adapters in this package satisfy them; tests substitute
mocks.
"""

from collections.abc import Iterable
from typing import Protocol

from profile_service.core.permissions import Permission
from profile_service.models.person import PersonRecords
from profile_service.models.user import Users


class PersonStore(Protocol):
    """Person record persistence and search."""

    async def get_person(self, agent_uuid: str, type_uuid: str) -> PersonRecords | None: ...

    async def get_persons(
        self, agent_uuids: Iterable[str], type_uuid: str
    ) -> dict[str, PersonRecords]: ...

    async def create(
        self, agent_uuid: str, type_uuid: str, uid: str | None = None
    ) -> PersonRecords: ...

    async def save(self, person: PersonRecords) -> None: ...

    async def find_persons(self, search: str) -> list[PersonRecords]: ...


class UserDirectory(Protocol):
    """Identity resolution. get_user raises UserNotFoundError."""

    async def get_user(self, user_id: str) -> Users: ...


class SecurityService(Protocol):
    """Yes/no permission checks. Either call may raise."""

    async def is_super_user(self, user_id: str | None = None) -> bool: ...

    async def unlock(self, user_id: str, function: str | Permission, reference: str) -> bool: ...


class SiteService(Protocol):
    """Current site context."""

    def get_current_site_id(self) -> str: ...

    def site_reference(self, site_id: str) -> str: ...


class ServerConfiguration(Protocol):
    """Named string settings."""

    def get_string(self, key: str, default: str = "") -> str: ...


class SessionContext(Protocol):
    """Authoritative identity of the current requester."""

    def get_current_user_id(self) -> str | None: ...
