"""
Permission resolution for profile visibility decisions.

This module provides:
- Permission constants (enum) for type-safe permission references
- SqlSecurityService, answering superuser and grant checks from the database

Grants come from two tables:
- user_grants: explicit (user, function, reference) grants
- site_members: active membership implies site.visit on "/site/<id>"
"""

from enum import Enum

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from profile_service.config import settings
from profile_service.core.context import RequestSessionContext
from profile_service.models.permissions import SiteMembers, UserGrants

SITE_REFERENCE_PREFIX = "/site/"


class Permission(str, Enum):
    """Type-safe permission constants mapped to grant function names."""

    SUPERUSER = "admin.superuser"  # Bypasses every visibility rule
    SITE_VISIT = "site.visit"  # Enter a site and see its members


def site_reference(site_id: str) -> str:
    """Entity reference for a site, as used in grants."""
    return f"{SITE_REFERENCE_PREFIX}{site_id}"


class SqlSecurityService:
    """Authorization service backed by the grant and membership tables."""

    def __init__(self, db: AsyncSession, session_context: RequestSessionContext | None = None):
        self.db = db
        self.session_context = session_context or RequestSessionContext()

    async def is_super_user(self, user_id: str | None = None) -> bool:
        """
        Check whether a user (default: the current requester) is a superuser.

        The admin identity is always a superuser; anyone else needs an
        explicit superuser grant.
        """
        if user_id is None:
            user_id = self.session_context.get_current_user_id()
        if not user_id:
            return False
        if user_id == settings.ADMIN_USER_ID:
            return True

        result = await self.db.execute(
            select(UserGrants.grant_id)  # type: ignore[call-overload]
            .where(UserGrants.user_id == user_id)
            .where(UserGrants.function == Permission.SUPERUSER.value)
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def unlock(self, user_id: str, function: str | Permission, reference: str) -> bool:
        """
        Check if a user may perform a function on a resource reference.

        Args:
            user_id: Identity to check
            function: Permission name (string or Permission enum)
            reference: Entity reference, e.g. "/site/abc"

        Returns:
            True if the user is a superuser, holds an explicit grant, or (for
            site.visit) is an active member of the referenced site
        """
        function_name = function.value if isinstance(function, Permission) else function

        if await self.is_super_user(user_id):
            return True

        result = await self.db.execute(
            select(UserGrants.grant_id)  # type: ignore[call-overload]
            .where(UserGrants.user_id == user_id)
            .where(UserGrants.function == function_name)
            .where(UserGrants.reference == reference)
            .limit(1)
        )
        if result.scalar_one_or_none() is not None:
            return True

        if function_name != Permission.SITE_VISIT.value or not reference.startswith(
            SITE_REFERENCE_PREFIX
        ):
            return False

        site_id = reference.removeprefix(SITE_REFERENCE_PREFIX)
        result = await self.db.execute(
            select(SiteMembers.member_id)  # type: ignore[call-overload]
            .where(SiteMembers.site_id == site_id)
            .where(SiteMembers.user_id == user_id)
            .where(SiteMembers.active == True)  # noqa: E712
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
