"""
Profile visibility service.

Decides which parts of a user's profile a requester may see:
- Owners and superusers always see the complete profile
- Anyone else sees it only when the owner explicitly un-hid both the public
  and the private information (unset flags count as hidden)
- Search results follow a three-tier ladder: complete, public-only, excluded
- The institutional photo is disclosed to the owner, superusers, explicit
  grant holders, and otherwise only when the owner opted into showing it

The requester identity is read from the session context on every call, so a
manager holds no per-request state and may be reused across requests that
share its database session.
"""

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from profile_service.config import ConfigKey, PersonType, settings
from profile_service.core.context import RequestSessionContext
from profile_service.core.errors import InvalidArgumentError, UserNotFoundError
from profile_service.core.logging import get_logger
from profile_service.core.permissions import Permission, SqlSecurityService
from profile_service.schemas.profile import PhotoPresentation, Profile
from profile_service.services.interfaces import (
    PersonStore,
    SecurityService,
    ServerConfiguration,
    SessionContext,
    SiteService,
    UserDirectory,
)
from profile_service.services.person_store import SqlPersonStore
from profile_service.services.server_config import SettingsServerConfiguration
from profile_service.services.site import PlacementSiteService
from profile_service.services.user_directory import SqlUserDirectory

logger = get_logger(__name__)

# Fields cleared from profiles that only expose public information
PRIVATE_PROFILE_FIELDS = (
    "institutional_picture",
    "picture_url",
    "email",
    "homepage",
    "home_phone",
    "work_phone",
    "other_information",
)


class ProfileManager:
    """Evaluates profile visibility for the current requester."""

    def __init__(
        self,
        person_store: PersonStore,
        user_directory: UserDirectory,
        security_service: SecurityService,
        site_service: SiteService,
        server_configuration: ServerConfiguration,
        session_context: SessionContext,
        admin_user_id: str | None = None,
        anonymous_user_id: str | None = None,
    ):
        self.person_store = person_store
        self.user_directory = user_directory
        self.security_service = security_service
        self.site_service = site_service
        self.server_configuration = server_configuration
        self.session_context = session_context
        self.admin_user_id = admin_user_id or settings.ADMIN_USER_ID
        self.anonymous_user_id = anonymous_user_id or settings.ANONYMOUS_USER_ID

    # === Profile lookup ===

    async def get_profile(self) -> Profile | None:
        """Profile of the current requester, None when it cannot be resolved."""
        user_id = self._current_user_id()
        if not user_id:
            return None
        profiles = await self.get_profiles({user_id})
        return profiles.get(user_id)

    async def get_profiles(self, user_ids: Iterable[str]) -> dict[str, Profile]:
        """
        Resolve the user-mutable profiles of many users.

        Resolution is best-effort: blank ids and identities unknown to the
        user directory are logged and left out of the result. Known users
        without a person record get an empty one created.

        Args:
            user_ids: Identities to resolve

        Returns:
            Dict mapping identity to profile, without ordering guarantees
        """
        ids = set(user_ids or ())
        if not ids:
            return {}

        persons = await self.person_store.get_persons(
            (user_id for user_id in ids if user_id), PersonType.USER_MUTABLE
        )

        profiles: dict[str, Profile] = {}
        for user_id in ids:
            if not user_id or not user_id.strip():
                logger.info("profile_lookup_illegal_user_id", user_id=user_id)
                continue

            try:
                user = await self.user_directory.get_user(user_id)
            except UserNotFoundError:
                logger.debug("profile_lookup_unknown_user", user_id=user_id)
                continue

            person = persons.get(user_id)
            if person is None:
                logger.info("profile_lookup_missing_person", user_id=user.user_id, eid=user.eid)
                person = await self.person_store.create(
                    user.user_id, PersonType.USER_MUTABLE, uid=user.eid
                )
            profiles[user_id] = Profile.from_person(person)

        logger.debug("profile_lookup_complete", requested=len(ids), resolved=len(profiles))
        return profiles

    async def get_user_profile_by_id(self, user_id: str) -> Profile | None:
        """User-mutable profile of one user, without creating a record."""
        if not user_id:
            raise InvalidArgumentError("Illegal user_id argument passed")

        person = await self.person_store.get_person(user_id, PersonType.USER_MUTABLE)
        if person is None:
            return None
        return Profile.from_person(person)

    async def save(self, profile: Profile | None) -> None:
        """Persist the editable fields of a profile onto its person record."""
        if profile is None:
            raise InvalidArgumentError("Illegal profile argument passed")
        if profile.person is None:
            raise InvalidArgumentError("Profile has no person record to save")

        logger.debug("profile_save", user_id=profile.user_id)
        await self.person_store.save(profile.apply_to(profile.person))

    async def find_profiles(self, search: str) -> list[Profile]:
        """
        Search user-mutable profiles visible to the current requester.

        Each match is returned complete to its owner and to superusers,
        complete to others when both hide flags are explicitly off, public-only
        when only the public flag is explicitly off, and not at all otherwise.

        Raises:
            InvalidArgumentError: If search is empty
        """
        if not search:
            raise InvalidArgumentError("Illegal search argument passed")

        logger.debug("find_profiles", search=search)
        persons = await self.person_store.find_persons(search)
        if not persons:
            return []

        current_user_id = self._current_user_id()
        is_super_user = await self._is_super_user()

        results: list[Profile] = []
        for person in persons:
            if person.type_uuid != PersonType.USER_MUTABLE:
                continue

            profile = Profile.from_person(person)
            if is_super_user or (current_user_id and profile.user_id == current_user_id):
                results.append(profile)
            elif profile.hide_public_info is False:
                if profile.hide_private_info is False:
                    results.append(profile)
                else:
                    results.append(self.get_only_public_profile(profile))

        return results

    # === Visibility ===

    def is_current_user_profile(self, profile: Profile | None) -> bool:
        """True if the profile belongs to the current requester."""
        if profile is None or not profile.user_id:
            return False
        return profile.user_id == self._current_user_id()

    async def display_complete_profile(self, profile: Profile | None) -> bool:
        """
        Check if the current requester may see the complete profile.

        Owners and superusers always may. Others need both hide flags to be
        explicitly False; an unset flag keeps the profile hidden.
        """
        if profile is None:
            return False
        if self.is_current_user_profile(profile) or await self._is_super_user():
            return True
        return profile.hide_private_info is False and profile.hide_public_info is False

    def get_only_public_profile(self, profile: Profile) -> Profile:
        """
        Copy of a profile with photos and contact information cleared.

        Identity, names and privacy flags are kept. The given profile and
        its person record are left untouched. The copy is detached from the
        record, so it cannot expose the cleared data or be saved back over it.
        """
        update: dict[str, object] = {field: None for field in PRIVATE_PROFILE_FIELDS}
        update["person"] = None
        return profile.model_copy(update=update)

    # === Photos ===

    async def choose_photo_presentation(self, profile: Profile | None) -> PhotoPresentation:
        """
        Decide which picture to show for a profile.

        Outcomes are tested in this order and the first match wins:
        1. CUSTOM_URL: institutional picture not preferred, picture URL set
        2. INSTITUTIONAL: institutional picture preferred and available
        3. INSTITUTIONAL_UNAVAILABLE: institutional picture preferred, none on file
        4. NONE: anything else, including profiles not completely visible
        """
        if profile is None or not await self.display_complete_profile(profile):
            return PhotoPresentation.NONE

        if profile.institutional_picture_preferred is not True:
            if profile.picture_url and profile.picture_url.strip():
                return PhotoPresentation.CUSTOM_URL
            return PhotoPresentation.NONE

        photo = await self.get_institutional_photo(profile.user_id) if profile.user_id else None
        if photo:
            return PhotoPresentation.INSTITUTIONAL
        return PhotoPresentation.INSTITUTIONAL_UNAVAILABLE

    async def is_display_picture_url(self, profile: Profile | None) -> bool:
        return await self.choose_photo_presentation(profile) == PhotoPresentation.CUSTOM_URL

    async def is_display_university_photo(self, profile: Profile | None) -> bool:
        return await self.choose_photo_presentation(profile) == PhotoPresentation.INSTITUTIONAL

    async def is_display_university_photo_unavailable(self, profile: Profile | None) -> bool:
        presentation = await self.choose_photo_presentation(profile)
        return presentation == PhotoPresentation.INSTITUTIONAL_UNAVAILABLE

    async def is_display_no_photo(self, profile: Profile | None) -> bool:
        return await self.choose_photo_presentation(profile) == PhotoPresentation.NONE

    async def get_institutional_photo(
        self, user_id: str, viewer_has_permission: bool = False
    ) -> bytes | None:
        """
        Fetch a user's institutional photo if the requester may see it.

        The photo is returned to the user themself, to superusers and to
        callers holding an explicit grant (viewer_has_permission). Anyone else
        gets it only when the owner un-hid both public and private information
        and chose to display the institutional picture.

        The system-mutable record is created on first access for users known
        to the directory. Unknown users yield None.

        Args:
            user_id: Owner of the photo
            viewer_has_permission: Caller already verified an explicit grant

        Returns:
            Photo bytes, or None when absent or not disclosed

        Raises:
            InvalidArgumentError: If user_id is empty
        """
        if not user_id:
            raise InvalidArgumentError("Illegal user_id argument passed")

        system_person = await self.person_store.get_person(user_id, PersonType.SYSTEM_MUTABLE)
        if system_person is None:
            try:
                user = await self.user_directory.get_user(user_id)
            except UserNotFoundError:
                logger.warning("institutional_photo_unknown_user", user_id=user_id)
                return None
            system_person = await self.person_store.create(
                user.user_id, PersonType.SYSTEM_MUTABLE, uid=user.eid
            )

        if (
            user_id == self._current_user_id()
            or await self._is_super_user()
            or viewer_has_permission
        ):
            logger.debug("institutional_photo_fetched", user_id=user_id)
            return system_person.jpeg_photo

        person = await self.person_store.get_person(user_id, PersonType.USER_MUTABLE)
        if (
            person is not None
            and person.hide_public_info is False
            and person.hide_private_info is False
            and person.institutional_picture_preferred is True
        ):
            logger.debug("institutional_photo_fetched", user_id=user_id)
            return system_person.jpeg_photo

        return None

    # === Tool visibility ===

    async def is_show_tool(self) -> bool:
        """True if the requester has a profile of their own to edit."""
        current_user_id = self._current_user_id()
        profile = await self.get_profile()
        if profile is None or not profile.user_id or not current_user_id:
            return False
        return (
            profile.user_id != self.anonymous_user_id
            and profile.user_id.lower() == current_user_id.lower()
        )

    async def is_show_search(self) -> bool:
        """
        Check if profile search is offered to the current requester.

        Search must be enabled by "profile.showSearch" (default on) unless the
        requester is the admin, the requester must not be anonymous, and must
        be a member of the current site. Membership is checked against the
        internal identity unless separate ids/eids are switched off, in which
        case the login identifier is used.
        """
        show_search = self.server_configuration.get_string(ConfigKey.SHOW_SEARCH, "true")
        if show_search.lower() == "false" and self._current_user_id() != self.admin_user_id:
            return False

        profile = await self.get_profile()
        if profile is None or profile.user_id == self.anonymous_user_id:
            return False

        separate_id_eid = self.server_configuration.get_string(ConfigKey.SEPARATE_ID_EID, "true")
        if separate_id_eid.lower() != "false":
            member_id = profile.agent_uuid
        else:
            member_id = profile.eid or profile.user_id

        if not member_id:
            return False
        return await self.is_site_member(member_id)

    async def is_site_member(self, user_id: str) -> bool:
        """
        Check whether a user may visit the current site.

        Any failure of the membership probe counts as "not a member".
        """
        try:
            site_id = self.site_service.get_current_site_id()
            return await self.security_service.unlock(
                user_id, Permission.SITE_VISIT, self.site_service.site_reference(site_id)
            )
        except Exception:
            logger.exception("site_membership_check_failed", user_id=user_id)
            return False

    # === Helpers ===

    def _current_user_id(self) -> str | None:
        return self.session_context.get_current_user_id()

    async def _is_super_user(self) -> bool:
        try:
            return await self.security_service.is_super_user()
        except Exception:
            logger.exception("super_user_check_failed", requester=self._current_user_id())
            return False


def create_profile_manager(
    db: AsyncSession,
    session_context: RequestSessionContext | None = None,
) -> ProfileManager:
    """
    Build a ProfileManager over the SQL-backed collaborators.

    Usage:
        async with get_async_session() as db:
            manager = create_profile_manager(db)
            visible = await manager.find_profiles("smith")
            await db.commit()
    """
    session_context = session_context or RequestSessionContext()
    return ProfileManager(
        person_store=SqlPersonStore(db),
        user_directory=SqlUserDirectory(db),
        security_service=SqlSecurityService(db, session_context),
        site_service=PlacementSiteService(session_context),
        server_configuration=SettingsServerConfiguration(),
        session_context=session_context,
    )
