"""
Person record store.

SQL-backed persistence and free-text search for person records, keyed by
(agent_uuid, type_uuid).
"""

from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from profile_service.config import PersonType
from profile_service.core.logging import get_logger
from profile_service.models.person import PersonRecords

logger = get_logger(__name__)

LIKE_ESCAPE = "\\"

# Attributes matched by find_persons
SEARCHABLE_COLUMNS = (
    PersonRecords.agent_uuid,
    PersonRecords.uid,
    PersonRecords.given_name,
    PersonRecords.surname,
    PersonRecords.nickname,
    PersonRecords.mail,
    PersonRecords.department,
)


class SqlPersonStore:
    """Person record store over an async database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_person(self, agent_uuid: str, type_uuid: str) -> PersonRecords | None:
        """Fetch the record of the given type for an identity, if any."""
        result = await self.db.execute(
            select(PersonRecords)
            .where(PersonRecords.agent_uuid == agent_uuid)
            .where(PersonRecords.type_uuid == type_uuid)
        )
        return result.scalar_one_or_none()

    async def get_persons(
        self, agent_uuids: Iterable[str], type_uuid: str
    ) -> dict[str, PersonRecords]:
        """
        Fetch records of one type for many identities in a single query.

        Returns:
            Dict mapping agent_uuid to record. Identities without a record
            will not appear in the result.
        """
        ids = {agent_uuid for agent_uuid in agent_uuids if agent_uuid}
        if not ids:
            return {}

        result = await self.db.execute(
            select(PersonRecords)
            .where(PersonRecords.agent_uuid.in_(ids))  # type: ignore[attr-defined]
            .where(PersonRecords.type_uuid == type_uuid)
        )
        return {person.agent_uuid: person for person in result.scalars().all()}

    async def create(
        self, agent_uuid: str, type_uuid: str, uid: str | None = None
    ) -> PersonRecords:
        """
        Create and persist an empty record for an identity.

        Returns the existing record when one of the same type is already
        present, so concurrent first accesses converge on one row.
        """
        existing = await self.get_person(agent_uuid, type_uuid)
        if existing is not None:
            return existing

        person = PersonRecords(agent_uuid=agent_uuid, type_uuid=type_uuid, uid=uid or agent_uuid)
        self.db.add(person)
        await self.db.flush()
        logger.info("person_record_created", agent_uuid=agent_uuid, type_uuid=type_uuid)
        return person

    async def save(self, person: PersonRecords) -> None:
        """Persist a caller-mutated record."""
        person.updated_at = datetime.now(UTC)
        self.db.add(person)
        await self.db.commit()
        logger.debug("person_record_saved", agent_uuid=person.agent_uuid)

    async def find_persons(self, search: str) -> list[PersonRecords]:
        """
        Free-text search over user-mutable records.

        Matches a case-insensitive substring of the identity, name, email and
        department attributes. Wildcard characters in the search are matched
        literally.
        """
        pattern = f"%{escape_like(search.strip())}%"
        matches = [
            column.ilike(pattern, escape=LIKE_ESCAPE)  # type: ignore[union-attr]
            for column in SEARCHABLE_COLUMNS
        ]
        result = await self.db.execute(
            select(PersonRecords)
            .where(PersonRecords.type_uuid == PersonType.USER_MUTABLE)
            .where(or_(*matches))
            .order_by(PersonRecords.surname, PersonRecords.given_name)
        )
        return list(result.scalars().all())


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches only itself."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
