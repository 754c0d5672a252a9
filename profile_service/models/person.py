"""
SQLModel-based person record models

A person record holds the directory-style attributes of one user. Every
user may own two records, distinguished by type_uuid:

PersonRecordBase (shared attribute fields)
    └─> PersonRecords (database table, adds keys, photo bytes and timestamps)

- user-mutable records are edited by the owning user and carry the privacy
  flags that drive profile visibility
- system-mutable records are maintained by the institutional feed and carry
  the official (institutional) photo
"""

from datetime import UTC, datetime

from sqlalchemy import Column, Index, LargeBinary, UniqueConstraint
from sqlmodel import Field, SQLModel


class PersonRecordBase(SQLModel):
    """
    Base model with the attribute fields of a person record.

    Privacy flags are tri-state: None means the owner never made a choice,
    which every visibility rule treats as "hidden".
    """

    # Names
    given_name: str | None = Field(default=None, max_length=100)
    surname: str | None = Field(default=None, max_length=100)
    nickname: str | None = Field(default=None, max_length=100)
    title: str | None = Field(default=None, max_length=100)
    department: str | None = Field(default=None, max_length=100)

    # Contact information
    mail: str | None = Field(default=None, max_length=255)
    labeled_uri: str | None = Field(default=None, max_length=255)  # Homepage
    home_phone: str | None = Field(default=None, max_length=50)
    telephone_number: str | None = Field(default=None, max_length=50)
    other_information: str | None = Field(default=None)

    # Picture preferences
    picture_url: str | None = Field(default=None, max_length=255)
    institutional_picture_preferred: bool | None = Field(default=None)

    # Privacy flags
    hide_public_info: bool | None = Field(default=None)
    hide_private_info: bool | None = Field(default=None)


class PersonRecords(PersonRecordBase, table=True):
    """
    Database table for person records.

    Keyed by (agent_uuid, type_uuid). agent_uuid is the internal identity used
    by the session; uid is the external login identifier shown to people.
    """

    __tablename__ = "person_records"

    __table_args__ = (
        UniqueConstraint("agent_uuid", "type_uuid", name="uq_person_agent_type"),
        Index("idx_person_uid", "uid"),
    )

    # Primary key
    id: int | None = Field(default=None, primary_key=True)

    agent_uuid: str = Field(max_length=99, index=True)
    type_uuid: str = Field(max_length=36)
    uid: str | None = Field(default=None, max_length=99)

    # Institutional photo (system-mutable records)
    jpeg_photo: bytes | None = Field(default=None, sa_column=Column(LargeBinary, nullable=True))

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime | None = Field(default=None)
