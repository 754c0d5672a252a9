"""
SQLModel-based user directory model.

The directory is the authority on whether an identity exists at all. Person
records hang off directory users by user_id.
"""

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


class UserBase(SQLModel):
    """Base model with shared public fields for Users."""

    eid: str = Field(max_length=99)  # External login identifier
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)


class Users(UserBase, table=True):
    """Database table for directory users."""

    __tablename__ = "users"

    __table_args__ = (Index("idx_users_eid", "eid", unique=True),)

    # Primary key (internal identity)
    user_id: str = Field(primary_key=True, max_length=99)
