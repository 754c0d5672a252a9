"""
SQLModel-based authorization models

This module defines the tables the security service consults:
- UserGrants: Explicit grants of a function on a resource reference
- SiteMembers: Membership of users in sites

A grant of the superuser function on any reference marks a superuser.
"""

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import Field, SQLModel

# ===== UserGrants =====


class UserGrantBase(SQLModel):
    """
    Base model with shared fields for UserGrants.

    function is a permission name (see core.permissions.Permission) and
    reference an entity reference such as "/site/abc".
    """

    user_id: str = Field(max_length=99)
    function: str = Field(max_length=99)
    reference: str = Field(default="", max_length=255)


class UserGrants(UserGrantBase, table=True):
    """Database table of explicit permission grants."""

    __tablename__ = "user_grants"

    __table_args__ = (
        UniqueConstraint("user_id", "function", "reference", name="uq_user_grant"),
        Index("idx_user_grants_function", "function"),
    )

    # Primary key
    grant_id: int | None = Field(default=None, primary_key=True)


# ===== SiteMembers =====


class SiteMemberBase(SQLModel):
    """
    Base model with shared fields for SiteMembers.

    Only active memberships allow visiting a site.
    """

    site_id: str = Field(max_length=99)
    user_id: str = Field(max_length=99)
    role: str = Field(default="access", max_length=99)
    active: bool = Field(default=True)


class SiteMembers(SiteMemberBase, table=True):
    """Database table linking users to sites."""

    __tablename__ = "site_members"

    __table_args__ = (
        UniqueConstraint("site_id", "user_id", name="uq_site_member"),
        Index("idx_site_members_user_id", "user_id"),
    )

    # Primary key
    member_id: int | None = Field(default=None, primary_key=True)
