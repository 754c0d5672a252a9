"""
SQLModel table models for the profile service.

Importing this package registers every table on SQLModel.metadata.
"""

from profile_service.models.permissions import SiteMembers, UserGrants
from profile_service.models.person import PersonRecords
from profile_service.models.user import Users

__all__ = [
    "PersonRecords",
    "SiteMembers",
    "UserGrants",
    "Users",
]
