"""
Pydantic schemas for profiles.

A Profile is a detached view over exactly one person record. The record may
be absent, in which case the profile is empty apart from its user_id. Views
are copied, never written through, so redacting a profile can never touch the
stored record.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from profile_service.models.person import PersonRecords


class PhotoPresentation(str, Enum):
    """Which picture, if any, a profile page shows."""

    CUSTOM_URL = "custom_url"
    INSTITUTIONAL = "institutional"
    INSTITUTIONAL_UNAVAILABLE = "institutional_unavailable"
    NONE = "none"


class Profile(BaseModel):
    """View over a person record"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user_id: str | None = None
    eid: str | None = None  # External login identifier

    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    position: str | None = None
    department: str | None = None

    email: str | None = None
    homepage: str | None = None
    home_phone: str | None = None
    work_phone: str | None = None
    other_information: str | None = None

    picture_url: str | None = None
    institutional_picture_preferred: bool | None = None
    institutional_picture: bytes | None = None

    hide_public_info: bool | None = None
    hide_private_info: bool | None = None

    # Underlying record, kept for save() and for the agent identifier
    person: PersonRecords | None = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_person(cls, person: PersonRecords) -> "Profile":
        """Build a profile view from a person record."""
        return cls(
            user_id=person.agent_uuid,
            eid=person.uid,
            first_name=person.given_name,
            last_name=person.surname,
            nickname=person.nickname,
            position=person.title,
            department=person.department,
            email=person.mail,
            homepage=person.labeled_uri,
            home_phone=person.home_phone,
            work_phone=person.telephone_number,
            other_information=person.other_information,
            picture_url=person.picture_url,
            institutional_picture_preferred=person.institutional_picture_preferred,
            institutional_picture=person.jpeg_photo,
            hide_public_info=person.hide_public_info,
            hide_private_info=person.hide_private_info,
            person=person,
        )

    @classmethod
    def empty(cls, user_id: str | None) -> "Profile":
        """Profile over an absent person record."""
        return cls(user_id=user_id)

    @property
    def agent_uuid(self) -> str | None:
        """Internal identity of the underlying record."""
        return self.person.agent_uuid if self.person is not None else self.user_id

    def apply_to(self, person: PersonRecords) -> PersonRecords:
        """
        Copy the user-editable fields of this view onto a person record.

        Identity columns and the institutional photo are owned by the store
        and the institutional feed, so they are left alone.
        """
        person.given_name = self.first_name
        person.surname = self.last_name
        person.nickname = self.nickname
        person.title = self.position
        person.department = self.department
        person.mail = self.email
        person.labeled_uri = self.homepage
        person.home_phone = self.home_phone
        person.telephone_number = self.work_phone
        person.other_information = self.other_information
        person.picture_url = self.picture_url
        person.institutional_picture_preferred = self.institutional_picture_preferred
        person.hide_public_info = self.hide_public_info
        person.hide_private_info = self.hide_private_info
        return person
