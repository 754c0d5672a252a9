"""
Pydantic schemas for profile views
"""
from profile_service.schemas.profile import PhotoPresentation, Profile

__all__ = [
    "PhotoPresentation",
    "Profile",
]
