"""
Site context service.

The current site is the context of the tool placement serving the request,
carried in the request context alongside the requester.
"""

from profile_service.core.context import RequestSessionContext
from profile_service.core.errors import AuthorizationCheckError
from profile_service.core.permissions import site_reference


class PlacementSiteService:
    """Site membership context derived from the current placement."""

    def __init__(self, session_context: RequestSessionContext | None = None):
        self.session_context = session_context or RequestSessionContext()

    def get_current_site_id(self) -> str:
        """
        Site of the current tool placement.

        Raises:
            AuthorizationCheckError: If the request carries no placement
        """
        site_id = self.session_context.get_current_site_id()
        if not site_id:
            raise AuthorizationCheckError("No current tool placement")
        return site_id

    def site_reference(self, site_id: str) -> str:
        return site_reference(site_id)
