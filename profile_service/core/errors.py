"""
Error taxonomy for profile visibility decisions.

Only InvalidArgumentError ever reaches callers of ProfileManager. The other
two are raised by collaborators and converted to an absent result or a
denial at the lookup boundary.
"""


class InvalidArgumentError(ValueError):
    """A required identity, query or profile was empty or missing."""


class UserNotFoundError(LookupError):
    """The user directory has no entry for the requested identity."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User {user_id} does not exist")
        self.user_id = user_id


class AuthorizationCheckError(Exception):
    """A permission probe against the security service failed."""
