"""
Request-scoped session context.

Holds the identity of the current requester and the site placement of the
current tool for the duration of one request. Values live in context
variables so they follow the request across awaits without any shared state.

The presentation tier calls set_request_context() at the start of each
request and clear_request_context() when it completes. Everything in this
package reads the values fresh on every check.
"""

from contextvars import ContextVar

# Context variables for request tracking
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)
site_id_ctx: ContextVar[str | None] = ContextVar("site_id", default=None)


def set_request_context(
    request_id: str,
    user_id: str | None = None,
    site_id: str | None = None,
) -> None:
    """
    Set context variables for the current request.

    Args:
        request_id: Unique request identifier
        user_id: Identity of the requester, None if unauthenticated
        site_id: Site the current tool placement belongs to
    """
    request_id_ctx.set(request_id)
    user_id_ctx.set(user_id)
    site_id_ctx.set(site_id)


def clear_request_context() -> None:
    """Clear context variables after request completes."""
    request_id_ctx.set(None)
    user_id_ctx.set(None)
    site_id_ctx.set(None)


class RequestSessionContext:
    """Session/context service backed by the request context variables."""

    def get_current_user_id(self) -> str | None:
        return user_id_ctx.get()

    def get_current_site_id(self) -> str | None:
        return site_id_ctx.get()
