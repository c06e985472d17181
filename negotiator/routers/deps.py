"""FastAPI dependencies: the process context and the authenticated owner."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from negotiator.context import AppContext
from negotiator.errors import AuthenticationError


def get_context(request: Request) -> AppContext:
    return request.app.state.context


async def get_owner_id(
    authorization: Optional[str] = Header(default=None),
    ctx: AppContext = Depends(get_context),
) -> str:
    """Resolve ``Authorization: Bearer <token>`` to a user id."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("No authorization token provided")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("No authorization token provided")

    user_id = await ctx.auth.resolve_user(token)
    ctx.auth_events.notify("signed_in", user_id)
    return user_id
