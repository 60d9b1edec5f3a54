"""
Request-scoped dependencies: the caller's session and wired repositories.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from pydantic import ValidationError as PydanticValidationError

from app.schemas.session_schema import ProfilePayload
from domain.entities import Profile, Session, Unauthenticated
from infrastructure.logging.structlog_logs import logger
from infrastructure.notifications import InMemoryToastFeed


def load_session(raw_profile: Optional[str]) -> Session:
    """
    Parse the X-User-Profile header (JSON) into a Session.

    Missing or malformed profiles become Unauthenticated; nothing
    downstream ever sees the raw payload.
    """
    if not raw_profile:
        return Unauthenticated()
    try:
        payload = ProfilePayload.model_validate_json(raw_profile)
    except PydanticValidationError as e:
        logger.warning("invalid_profile_header", step="session", errors=e.error_count())
        return Unauthenticated()
    return Profile(id=payload.id, name=payload.name, email=payload.email, role=payload.role)


async def get_session(
    x_user_profile: Optional[str] = Header(
        None,
        alias="X-User-Profile",
        description="JSON profile of the signed-in user: {id, name, email, role}",
    ),
) -> Session:
    return load_session(x_user_profile)


async def require_operator(session: Session = Depends(get_session)) -> Profile:
    """Only admins and operators may change payment schedules or settings."""
    if isinstance(session, Unauthenticated):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "unauthenticated", "message": "A valid X-User-Profile header is required"},
        )
    if not session.can_manage_payments:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "forbidden", "message": f"Role {session.role.value} cannot perform this action"},
        )
    return session


def get_toast_feed(request: Request) -> InMemoryToastFeed:
    return request.app.state.toast_feed
