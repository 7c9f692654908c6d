"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.domain.entities import User
from app.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str | None) -> User:
    """Resolve the authenticated user for the provided token."""

    if not token:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized("Invalid credentials") from exc

    subject = payload.get("sub")
    if subject is None or not str(subject).strip():
        raise _unauthorized("Invalid credentials")

    return User(
        id=str(subject),
        name=str(payload.get("name") or ""),
        email=str(payload.get("email") or ""),
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """Return the user identified by the ``Authorization: Bearer`` header."""

    return resolve_current_user(credentials.credentials if credentials else None)


def get_stream_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token: str | None = Query(default=None, description="Access token for EventSource clients"),
) -> User:
    """Like :func:`get_current_user` but also accepts ``?token=``.

    Browser ``EventSource`` connections cannot send custom headers.
    """

    return resolve_current_user(credentials.credentials if credentials else token)
