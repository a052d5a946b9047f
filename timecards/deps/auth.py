from fastapi import Request

from timecards.core.authorization import Principal
from timecards.core.errors import AuthenticationError
from timecards.services.auth_service import verify_token


def _parse_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization")
    if auth_header:
        parts = auth_header.split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            raise AuthenticationError("Token is not valid", detail="Invalid Authorization header")
        return parts[1].strip()

    # Older clients send the raw token in x-auth-token.
    legacy = request.headers.get("x-auth-token")
    if legacy and legacy.strip():
        return legacy.strip()

    raise AuthenticationError()


def require_auth(request: Request) -> Principal:
    token = _parse_token(request)

    try:
        claims = verify_token(token)
    except ValueError as exc:
        raise AuthenticationError("Token is not valid", detail=str(exc)) from exc

    principal = Principal(
        id=str(claims["sub"]),
        is_manager=claims.get("is_manager") is True,
    )

    request.state.user_id = principal.id
    request.state.is_manager = principal.is_manager

    return principal
