"""Request-scoped values the routes need besides the body."""

from fastapi import Header, HTTPException, Request


def acting_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Id of the signed-in site owner.

    Authentication happens upstream; the gateway forwards the verified user id
    in ``X-User-Id``.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None
