"""
FastAPI dependencies: application context and acting user
"""

from typing import Optional

from fastapi import Header, HTTPException, Request, status

from societydesk.context import AppContext
from societydesk.models.enums import Role
from societydesk.models.schemas import Actor


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_actor(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
    x_user_name: Optional[str] = Header(default=None),
    x_user_apartment: Optional[str] = Header(default=None),
) -> Actor:
    """
    Acting user as forwarded by the identity/session provider.
    Identity is trusted as given; capabilities are checked per operation.
    """
    user_id = (x_user_id or "").strip()
    role = (x_user_role or "").strip().lower()

    if not user_id or not role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-User-Id and X-User-Role headers are required",
        )

    try:
        parsed_role = Role(role)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role '{role}'",
        )

    return Actor(
        user_id=user_id,
        role=parsed_role,
        name=(x_user_name or "").strip(),
        apartment_no=(x_user_apartment or "").strip() or None,
    )
