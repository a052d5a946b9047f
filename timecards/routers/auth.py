from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from timecards.core.config import get_settings
from timecards.database import get_db
from timecards.models.user import User
from timecards.services.auth_service import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


class TokenRequest(BaseModel):
    user_id: str
    is_manager: bool = False
    name: Optional[str] = None
    email: Optional[str] = None


@router.post("/token")
def issue_token(payload: TokenRequest, db: Session = Depends(get_db)):
    """Dev-only: register the caller in the user directory and hand back a bearer token."""
    if not get_settings().dev_routes_enabled:
        raise HTTPException(status_code=404, detail="Not Found")

    try:
        token = create_access_token(user_id=str(payload.user_id), is_manager=payload.is_manager)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    user = db.get(User, str(payload.user_id))
    if user is None:
        user = User(id=str(payload.user_id), name=payload.name or str(payload.user_id))
        db.add(user)
    elif payload.name:
        user.name = payload.name
    if payload.email is not None:
        user.email = payload.email
    db.commit()

    return {
        "access_token": token,
        "token_type": "bearer",
    }
