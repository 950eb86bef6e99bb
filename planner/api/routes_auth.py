"""
Authentication routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from planner.api.deps import get_current_principal
from planner.core.db import get_db
from planner.schemas.auth import LoginRequest, TokenResponse
from planner.services.auth_service import AuthService, Principal
from planner.utils.responses import success_response

router = APIRouter()

@router.post("/login")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Exchange a username and password for a bearer token"""
    token = AuthService.login(credentials.username, credentials.password, credentials.role, db)
    return success_response(message="Login successful", data=TokenResponse(**token))

@router.get("/me")
def me(principal: Principal = Depends(get_current_principal)):
    return success_response(
        message="Current session",
        data={
            "kind": principal.kind,
            "id": principal.id,
            "name": principal.name,
            "role": principal.role,
            "event_id": principal.event_id
        }
    )

@router.post("/logout")
def logout(principal: Principal = Depends(get_current_principal)):
    # Tokens are stateless; the client discards its copy
    return success_response(message="Logged out")
