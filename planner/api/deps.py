"""
Request dependencies: the current principal and per-event access checks
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from planner.core.db import get_db
from planner.core.errors import Forbidden, Unauthorized
from planner.core.security import decode_access_token
from planner.services.auth_service import AuthService, Principal
from planner.services.repositories import EventRepo

security = HTTPBearer(auto_error=False)

# Portal sections and the couple permission flag that opens each one.
# ``None`` means always open to the couple; sections missing here are staff only.
SECTION_FLAGS = {
    "overview": None,
    "messages": None,
    "checklist": None,
    "guests": "guest_list_enabled",
    "seating": "seating_enabled",
    "timeline": "timeline_enabled",
    "menu": "menu_enabled",
    "notes": "notes_enabled",
    "hotel": "hotel_enabled",
    "website": "website_enabled",
}

# Sections a couple may change as well as view
COUPLE_WRITABLE = {"guests", "seating", "notes", "messages", "website"}

def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Principal:
    if credentials is None:
        raise Unauthorized("Missing bearer token")
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise Unauthorized("Invalid or expired token")
    return AuthService.resolve_principal(payload, db)

def require_employee(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_employee:
        raise Forbidden("Staff access required")
    return principal

def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Administrator access required")
    return principal

def authorize(principal: Principal, event_id: int, section: str, db: Session, write: bool = False) -> None:
    """Check that a principal may view (or change) one section of an event"""
    if principal.is_employee:
        return

    if principal.event_id != event_id:
        raise Forbidden("You do not have access to this event")
    if section not in SECTION_FLAGS:
        raise Forbidden("Staff access required")
    if write and section not in COUPLE_WRITABLE:
        raise Forbidden("This section is read-only")

    event = EventRepo.get_or_404(db, event_id)
    if not event.couple_can_view:
        raise Forbidden("The couple portal is not available for this event")
    flag = SECTION_FLAGS[section]
    if flag and event.couple_account is not None and not getattr(event.couple_account, flag):
        raise Forbidden(f"The {section} section is not enabled for this event")

def event_access(section: str, write: bool = False):
    """Use: Depends(event_access("guests", write=True)) on routes with an ``event_id`` path parameter"""
    def _checker(
        event_id: int,
        principal: Principal = Depends(get_current_principal),
        db: Session = Depends(get_db)
    ) -> Principal:
        authorize(principal, event_id, section, db, write)
        return principal

    return _checker
