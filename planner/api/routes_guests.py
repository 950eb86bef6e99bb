"""
Guest routes: directory, save-the-date and RSVP management
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from planner.api.deps import authorize, event_access, get_current_principal
from planner.core.db import get_db
from planner.core.errors import ValidationFailed
from planner.schemas.guest import GuestCreate, GuestUpdate, GuestResponse, SaveTheDateUpdate
from planner.services.auth_service import Principal
from planner.services.guest_service import GuestService
from planner.services.qr_service import QRService
from planner.services.repositories import GuestRepo
from planner.utils.responses import success_response

router = APIRouter()

def _guest_for(guest_id: int, principal: Principal, db: Session, write: bool = False):
    guest = GuestRepo.get_or_404(db, guest_id)
    authorize(principal, guest.event_id, "guests", db, write)
    return guest

@router.get("/events/{event_id}/guests")
def list_guests(
    event_id: int,
    search: Optional[str] = Query(None),
    rsvp_status: Optional[str] = Query(None),
    stage: Optional[int] = Query(None, ge=1, le=3),
    group_name: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("guests"))
):
    """Search and list guests for an event"""
    guests = GuestService.list_guests(
        event_id, db, search=search, rsvp_status=rsvp_status, stage=stage, group_name=group_name
    )
    return success_response(
        message="Guests retrieved successfully",
        data=[GuestResponse.model_validate(g) for g in guests]
    )

@router.post("/events/{event_id}/guests", status_code=201)
def create_guest(
    event_id: int,
    guest_data: GuestCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("guests", write=True))
):
    guest = GuestService.create_guest(event_id, guest_data, db)
    return success_response(
        message="Guest created successfully",
        data=GuestResponse.model_validate(guest),
        status_code=201
    )

@router.get("/events/{event_id}/guest-stats")
def guest_stats(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("guests"))
):
    return success_response(message="Guest statistics retrieved", data=GuestService.get_stats(event_id, db))

@router.get("/guests/{guest_id}")
def get_guest(
    guest_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    guest = _guest_for(guest_id, principal, db)
    return success_response(message="Guest retrieved", data=GuestResponse.model_validate(guest))

@router.put("/guests/{guest_id}")
def update_guest(
    guest_id: int,
    guest_data: GuestUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _guest_for(guest_id, principal, db, write=True)
    guest = GuestService.update_guest(guest_id, guest_data, db)
    return success_response(message="Guest updated successfully", data=GuestResponse.model_validate(guest))

@router.delete("/guests/{guest_id}")
def delete_guest(
    guest_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _guest_for(guest_id, principal, db, write=True)
    GuestService.delete_guest(guest_id, db)
    return success_response(message="Guest deleted successfully")

@router.post("/guests/{guest_id}/save-the-date")
def send_save_the_date(
    guest_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Mark a guest's save the date as sent"""
    _guest_for(guest_id, principal, db, write=True)
    guest = GuestService.send_save_the_date(guest_id, db)
    return success_response(message="Save the date sent", data=GuestResponse.model_validate(guest))

@router.put("/guests/{guest_id}/save-the-date")
def record_save_the_date_response(
    guest_id: int,
    body: SaveTheDateUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _guest_for(guest_id, principal, db, write=True)
    guest = GuestService.update_save_the_date_response(guest_id, body.response, db)
    data = GuestResponse.model_validate(guest).model_dump()
    data["rsvp_url"] = QRService.rsvp_url(guest.rsvp_token) if guest.rsvp_token else None
    return success_response(message="Save the date response recorded", data=data)

@router.get("/guests/{guest_id}/rsvp-qr.png")
def guest_rsvp_qr(
    guest_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """QR code of a guest's personal RSVP link"""
    guest = _guest_for(guest_id, principal, db)
    if not guest.rsvp_token:
        raise ValidationFailed("Guest has no RSVP link yet; record a yes to the save the date first")
    return Response(content=QRService.generate_rsvp_qr(guest.rsvp_token), media_type="image/png")
