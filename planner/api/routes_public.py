"""
Public routes - no authentication required
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response, HTMLResponse
from sqlalchemy.orm import Session

from planner.core.db import get_db
from planner.core.errors import Forbidden
from planner.schemas.guest import GuestLookupRequest, RsvpSubmission, WebsiteRsvpRequest
from planner.services.guest_service import GuestService
from planner.services.qr_service import QRService
from planner.services.website_service import WebsiteService
from planner.utils.responses import success_response
from planner.utils.security import enforce_rate_limit

router = APIRouter()

def _rsvp_guest(guest) -> dict:
    return {
        "id": guest.id,
        "name": guest.name,
        "rsvp_status": guest.rsvp_status,
        "meal_selections": guest.meal_selections or {},
        "dietary_restrictions": guest.dietary_restrictions
    }

@router.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

# -------- Wedding website --------

@router.get("/w/{slug}", response_class=HTMLResponse)
def wedding_website_page(slug: str, db: Session = Depends(get_db)):
    return HTMLResponse(content=WebsiteService.render_public_page(slug, db))

@router.get("/public/websites/{slug}", dependencies=[Depends(enforce_rate_limit)])
def get_wedding_website(slug: str, db: Session = Depends(get_db)):
    return success_response(message="Wedding website retrieved", data=WebsiteService.public_view(slug, db))

@router.get("/public/websites/{slug}/qr.png")
def get_website_qr(slug: str, db: Session = Depends(get_db)):
    """QR code that points at the published site"""
    WebsiteService.get_published(slug, db)
    return Response(
        content=QRService.generate_website_qr(slug),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_{slug}.png"}
    )

@router.post("/public/websites/{slug}/guests/search", dependencies=[Depends(enforce_rate_limit)])
def find_invitation(slug: str, lookup: GuestLookupRequest, db: Session = Depends(get_db)):
    """Guests look themselves up by name before answering the RSVP"""
    website = WebsiteService.get_published(slug, db)
    if not website.rsvp_enabled:
        raise Forbidden("Online RSVP is closed")

    guests = GuestService.search_by_name(website.event_id, lookup.name, db)
    return success_response(
        message=f"Found {len(guests)} matching guest(s)",
        data=[_rsvp_guest(g) for g in guests]
    )

@router.post("/public/websites/{slug}/rsvp", dependencies=[Depends(enforce_rate_limit)])
def website_rsvp(slug: str, request: WebsiteRsvpRequest, db: Session = Depends(get_db)):
    website = WebsiteService.get_published(slug, db)
    if not website.rsvp_enabled:
        raise Forbidden("Online RSVP is closed")

    guest = GuestService.update_website_rsvp(website.event_id, request, db)
    return success_response(message="Thank you for your RSVP", data=_rsvp_guest(guest))

# -------- Personal RSVP links --------

@router.get("/rsvp/{token}", response_class=HTMLResponse, dependencies=[Depends(enforce_rate_limit)])
def rsvp_invitation_page(token: str, db: Session = Depends(get_db)):
    return HTMLResponse(content=GuestService.render_rsvp_page(token, db))

@router.get("/public/rsvp/{token}", dependencies=[Depends(enforce_rate_limit)])
def get_rsvp_invitation(token: str, db: Session = Depends(get_db)):
    return success_response(message="RSVP invitation retrieved", data=GuestService.rsvp_view(token, db))

@router.post("/public/rsvp/{token}", dependencies=[Depends(enforce_rate_limit)])
def submit_rsvp(token: str, submission: RsvpSubmission, db: Session = Depends(get_db)):
    guest = GuestService.submit_rsvp(token, submission, db)
    return success_response(message="Thank you for your RSVP", data=_rsvp_guest(guest))
