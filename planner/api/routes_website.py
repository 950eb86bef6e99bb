"""
Wedding website management routes
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from planner.api.deps import event_access
from planner.core.db import get_db
from planner.core.errors import NotFound
from planner.schemas.website import (
    WebsiteUpdate, RegistryLinkCreate, FaqItemCreate, WebsiteTimelineItemCreate, PhotoUpload
)
from planner.services.auth_service import Principal
from planner.services.qr_service import QRService
from planner.services.website_service import WebsiteService
from planner.utils.responses import success_response

router = APIRouter()

def _website_data(website) -> dict:
    return {
        "id": website.id,
        "event_id": website.event_id,
        "slug": website.slug,
        "url": QRService.website_url(website.slug),
        "is_published": website.is_published,
        "welcome_message": website.welcome_message,
        "our_story": website.our_story,
        "rsvp_enabled": website.rsvp_enabled,
        "theme": website.theme,
        "registry_links": [{"id": r.id, "name": r.name, "url": r.url, "order_index": r.order_index} for r in website.registry_links],
        "faq_items": [{"id": f.id, "question": f.question, "answer": f.answer, "order_index": f.order_index} for f in website.faq_items],
        "timeline_items": [
            {"id": t.id, "time": t.time, "title": t.title, "description": t.description, "order_index": t.order_index}
            for t in website.timeline_items
        ],
        "photos": [{"id": p.id, "url": p.url, "caption": p.caption, "order_index": p.order_index} for p in website.photos]
    }

@router.get("/events/{event_id}/website")
def get_website(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website"))
):
    """The event's website, created on first access"""
    website = WebsiteService.get_or_create(event_id, db)
    return success_response(message="Website retrieved", data=_website_data(website))

@router.put("/events/{event_id}/website")
def update_website(
    event_id: int,
    body: WebsiteUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website", write=True))
):
    website = WebsiteService.update(event_id, body.model_dump(exclude_unset=True), db)
    return success_response(message="Website updated", data=_website_data(website))

@router.post("/events/{event_id}/website/registry", status_code=201)
def add_registry_link(
    event_id: int,
    body: RegistryLinkCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website", write=True))
):
    item = WebsiteService.add_item(event_id, "registry", body.model_dump(), db)
    return success_response(message="Registry link added", data={"id": item.id}, status_code=201)

@router.post("/events/{event_id}/website/faq", status_code=201)
def add_faq_item(
    event_id: int,
    body: FaqItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website", write=True))
):
    item = WebsiteService.add_item(event_id, "faq", body.model_dump(), db)
    return success_response(message="FAQ item added", data={"id": item.id}, status_code=201)

@router.post("/events/{event_id}/website/timeline", status_code=201)
def add_timeline_item(
    event_id: int,
    body: WebsiteTimelineItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website", write=True))
):
    item = WebsiteService.add_item(event_id, "timeline", body.model_dump(), db)
    return success_response(message="Timeline item added", data={"id": item.id}, status_code=201)

@router.post("/events/{event_id}/website/photos", status_code=201)
def upload_photo(
    event_id: int,
    body: PhotoUpload,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website", write=True))
):
    photo = WebsiteService.upload_photo(event_id, body, db)
    return success_response(
        message="Photo uploaded",
        data={"id": photo.id, "url": photo.url, "caption": photo.caption},
        status_code=201
    )

@router.delete("/events/{event_id}/website/{kind}/{item_id}")
def delete_website_item(
    event_id: int,
    kind: str,
    item_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website", write=True))
):
    if kind not in ("registry", "faq", "timeline", "photos"):
        raise NotFound("Website section")
    WebsiteService.delete_item(event_id, kind, item_id, db)
    return success_response(message="Item deleted")

@router.get("/events/{event_id}/website/qr.png")
def website_qr(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("website"))
):
    website = WebsiteService.get_or_create(event_id, db)
    return Response(content=QRService.generate_website_qr(website.slug), media_type="image/png")
