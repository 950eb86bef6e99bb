"""
Wedding website content and its public read model
"""

import base64
import binascii
import logging
import os
import re
import secrets
from datetime import datetime
from typing import Dict, Optional
from sqlalchemy.orm import Session

from planner.core.config import settings
from planner.core.errors import Conflict, NotFound, ValidationFailed
from planner.models import (
    WeddingWebsite, RegistryLink, FaqItem, WebsiteTimelineItem, WebsitePhoto
)
from planner.schemas.website import PhotoUpload
from planner.services.repositories import EventRepo, MenuRepo
from planner.utils.rendering import render_template

logger = logging.getLogger(__name__)

CHILD_MODELS = {
    "registry": (RegistryLink, "Registry link"),
    "faq": (FaqItem, "FAQ item"),
    "timeline": (WebsiteTimelineItem, "Timeline item"),
    "photos": (WebsitePhoto, "Photo"),
}

IMAGE_EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    return slug or "wedding"

class WebsiteService:
    """Service for the couple's public wedding website"""

    @staticmethod
    def get_or_create(event_id: int, db: Session) -> WeddingWebsite:
        event = EventRepo.get_or_404(db, event_id)
        if event.website:
            return event.website

        base = slugify(event.couple_display_name)
        slug = base
        while db.query(WeddingWebsite).filter(WeddingWebsite.slug == slug).first():
            slug = f"{base}-{secrets.token_hex(2)}"

        website = WeddingWebsite(
            event_id=event.id,
            slug=slug,
            welcome_message=f"Welcome to the wedding of {event.couple_display_name}"
        )
        db.add(website)
        db.commit()
        db.refresh(website)
        logger.info(f"Created wedding website '{slug}' for event {event.id}")
        return website

    @staticmethod
    def update(event_id: int, data: Dict, db: Session) -> WeddingWebsite:
        website = WebsiteService.get_or_create(event_id, db)
        slug = data.get("slug")
        if slug and slug != website.slug:
            if db.query(WeddingWebsite).filter(WeddingWebsite.slug == slug).first():
                raise Conflict(f"The address '{slug}' is already taken")
        for field, value in data.items():
            if value is not None:
                setattr(website, field, value)
        db.commit()
        db.refresh(website)
        return website

    @staticmethod
    def add_item(event_id: int, kind: str, data: Dict, db: Session):
        """Add a registry link, FAQ entry or website timeline entry"""
        model, _ = CHILD_MODELS[kind]
        website = WebsiteService.get_or_create(event_id, db)
        item = model(website_id=website.id, **data)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    @staticmethod
    def delete_item(event_id: int, kind: str, item_id: int, db: Session) -> None:
        model, label = CHILD_MODELS[kind]
        website = WebsiteService.get_or_create(event_id, db)
        item = db.query(model).filter(model.id == item_id, model.website_id == website.id).first()
        if not item:
            raise NotFound(label)
        if kind == "photos":
            WebsiteService._remove_photo_file(item.url)
        db.delete(item)
        db.commit()

    @staticmethod
    def upload_photo(event_id: int, upload: PhotoUpload, db: Session) -> WebsitePhoto:
        """Store a base64 photo payload under the upload directory"""
        if upload.content_type not in settings.ALLOWED_IMAGE_TYPES:
            raise ValidationFailed(
                "Unsupported image type",
                details={"allowed": settings.ALLOWED_IMAGE_TYPES}
            )

        payload = upload.data.split(",", 1)[1] if upload.data.startswith("data:") else upload.data
        try:
            content = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationFailed("Photo data is not valid base64")
        if not content:
            raise ValidationFailed("Photo is empty")
        if len(content) > settings.MAX_UPLOAD_SIZE:
            raise ValidationFailed(f"Photo exceeds {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB")

        website = WebsiteService.get_or_create(event_id, db)
        upload_dir = os.path.join(settings.UPLOAD_DIR, "websites", str(website.id))
        os.makedirs(upload_dir, exist_ok=True)

        filename = f"{secrets.token_hex(8)}{IMAGE_EXTENSIONS.get(upload.content_type, '')}"
        with open(os.path.join(upload_dir, filename), "wb") as f:
            f.write(content)

        photo = WebsitePhoto(
            website_id=website.id,
            url=f"/uploads/websites/{website.id}/{filename}",
            caption=upload.caption,
            order_index=upload.order_index
        )
        db.add(photo)
        db.commit()
        db.refresh(photo)
        return photo

    @staticmethod
    def _remove_photo_file(url: str) -> None:
        if not url.startswith("/uploads/"):
            return
        path = os.path.join(settings.UPLOAD_DIR, url[len("/uploads/"):])
        if os.path.exists(path):
            os.remove(path)

    # -------- Public read model --------

    @staticmethod
    def get_published(slug: str, db: Session) -> WeddingWebsite:
        website = db.query(WeddingWebsite).filter(WeddingWebsite.slug == slug).first()
        if not website or not website.is_published:
            raise NotFound("Wedding website")
        return website

    @staticmethod
    def public_view(slug: str, db: Session, today: Optional[datetime] = None) -> Dict:
        """Everything a visitor of the public site may see"""
        website = WebsiteService.get_published(slug, db)
        event = website.event
        today = (today or datetime.utcnow()).date()

        return {
            "slug": website.slug,
            "couple_names": event.couple_display_name,
            "title": event.title,
            "event_date": event.event_date,
            "days_until": max((event.event_date.date() - today).days, 0),
            "venue": settings.VENUE_NAME,
            "welcome_message": website.welcome_message,
            "our_story": website.our_story,
            "rsvp_enabled": website.rsvp_enabled,
            "theme": website.theme,
            "registry_links": [{"name": r.name, "url": r.url} for r in website.registry_links],
            "faq_items": [{"question": f.question, "answer": f.answer} for f in website.faq_items],
            "timeline": [
                {"time": t.time, "title": t.title, "description": t.description}
                for t in website.timeline_items
            ],
            "photos": [{"url": p.url, "caption": p.caption} for p in website.photos],
            "menu": MenuRepo.available_by_course(db, event.id)
        }

    @staticmethod
    def render_public_page(slug: str, db: Session) -> str:
        return render_template("wedding_website.html", site=WebsiteService.public_view(slug, db))
