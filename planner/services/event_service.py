"""
Event lifecycle: creation with its defaults, couple credentials and statistics
"""

import logging
import secrets
from datetime import datetime
from typing import Dict, List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from planner.core.errors import Conflict, NotFound, ValidationFailed
from planner.core.security import hash_password
from planner.models import (
    Event, CoupleAccount, FloorPlan, Guest, BudgetItem, Vendor, ChecklistItem
)
from planner.schemas.event import EventCreate, EventUpdate
from planner.services.accommodation_service import AccommodationService
from planner.services.repositories import EventRepo

logger = logging.getLogger(__name__)

PERMISSION_FIELDS = (
    "guest_list_enabled",
    "seating_enabled",
    "timeline_enabled",
    "menu_enabled",
    "notes_enabled",
    "hotel_enabled",
    "website_enabled",
)

def generate_event_code(db: Session) -> str:
    event_code = secrets.token_urlsafe(8)
    # Ensure uniqueness
    while db.query(Event).filter(Event.event_code == event_code).first():
        event_code = secrets.token_urlsafe(8)
    return event_code

def generate_couple_credentials(db: Session) -> Tuple[str, str]:
    username = f"couple_{secrets.token_hex(4)}"
    while db.query(CoupleAccount).filter(CoupleAccount.username == username).first():
        username = f"couple_{secrets.token_hex(4)}"
    return username, secrets.token_urlsafe(12)

class EventService:
    """Service for event operations"""

    @staticmethod
    def create_event(event_data: EventCreate, db: Session, created_by_id: Optional[int] = None) -> Tuple[Event, Dict]:
        """Create an event with its couple login, default floor plan and rooms.

        Returns the event and the couple credentials; the plaintext password
        is only available here.
        """
        event_code = (event_data.event_code or "").strip() or generate_event_code(db)
        if EventRepo.get_by_code(db, event_code):
            raise Conflict(f"Event code '{event_code}' is already in use")

        event = Event(
            title=event_data.title.strip(),
            couple_name1=event_data.couple_name1,
            couple_name2=event_data.couple_name2,
            event_date=event_data.event_date,
            event_code=event_code,
            status=event_data.status,
            couple_can_view=True,
            created_by_id=created_by_id
        )
        db.add(event)
        db.flush()

        username, password = generate_couple_credentials(db)
        db.add(CoupleAccount(event_id=event.id, username=username, password_hash=hash_password(password)))
        db.add(FloorPlan(event_id=event.id, name="Reception", mode="reception", order_index=0))
        AccommodationService.initialize_rooms(event.id, db, commit=False)

        db.commit()
        db.refresh(event)
        logger.info(f"Created event {event.id} ({event.event_code}) with couple login {username}")
        return event, {"username": username, "password": password}

    @staticmethod
    def list_events(
        db: Session,
        search: Optional[str] = None,
        status: Optional[str] = None,
        when: Optional[str] = None
    ) -> List[Event]:
        """List events, optionally only ``upcoming`` or ``past`` ones"""
        query = db.query(Event)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                Event.title.ilike(pattern),
                Event.couple_name1.ilike(pattern),
                Event.couple_name2.ilike(pattern),
                Event.event_code.ilike(pattern)
            ))
        if status:
            query = query.filter(Event.status == status)

        now = datetime.utcnow()
        if when == "upcoming":
            return query.filter(Event.event_date >= now).order_by(Event.event_date).all()
        if when == "past":
            return query.filter(Event.event_date < now).order_by(Event.event_date.desc()).all()
        return query.order_by(Event.event_date).all()

    @staticmethod
    def update_event(event_id: int, event_data: EventUpdate, db: Session) -> Event:
        event = EventRepo.get_or_404(db, event_id)
        for field, value in event_data.model_dump(exclude_unset=True).items():
            if value is None and field in ("title", "event_date", "status", "couple_can_view"):
                raise ValidationFailed(f"{field} cannot be empty")
            setattr(event, field, value)
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def delete_event(event_id: int, db: Session) -> None:
        event = EventRepo.get_or_404(db, event_id)
        db.delete(event)
        db.commit()
        logger.info(f"Deleted event {event_id}")

    @staticmethod
    def toggle_couple_visibility(event_id: int, db: Session) -> Event:
        event = EventRepo.get_or_404(db, event_id)
        event.couple_can_view = not event.couple_can_view
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def get_stats(event_id: int, db: Session) -> Dict:
        event = EventRepo.get_or_404(db, event_id)

        total_guests = db.query(func.count(Guest.id)).filter(Guest.event_id == event_id).scalar()
        confirmed = db.query(func.count(Guest.id)).filter(
            Guest.event_id == event_id,
            Guest.rsvp_status == "confirmed"
        ).scalar()
        estimated, spent = db.query(
            func.coalesce(func.sum(BudgetItem.estimated_cost), 0),
            func.coalesce(func.sum(BudgetItem.paid_amount), 0)
        ).filter(BudgetItem.event_id == event_id).one()
        vendors_booked = db.query(func.count(Vendor.id)).filter(
            Vendor.event_id == event_id,
            Vendor.status.in_(("booked", "confirmed"))
        ).scalar()
        total_tasks = db.query(func.count(ChecklistItem.id)).filter(ChecklistItem.event_id == event_id).scalar()
        completed_tasks = db.query(func.count(ChecklistItem.id)).filter(
            ChecklistItem.event_id == event_id,
            ChecklistItem.completed == True
        ).scalar()

        return {
            "event_id": event.id,
            "days_until": max((event.event_date.date() - datetime.utcnow().date()).days, 0),
            "total_guests": total_guests,
            "confirmed_guests": confirmed,
            "budget_estimated": int(estimated),
            "budget_spent": int(spent),
            "vendors_booked": vendors_booked,
            "total_tasks": total_tasks,
            "completed_tasks": completed_tasks
        }

    # -------- Couple account --------

    @staticmethod
    def get_couple_account(event_id: int, db: Session) -> CoupleAccount:
        event = EventRepo.get_or_404(db, event_id)
        if event.couple_account is None:
            raise NotFound("Couple login")
        return event.couple_account

    @staticmethod
    def update_couple_login(
        event_id: int,
        db: Session,
        username: Optional[str] = None,
        password: Optional[str] = None
    ) -> CoupleAccount:
        """Change the couple's login, creating it when the event has none yet"""
        event = EventRepo.get_or_404(db, event_id)
        account = event.couple_account
        if account is None:
            if not password:
                raise ValidationFailed("A password is required to create the couple login")
            generated, _ = generate_couple_credentials(db)
            account = CoupleAccount(event_id=event.id, username=generated, password_hash=hash_password(password))
            db.add(account)
            db.flush()

        if username:
            username = username.strip()
            taken = db.query(CoupleAccount).filter(
                CoupleAccount.username == username,
                CoupleAccount.id != account.id
            ).first()
            if taken:
                raise Conflict(f"Username '{username}' is already in use")
            account.username = username
        if password:
            account.password_hash = hash_password(password)

        db.commit()
        db.refresh(account)
        logger.info(f"Updated couple login for event {event_id}")
        return account

    @staticmethod
    def get_permissions(event_id: int, db: Session) -> Dict[str, bool]:
        account = EventService.get_couple_account(event_id, db)
        return {field: getattr(account, field) for field in PERMISSION_FIELDS}

    @staticmethod
    def update_permissions(event_id: int, permissions: Dict[str, bool], db: Session) -> Dict[str, bool]:
        account = EventService.get_couple_account(event_id, db)
        for field, value in permissions.items():
            if field in PERMISSION_FIELDS and value is not None:
                setattr(account, field, value)
        db.commit()
        return EventService.get_permissions(event_id, db)
