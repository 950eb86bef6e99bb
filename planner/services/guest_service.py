"""
Guest directory and the three-stage invitation flow.

Stage 1 is the save-the-date list, stage 2 holds guests who said yes and
received a personal RSVP link, and stage 3 is the final database of guests
who completed their RSVP.
"""

import logging
import secrets
from typing import Dict, List, Optional
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from planner.core.errors import NotFound, ValidationFailed
from planner.models import Guest, MenuItem, RoomAllocation, Seat
from planner.schemas.guest import GuestCreate, GuestUpdate, RsvpSubmission, WebsiteRsvpRequest
from planner.services.repositories import EventRepo, GuestRepo, MenuRepo, SeatRepo
from planner.utils.rendering import render_template

logger = logging.getLogger(__name__)

def new_rsvp_token() -> str:
    return f"rsvp_{secrets.token_urlsafe(16)}"

def full_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return " ".join(part.strip() for part in (first_name, last_name) if part and part.strip())

class GuestService:
    """Service for guest records and RSVP state"""

    @staticmethod
    def list_guests(
        event_id: int,
        db: Session,
        search: Optional[str] = None,
        rsvp_status: Optional[str] = None,
        stage: Optional[int] = None,
        group_name: Optional[str] = None
    ) -> List[Guest]:
        EventRepo.get_or_404(db, event_id)
        query = db.query(Guest).filter(Guest.event_id == event_id)

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                Guest.name.ilike(pattern),
                Guest.email.ilike(pattern),
                Guest.group_name.ilike(pattern)
            ))
        if rsvp_status:
            query = query.filter(Guest.rsvp_status == rsvp_status)
        if stage:
            query = query.filter(Guest.stage == stage)
        if group_name:
            query = query.filter(Guest.group_name == group_name)

        return query.order_by(Guest.last_name, Guest.first_name, Guest.id).all()

    @staticmethod
    def validate_meal_selections(event_id: int, selections: Dict[str, str], db: Session) -> Dict[str, str]:
        """Check each course/item pair against the event's menu.

        Blank choices are dropped. Returns the cleaned selections.
        """
        cleaned = {course: item for course, item in (selections or {}).items() if item}
        if not cleaned:
            return {}

        items = db.query(MenuItem).filter(MenuItem.event_id == event_id).all()
        courses: Dict[str, set] = {}
        for item in items:
            available = courses.setdefault(item.course, set())
            if item.is_available:
                available.add(item.name)

        errors = []
        for course, choice in cleaned.items():
            if course not in courses:
                errors.append(f"Unknown course '{course}'")
            elif choice not in courses[course]:
                errors.append(f"'{choice}' is not an available option for {course}")

        if errors:
            raise ValidationFailed("Invalid meal selections", details=errors)
        return cleaned

    @staticmethod
    def create_guest(event_id: int, guest_data: GuestCreate, db: Session) -> Guest:
        EventRepo.get_or_404(db, event_id)
        data = guest_data.model_dump()

        name = (data.pop("name") or "").strip() or full_name(data["first_name"], data["last_name"])
        if not name:
            raise ValidationFailed("Guest name is required")

        data["meal_selections"] = GuestService.validate_meal_selections(event_id, data["meal_selections"], db)
        guest = Guest(event_id=event_id, name=name, stage=1, save_the_date_response="pending", **data)
        db.add(guest)
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def update_guest(guest_id: int, guest_data: GuestUpdate, db: Session) -> Guest:
        guest = GuestRepo.get_or_404(db, guest_id)
        data = guest_data.model_dump(exclude_unset=True)

        if "meal_selections" in data:
            data["meal_selections"] = GuestService.validate_meal_selections(
                guest.event_id, data["meal_selections"] or {}, db
            )
        for field, value in data.items():
            setattr(guest, field, value)

        if "name" not in data and ("first_name" in data or "last_name" in data):
            guest.name = full_name(guest.first_name, guest.last_name) or guest.name
        if not (guest.name or "").strip():
            raise ValidationFailed("Guest name is required")

        if data.get("rsvp_status") == "declined":
            GuestService.release_assignments(guest, db)

        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def delete_guest(guest_id: int, db: Session) -> None:
        guest = GuestRepo.get_or_404(db, guest_id)
        SeatRepo.release_guest(db, guest.id)
        db.delete(guest)
        db.commit()

    @staticmethod
    def release_assignments(guest: Guest, db: Session) -> None:
        """Free the seat and room held by a guest who is no longer coming"""
        seats = SeatRepo.release_guest(db, guest.id)
        rooms = db.query(RoomAllocation).filter(RoomAllocation.guest_id == guest.id).delete(
            synchronize_session=False
        )
        if seats or rooms:
            logger.info(f"Released {seats} seat(s) and {rooms} room(s) for guest {guest.id}")

    @staticmethod
    def get_stats(event_id: int, db: Session) -> Dict:
        EventRepo.get_or_404(db, event_id)
        rows = db.query(Guest.rsvp_status, func.count(Guest.id)).filter(
            Guest.event_id == event_id
        ).group_by(Guest.rsvp_status).all()
        by_status = {status: count for status, count in rows}

        seated = db.query(func.count(Seat.id)).join(Guest, Seat.guest_id == Guest.id).filter(
            Guest.event_id == event_id
        ).scalar()
        dietary = db.query(func.count(Guest.id)).filter(
            Guest.event_id == event_id,
            Guest.has_dietary_requirements == True
        ).scalar()
        stages = dict(db.query(Guest.stage, func.count(Guest.id)).filter(
            Guest.event_id == event_id
        ).group_by(Guest.stage).all())

        return {
            "total": sum(by_status.values()),
            "pending": by_status.get("pending", 0),
            "invited": by_status.get("invited", 0),
            "confirmed": by_status.get("confirmed", 0),
            "declined": by_status.get("declined", 0),
            "seated": seated,
            "with_dietary_requirements": dietary,
            "by_stage": {stage: stages.get(stage, 0) for stage in (1, 2, 3)}
        }

    @staticmethod
    def search_by_name(event_id: int, name: str, db: Session) -> List[Guest]:
        name = (name or "").strip()
        if not name:
            return []
        return GuestRepo.find_by_name(db, event_id, name)

    # -------- Save the date / RSVP --------

    @staticmethod
    def send_save_the_date(guest_id: int, db: Session) -> Guest:
        guest = GuestRepo.get_or_404(db, guest_id)
        guest.invitation_sent = True
        if guest.rsvp_status == "pending":
            guest.rsvp_status = "invited"
        db.commit()
        db.refresh(guest)
        return guest

    @staticmethod
    def update_save_the_date_response(guest_id: int, response: str, db: Session) -> Guest:
        """Record the save-the-date answer; a yes moves the guest to stage 2 with an RSVP link"""
        guest = GuestRepo.get_or_404(db, guest_id)
        guest.save_the_date_response = response

        if response == "yes":
            guest.stage = 2
            guest.rsvp_token = new_rsvp_token()
            if guest.rsvp_status in ("pending", "declined"):
                guest.rsvp_status = "invited"
        else:
            guest.stage = 1
            guest.rsvp_token = None
            guest.rsvp_status = "declined"
            GuestService.release_assignments(guest, db)

        db.commit()
        db.refresh(guest)
        logger.info(f"Guest {guest.id} save-the-date response: {response}")
        return guest

    @staticmethod
    def get_by_token(token: str, db: Session) -> Guest:
        guest = GuestRepo.get_by_token(db, token) if token else None
        if not guest:
            raise NotFound("RSVP invitation")
        return guest

    @staticmethod
    def rsvp_view(token: str, db: Session) -> Dict:
        """What a guest sees when they open their personal RSVP link"""
        guest = GuestService.get_by_token(token, db)
        event = guest.event
        return {
            "token": guest.rsvp_token,
            "id": guest.id,
            "name": guest.name,
            "stage": guest.stage,
            "rsvp_status": guest.rsvp_status,
            "meal_selections": guest.meal_selections or {},
            "dietary_restrictions": guest.dietary_restrictions,
            "couple_names": event.couple_display_name,
            "event_date": event.event_date,
            "menu": MenuRepo.available_by_course(db, event.id)
        }

    @staticmethod
    def render_rsvp_page(token: str, db: Session) -> str:
        return render_template("rsvp_invitation.html", invite=GuestService.rsvp_view(token, db))

    @staticmethod
    def submit_rsvp(token: str, submission: RsvpSubmission, db: Session) -> Guest:
        """Complete a personal RSVP: the guest is confirmed and moves to the final database"""
        guest = GuestService.get_by_token(token, db)
        guest.meal_selections = GuestService.validate_meal_selections(
            guest.event_id, submission.meal_selections, db
        )
        guest.has_dietary_requirements = submission.has_dietary_requirements
        guest.dietary_restrictions = submission.dietary_restrictions
        guest.allergy_severity = submission.allergy_severity
        guest.can_others_consume_nearby = submission.can_others_consume_nearby
        guest.dietary_details = submission.dietary_details
        guest.rsvp_status = "confirmed"
        guest.stage = 3

        db.commit()
        db.refresh(guest)
        logger.info(f"Guest {guest.id} completed RSVP")
        return guest

    @staticmethod
    def update_website_rsvp(event_id: int, request: WebsiteRsvpRequest, db: Session) -> Guest:
        """RSVP from the public website: yes confirms, no declines, maybe keeps them invited"""
        guest = GuestRepo.get_or_404(db, request.guest_id)
        if guest.event_id != event_id:
            raise NotFound("Guest")

        if request.response == "yes":
            guest.meal_selections = GuestService.validate_meal_selections(
                event_id, request.meal_selections, db
            )
            guest.rsvp_status = "confirmed"
            guest.stage = 3
        elif request.response == "no":
            guest.rsvp_status = "declined"
            GuestService.release_assignments(guest, db)
        else:
            guest.rsvp_status = "invited"

        if request.dietary_restrictions is not None:
            guest.dietary_restrictions = request.dietary_restrictions
            guest.has_dietary_requirements = bool(request.dietary_restrictions.strip())

        db.commit()
        db.refresh(guest)
        logger.info(f"Website RSVP for guest {guest.id}: {request.response}")
        return guest
