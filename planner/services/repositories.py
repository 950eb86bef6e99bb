"""
Repository layer: lookups and row-level seat operations shared by the services.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from planner.core.errors import NotFound
from planner.models import Event, Guest, FloorPlan, MenuItem, Table, Seat


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def get_or_404(db: Session, event_id: int) -> Event:
        event = EventRepo.get_by_id(db, event_id)
        if not event:
            raise NotFound("Event")
        return event

    @staticmethod
    def get_by_code(db: Session, event_code: str) -> Optional[Event]:
        return db.query(Event).filter(Event.event_code == event_code).first()


# -------- Menu repository --------

class MenuRepo:
    @staticmethod
    def available_by_course(db: Session, event_id: int) -> Dict[str, list]:
        """Available dishes grouped by course, in menu order"""
        menu: Dict[str, list] = {}
        items = db.query(MenuItem).filter(
            MenuItem.event_id == event_id,
            MenuItem.is_available == True
        ).order_by(MenuItem.order_index, MenuItem.id).all()
        for item in items:
            menu.setdefault(item.course, []).append({"name": item.name, "description": item.description})
        return menu


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def get_or_404(db: Session, guest_id: int) -> Guest:
        guest = db.query(Guest).filter(Guest.id == guest_id).first()
        if not guest:
            raise NotFound("Guest")
        return guest

    @staticmethod
    def find_by_name(db: Session, event_id: int, name_icontains: str) -> List[Guest]:
        return db.query(Guest).filter(
            Guest.event_id == event_id,
            func.lower(Guest.name).like(f"%{name_icontains.lower()}%")
        ).order_by(Guest.name).all()

    @staticmethod
    def get_by_token(db: Session, token: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.rsvp_token == token).first()


# -------- Floor plan repository --------

class FloorPlanRepo:
    @staticmethod
    def get_or_404(db: Session, floor_plan_id: int) -> FloorPlan:
        plan = db.query(FloorPlan).filter(FloorPlan.id == floor_plan_id).first()
        if not plan:
            raise NotFound("Floor plan")
        return plan

    @staticmethod
    def get_table_or_404(db: Session, table_id: int, for_update: bool = False) -> Table:
        query = db.query(Table).filter(Table.id == table_id)
        if for_update:
            query = query.with_for_update()
        table = query.first()
        if not table:
            raise NotFound("Table")
        return table

    @staticmethod
    def tables_for_event(db: Session, event_id: int) -> List[Table]:
        return db.query(Table).join(FloorPlan).filter(
            FloorPlan.event_id == event_id
        ).order_by(FloorPlan.order_index, Table.id).all()


# -------- Seat repository --------

class SeatRepo:
    @staticmethod
    def get_or_404(db: Session, seat_id: int, for_update: bool = False) -> Seat:
        query = db.query(Seat).filter(Seat.id == seat_id)
        if for_update:
            query = query.with_for_update()
        seat = query.first()
        if not seat:
            raise NotFound("Seat")
        return seat

    @staticmethod
    def seat_for_guest(db: Session, guest_id: int, floor_plan_id: Optional[int] = None) -> Optional[Seat]:
        query = db.query(Seat).filter(Seat.guest_id == guest_id)
        if floor_plan_id is not None:
            query = query.filter(Seat.floor_plan_id == floor_plan_id)
        return query.order_by(Seat.id).first()

    @staticmethod
    def free_seat_ids(db: Session, table_id: int) -> List[int]:
        rows = db.query(Seat.id).filter(
            Seat.table_id == table_id,
            Seat.guest_id.is_(None)
        ).order_by(Seat.seat_number, Seat.id).all()
        return [row[0] for row in rows]

    @staticmethod
    def occupied_count(db: Session, table_id: int) -> int:
        return db.query(func.count(Seat.id)).filter(
            Seat.table_id == table_id,
            Seat.guest_id.isnot(None)
        ).scalar() or 0

    @staticmethod
    def claim(db: Session, seat_id: int, guest_id: int) -> bool:
        """Put a guest in a seat only if the seat is still free.

        The write and the emptiness check are one statement, so a seat read
        as free by two requests can only be claimed by one of them.
        """
        updated = db.query(Seat).filter(
            Seat.id == seat_id,
            Seat.guest_id.is_(None)
        ).update(
            {Seat.guest_id: guest_id, Seat.updated_at: datetime.utcnow()},
            synchronize_session=False
        )
        return updated == 1

    @staticmethod
    def release_guest(db: Session, guest_id: int, floor_plan_id: Optional[int] = None) -> int:
        """Clear the seats held by a guest, on one floor plan or on all of them.

        Returns the number of seats freed.
        """
        query = db.query(Seat).filter(Seat.guest_id == guest_id)
        if floor_plan_id is not None:
            query = query.filter(Seat.floor_plan_id == floor_plan_id)
        return query.update(
            {Seat.guest_id: None, Seat.updated_at: datetime.utcnow()},
            synchronize_session=False
        )

    @staticmethod
    def release_seat(db: Session, seat_id: int) -> int:
        return db.query(Seat).filter(Seat.id == seat_id).update(
            {Seat.guest_id: None, Seat.updated_at: datetime.utcnow()},
            synchronize_session=False
        )
