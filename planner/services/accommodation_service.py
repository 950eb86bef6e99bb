"""
On-site room allocation service
"""

import logging
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from planner.core.config import settings
from planner.core.errors import CapacityConflict, Conflict, NotFound, ValidationFailed
from planner.models import AccommodationRoom, RoomAllocation
from planner.services.repositories import EventRepo, GuestRepo

logger = logging.getLogger(__name__)

DEFAULT_ROOMS = [f"Room {n}" for n in range(1, 13)] + ["Lodge", "Cottage"]
ACCESSIBLE_ROOMS = {"Room 12"}

class AccommodationService:
    """Rooms at the venue and which guests sleep in them"""

    @staticmethod
    def initialize_rooms(event_id: int, db: Session, commit: bool = True) -> List[AccommodationRoom]:
        """Create the venue's default rooms for an event; a no-op if it already has rooms"""
        existing = db.query(AccommodationRoom).filter(AccommodationRoom.event_id == event_id).count()
        if existing:
            return AccommodationService.list_rooms(event_id, db)

        for index, name in enumerate(DEFAULT_ROOMS):
            db.add(AccommodationRoom(
                event_id=event_id,
                room_name=name,
                room_number=index + 1 if name.startswith("Room ") else None,
                is_accessible=name in ACCESSIBLE_ROOMS,
                is_blocked=False,
                capacity=settings.ROOM_CAPACITY
            ))
        if commit:
            db.commit()
        else:
            db.flush()
        return AccommodationService.list_rooms(event_id, db)

    @staticmethod
    def list_rooms(event_id: int, db: Session) -> List[AccommodationRoom]:
        return db.query(AccommodationRoom).filter(
            AccommodationRoom.event_id == event_id
        ).order_by(AccommodationRoom.room_number.is_(None), AccommodationRoom.room_number, AccommodationRoom.room_name).all()

    @staticmethod
    def room_summary(room: AccommodationRoom) -> Dict:
        guests = [
            {"allocation_id": a.id, "guest_id": a.guest_id, "name": a.guest.name, "notes": a.notes}
            for a in room.allocations
        ]
        return {
            "id": room.id,
            "room_name": room.room_name,
            "room_number": room.room_number,
            "is_accessible": room.is_accessible,
            "is_blocked": room.is_blocked,
            "capacity": room.capacity,
            "notes": room.notes,
            "occupied": len(guests),
            "available": max(room.capacity - len(guests), 0),
            "guests": guests
        }

    @staticmethod
    def get_room_or_404(room_id: int, db: Session, for_update: bool = False) -> AccommodationRoom:
        query = db.query(AccommodationRoom).filter(AccommodationRoom.id == room_id)
        if for_update:
            query = query.with_for_update()
        room = query.first()
        if not room:
            raise NotFound("Room")
        return room

    @staticmethod
    def update_room(room_id: int, data: Dict, db: Session) -> AccommodationRoom:
        room = AccommodationService.get_room_or_404(room_id, db)
        if data.get("is_blocked") and room.allocations:
            raise Conflict("Cannot block a room that has guests allocated")
        for field, value in data.items():
            setattr(room, field, value)
        db.commit()
        db.refresh(room)
        return room

    @staticmethod
    def allocate_guest(room_id: int, guest_id: int, db: Session, notes: Optional[str] = None) -> RoomAllocation:
        """Put a guest in a room; rooms hold at most ``capacity`` guests"""
        room = AccommodationService.get_room_or_404(room_id, db, for_update=True)
        guest = GuestRepo.get_or_404(db, guest_id)
        if guest.event_id != room.event_id:
            raise ValidationFailed("Guest and room belong to different events")
        if room.is_blocked:
            raise Conflict(f"{room.room_name} is blocked")

        existing = db.query(RoomAllocation).filter(RoomAllocation.guest_id == guest.id).first()
        if existing:
            raise Conflict(f"{guest.name} already has a room", details={"room_id": existing.room_id})

        occupied = db.query(func.count(RoomAllocation.id)).filter(RoomAllocation.room_id == room.id).scalar()
        if occupied >= room.capacity:
            logger.warning(f"Room {room.id} is full; guest {guest.id} not allocated")
            raise CapacityConflict(
                f"{room.room_name} is full",
                details={"room_id": room.id, "occupied": occupied, "capacity": room.capacity}
            )

        allocation = RoomAllocation(room_id=room.id, guest_id=guest.id, event_id=room.event_id, notes=notes)
        db.add(allocation)
        db.commit()
        db.refresh(allocation)
        logger.info(f"Allocated guest {guest.id} to room {room.id}")
        return allocation

    @staticmethod
    def list_allocations(event_id: int, db: Session) -> List[RoomAllocation]:
        EventRepo.get_or_404(db, event_id)
        return db.query(RoomAllocation).filter(RoomAllocation.event_id == event_id).order_by(RoomAllocation.id).all()

    @staticmethod
    def remove_allocation(allocation_id: int, db: Session) -> None:
        allocation = db.query(RoomAllocation).filter(RoomAllocation.id == allocation_id).first()
        if not allocation:
            raise NotFound("Room allocation")
        db.delete(allocation)
        db.commit()
