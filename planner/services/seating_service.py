"""
Seating arrangement and validation service

Seats are the single record of who sits where: a guest's table is the table
of the seat they hold, and a table's occupancy is the number of its seats
with a guest in them.
"""

import logging
from typing import List, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func, select

from planner.core.config import settings
from planner.core.errors import CapacityConflict, Conflict, NotFound, ValidationFailed
from planner.models import Guest, FloorPlan, Table, Seat
from planner.services.repositories import EventRepo, GuestRepo, FloorPlanRepo, SeatRepo
from planner.utils.layout import seat_ring, seat_radius, table_size, clamp_position

logger = logging.getLogger(__name__)

TABLE_TYPES = ("round", "rectangular")

class SeatingService:
    """Service for seating arrangement operations"""

    # -------- Tables --------

    @staticmethod
    def create_table(
        floor_plan_id: int,
        name: str,
        table_type: str,
        seat_count: int,
        position_x: int,
        position_y: int,
        db: Session
    ) -> Table:
        """Create a table and lay its seats out on a ring around it"""
        if table_type not in TABLE_TYPES:
            raise ValidationFailed(f"Table type must be one of: {', '.join(TABLE_TYPES)}")
        if not isinstance(seat_count, int) or seat_count < 1 or seat_count > settings.MAX_SEATS_PER_TABLE:
            raise ValidationFailed(
                f"Seat count must be between 1 and {settings.MAX_SEATS_PER_TABLE}",
                details={"seat_count": seat_count}
            )

        plan = FloorPlanRepo.get_or_404(db, floor_plan_id)
        if plan.mode != "reception":
            raise ValidationFailed("Tables can only be added to reception floor plans")

        width, height = table_size(table_type)
        x, y = clamp_position(position_x, position_y, width, height)

        table = Table(
            floor_plan_id=plan.id,
            name=name.strip(),
            table_type=table_type,
            seat_count=seat_count,
            position_x=x,
            position_y=y,
            rotation=0
        )
        db.add(table)
        db.flush()

        ring = seat_ring(x, y, seat_count, seat_radius(table_type))
        for number, (seat_x, seat_y) in enumerate(ring, start=1):
            db.add(Seat(
                floor_plan_id=plan.id,
                table_id=table.id,
                seat_number=number,
                position_x=seat_x,
                position_y=seat_y
            ))

        db.commit()
        db.refresh(table)
        logger.info(f"Created table {table.id} '{table.name}' with {seat_count} seats on floor plan {plan.id}")
        return table

    @staticmethod
    def update_table(table_id: int, db: Session, name: Optional[str] = None) -> Table:
        table = FloorPlanRepo.get_table_or_404(db, table_id)
        if name is not None:
            if not name.strip():
                raise ValidationFailed("Table name is required")
            table.name = name.strip()
        db.commit()
        db.refresh(table)
        return table

    @staticmethod
    def delete_table(table_id: int, db: Session) -> List[int]:
        """Delete a table with its seats; returns the ids of guests left unseated"""
        table = FloorPlanRepo.get_table_or_404(db, table_id)
        unseated = [seat.guest_id for seat in table.seats if seat.guest_id is not None]

        db.delete(table)
        db.commit()
        logger.info(f"Deleted table {table_id}; unassigned guests {unseated}")
        return unseated

    @staticmethod
    def move_table(table_id: int, position_x: int, position_y: int, db: Session) -> Table:
        """Move a table and carry its seats along by the same offset"""
        table = FloorPlanRepo.get_table_or_404(db, table_id)
        width, height = table_size(table.table_type)
        x, y = clamp_position(position_x, position_y, width, height)

        dx = x - table.position_x
        dy = y - table.position_y
        table.position_x = x
        table.position_y = y
        for seat in table.seats:
            seat.position_x += dx
            seat.position_y += dy

        db.commit()
        db.refresh(table)
        return table

    @staticmethod
    def rotate_table(table_id: int, db: Session) -> Table:
        table = FloorPlanRepo.get_table_or_404(db, table_id)
        table.rotation = ((table.rotation or 0) + settings.ROTATION_STEP) % 360
        db.commit()
        db.refresh(table)
        return table

    # -------- Guest assignment --------

    @staticmethod
    def assign_guest_to_table(guest_id: int, table_id: int, db: Session) -> Seat:
        """Seat a guest at any free seat of a table.

        The table row is locked for the transaction and the seat is claimed
        with a conditional update, so a full table rejects the guest even when
        another request filled the last seat after the free seats were read.
        """
        guest = GuestRepo.get_or_404(db, guest_id)
        table = FloorPlanRepo.get_table_or_404(db, table_id, for_update=True)
        if table.floor_plan.event_id != guest.event_id:
            raise ValidationFailed("Guest and table belong to different events")

        current = SeatRepo.seat_for_guest(db, guest.id, table.floor_plan_id)
        if current and current.table_id == table.id:
            return current

        free_ids = SeatRepo.free_seat_ids(db, table.id)
        SeatRepo.release_guest(db, guest.id, table.floor_plan_id)

        for seat_id in free_ids:
            if SeatRepo.claim(db, seat_id, guest.id):
                db.commit()
                logger.info(f"Seated guest {guest.id} at table {table.id} seat {seat_id}")
                return SeatRepo.get_or_404(db, seat_id)

        db.rollback()
        occupied = SeatRepo.occupied_count(db, table_id)
        logger.warning(f"Table {table_id} is full; guest {guest_id} not seated")
        raise CapacityConflict(
            f"Table '{table.name}' is full",
            details={"table_id": table_id, "occupied": occupied, "capacity": table.seat_count}
        )

    @staticmethod
    def unassign_guest(guest_id: int, db: Session, floor_plan_id: Optional[int] = None) -> bool:
        """Remove a guest from their seat on one floor plan, or from every plan"""
        GuestRepo.get_or_404(db, guest_id)
        released = SeatRepo.release_guest(db, guest_id, floor_plan_id)
        db.commit()
        if released:
            logger.info(f"Unassigned guest {guest_id}")
        return released > 0

    @staticmethod
    def assign_guest_to_seat(seat_id: int, guest_id: Optional[int], db: Session) -> Seat:
        """Put a guest in one specific seat, or empty it when ``guest_id`` is None.

        A guest holds one seat per floor plan: a seat they had on the same plan
        is released, while seats on other plans are kept. A seat held by
        someone else is handed over and that guest becomes unseated.
        """
        seat = SeatRepo.get_or_404(db, seat_id, for_update=True)

        if guest_id is None:
            SeatRepo.release_seat(db, seat.id)
            db.commit()
            db.refresh(seat)
            return seat

        guest = GuestRepo.get_or_404(db, guest_id)
        if seat.floor_plan.event_id != guest.event_id:
            raise ValidationFailed("Guest and seat belong to different events")
        if seat.guest_id == guest.id:
            return seat

        previous = seat.guest_id
        SeatRepo.release_guest(db, guest.id, seat.floor_plan_id)
        SeatRepo.release_seat(db, seat.id)
        if not SeatRepo.claim(db, seat.id, guest.id):
            db.rollback()
            raise Conflict("Seat was taken by another assignment")

        db.commit()
        db.refresh(seat)
        if previous is not None:
            logger.info(f"Seat {seat.id} handed from guest {previous} to guest {guest.id}")
        else:
            logger.info(f"Seated guest {guest.id} in seat {seat.id}")
        return seat

    # -------- Seats --------

    @staticmethod
    def create_seat(
        floor_plan_id: int,
        position_x: int,
        position_y: int,
        db: Session,
        table_id: Optional[int] = None
    ) -> Seat:
        """Add a standalone seat, or one more seat to an existing table"""
        plan = FloorPlanRepo.get_or_404(db, floor_plan_id)
        seat_number = None

        if table_id is not None:
            table = FloorPlanRepo.get_table_or_404(db, table_id, for_update=True)
            if table.floor_plan_id != plan.id:
                raise ValidationFailed("Table is not on this floor plan")
            if table.seat_count >= settings.MAX_SEATS_PER_TABLE:
                raise CapacityConflict(f"A table has at most {settings.MAX_SEATS_PER_TABLE} seats")
            highest = db.query(func.max(Seat.seat_number)).filter(Seat.table_id == table.id).scalar()
            seat_number = (highest or 0) + 1
            table.seat_count += 1

        x, y = clamp_position(position_x, position_y, settings.SEAT_SIZE, settings.SEAT_SIZE)
        seat = Seat(
            floor_plan_id=plan.id,
            table_id=table_id,
            seat_number=seat_number,
            position_x=x,
            position_y=y
        )
        db.add(seat)
        db.commit()
        db.refresh(seat)
        return seat

    @staticmethod
    def delete_seat(seat_id: int, db: Session) -> None:
        seat = SeatRepo.get_or_404(db, seat_id)
        if seat.table_id is not None:
            table = FloorPlanRepo.get_table_or_404(db, seat.table_id, for_update=True)
            if table.seat_count <= 1:
                raise Conflict("Cannot delete the last seat of a table; delete the table instead")
            table.seat_count -= 1

        db.delete(seat)
        db.commit()

    @staticmethod
    def update_seat_position(seat_id: int, position_x: int, position_y: int, db: Session) -> Seat:
        seat = SeatRepo.get_or_404(db, seat_id)
        seat.position_x, seat.position_y = clamp_position(
            position_x, position_y, settings.SEAT_SIZE, settings.SEAT_SIZE
        )
        db.commit()
        db.refresh(seat)
        return seat

    # -------- Reporting --------

    @staticmethod
    def table_occupancy(table: Table, db: Session) -> Dict:
        """Occupancy counters for one table"""
        occupied = SeatRepo.occupied_count(db, table.id)
        capacity = table.seat_count
        if occupied == 0:
            state = "empty"
        elif occupied >= capacity:
            state = "full"
        else:
            state = "partial"

        return {
            "table_id": table.id,
            "name": table.name,
            "occupied": occupied,
            "capacity": capacity,
            "available": max(capacity - occupied, 0),
            "occupancy_percent": round(occupied * 100 / capacity) if capacity else 0,
            "state": state
        }

    @staticmethod
    def get_table_guests(table_id: int, db: Session) -> List[Dict]:
        """Get all guests seated at a table"""
        table = FloorPlanRepo.get_table_or_404(db, table_id)
        return [
            {
                "seat_id": seat.id,
                "seat_number": seat.seat_number,
                "guest_id": seat.guest.id,
                "name": seat.guest.name,
                "dietary_restrictions": seat.guest.dietary_restrictions
            }
            for seat in table.seats
            if seat.guest is not None
        ]

    @staticmethod
    def get_floor_plan_layout(floor_plan_id: int, db: Session) -> Dict:
        """Everything the floor plan editor draws: tables, seats and who sits where"""
        plan = FloorPlanRepo.get_or_404(db, floor_plan_id)

        def seat_info(seat: Seat) -> Dict:
            return {
                "id": seat.id,
                "table_id": seat.table_id,
                "seat_number": seat.seat_number,
                "position_x": seat.position_x,
                "position_y": seat.position_y,
                "guest_id": seat.guest_id,
                "guest_name": seat.guest.name if seat.guest else None
            }

        tables = []
        for table in plan.tables:
            info = {
                "id": table.id,
                "name": table.name,
                "table_type": table.table_type,
                "seat_count": table.seat_count,
                "position_x": table.position_x,
                "position_y": table.position_y,
                "rotation": table.rotation,
                "seats": [seat_info(seat) for seat in table.seats]
            }
            info.update(SeatingService.table_occupancy(table, db))
            tables.append(info)

        return {
            "id": plan.id,
            "event_id": plan.event_id,
            "name": plan.name,
            "mode": plan.mode,
            "order_index": plan.order_index,
            "tables": tables,
            "seats": [seat_info(seat) for seat in plan.seats if seat.table_id is None]
        }

    @staticmethod
    def _seated_guest_ids(event_id: int, floor_plan_id: Optional[int] = None):
        """Guests holding a seat on one plan, or at a reception table when no plan is given"""
        query = select(Seat.guest_id).join(FloorPlan, Seat.floor_plan_id == FloorPlan.id).where(
            FloorPlan.event_id == event_id,
            Seat.guest_id.isnot(None)
        )
        if floor_plan_id is not None:
            return query.where(Seat.floor_plan_id == floor_plan_id)
        return query.where(Seat.table_id.isnot(None))

    @staticmethod
    def get_unassigned_guests(event_id: int, db: Session, floor_plan_id: Optional[int] = None) -> List[Guest]:
        """Guests of an event without a seat, declined guests excluded.

        Each floor plan is seated independently, so a guest with a ceremony
        seat is still unassigned for the reception.
        """
        EventRepo.get_or_404(db, event_id)
        if floor_plan_id is not None and FloorPlanRepo.get_or_404(db, floor_plan_id).event_id != event_id:
            raise NotFound("Floor plan")

        seated = SeatingService._seated_guest_ids(event_id, floor_plan_id)
        return db.query(Guest).filter(
            Guest.event_id == event_id,
            Guest.rsvp_status != "declined",
            Guest.id.not_in(seated)
        ).order_by(Guest.name).all()

    @staticmethod
    def search_guests(event_id: int, query: str, db: Session) -> List[Dict]:
        """Name search used by the table planner's guest picker"""
        EventRepo.get_or_404(db, event_id)
        guests = GuestRepo.find_by_name(db, event_id, query.strip()) if query and query.strip() else []
        return [
            {
                "id": guest.id,
                "name": guest.name,
                "rsvp_status": guest.rsvp_status,
                "table_id": guest.table_id,
                "table_name": guest.table_name,
                "seat_id": guest.seat_id
            }
            for guest in guests
        ]

    @staticmethod
    def get_seating_summary(event_id: int, db: Session) -> Dict:
        """Occupancy of every table in an event"""
        EventRepo.get_or_404(db, event_id)
        tables = [
            SeatingService.table_occupancy(table, db)
            for table in FloorPlanRepo.tables_for_event(db, event_id)
        ]

        total_guests = db.query(func.count(Guest.id)).filter(Guest.event_id == event_id).scalar()
        seated = SeatingService._seated_guest_ids(event_id)
        seated_guests = db.query(func.count(Guest.id)).filter(
            Guest.event_id == event_id,
            Guest.id.in_(seated)
        ).scalar()
        unassigned_guests = db.query(func.count(Guest.id)).filter(
            Guest.event_id == event_id,
            Guest.rsvp_status != "declined",
            Guest.id.not_in(seated)
        ).scalar()
        total_capacity = sum(t["capacity"] for t in tables)

        return {
            "event_id": event_id,
            "total_guests": total_guests,
            "seated_guests": seated_guests,
            "unassigned_guests": unassigned_guests,
            "total_tables": len(tables),
            "total_capacity": total_capacity,
            "available_seats": total_capacity - sum(t["occupied"] for t in tables),
            "full_tables": sum(1 for t in tables if t["state"] == "full"),
            "tables": tables
        }
