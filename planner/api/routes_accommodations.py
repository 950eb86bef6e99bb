"""
Partner hotel, venue room and room allocation routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from planner.api.deps import event_access, require_employee
from planner.core.db import get_db
from planner.models import Accommodation
from planner.schemas.accommodation import (
    AccommodationCreate, AccommodationUpdate, AccommodationResponse, RoomUpdate, RoomAllocationCreate
)
from planner.services.accommodation_service import AccommodationService
from planner.services.auth_service import Principal
from planner.services.crud import CRUDBase
from planner.services.repositories import EventRepo
from planner.utils.responses import success_response

router = APIRouter()

hotel_crud = CRUDBase[Accommodation, AccommodationCreate, AccommodationUpdate](
    Accommodation, "Accommodation", order_by=[Accommodation.hotel_name]
)

# -------- Partner hotels --------

@router.get("/events/{event_id}/accommodations")
def list_accommodations(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("hotel"))
):
    EventRepo.get_or_404(db, event_id)
    hotels = hotel_crud.list_for_event(db, event_id)
    return success_response(
        message="Accommodations retrieved",
        data=[AccommodationResponse.model_validate(h) for h in hotels]
    )

@router.post("/events/{event_id}/accommodations", status_code=201)
def create_accommodation(
    event_id: int,
    hotel: AccommodationCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    obj = hotel_crud.create(db, hotel, extra={"event_id": event_id})
    return success_response(message="Accommodation created", data=AccommodationResponse.model_validate(obj), status_code=201)

@router.put("/accommodations/{accommodation_id}")
def update_accommodation(
    accommodation_id: int,
    hotel: AccommodationUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = hotel_crud.update(db, hotel_crud.get_or_404(db, accommodation_id), hotel)
    return success_response(message="Accommodation updated", data=AccommodationResponse.model_validate(obj))

@router.delete("/accommodations/{accommodation_id}")
def delete_accommodation(
    accommodation_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    hotel_crud.remove(db, accommodation_id)
    return success_response(message="Accommodation deleted")

# -------- Venue rooms --------

@router.post("/events/{event_id}/rooms/initialize")
def initialize_rooms(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    rooms = AccommodationService.initialize_rooms(event_id, db)
    return success_response(
        message="Rooms initialized",
        data=[AccommodationService.room_summary(r) for r in rooms]
    )

@router.get("/events/{event_id}/rooms")
def list_rooms(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("hotel"))
):
    """Rooms with who is staying in each"""
    EventRepo.get_or_404(db, event_id)
    rooms = AccommodationService.list_rooms(event_id, db)
    return success_response(
        message="Rooms retrieved",
        data=[AccommodationService.room_summary(r) for r in rooms]
    )

@router.put("/rooms/{room_id}")
def update_room(
    room_id: int,
    room: RoomUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = AccommodationService.update_room(room_id, room.model_dump(exclude_unset=True), db)
    return success_response(message="Room updated", data=AccommodationService.room_summary(obj))

@router.get("/events/{event_id}/room-allocations")
def list_allocations(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("hotel"))
):
    allocations = AccommodationService.list_allocations(event_id, db)
    return success_response(
        message="Room allocations retrieved",
        data=[
            {"id": a.id, "room_id": a.room_id, "guest_id": a.guest_id, "guest_name": a.guest.name, "notes": a.notes}
            for a in allocations
        ]
    )

@router.post("/room-allocations", status_code=201)
def allocate_room(
    allocation: RoomAllocationCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = AccommodationService.allocate_guest(allocation.room_id, allocation.guest_id, db, notes=allocation.notes)
    return success_response(
        message="Guest allocated to room",
        data=AccommodationService.room_summary(obj.room),
        status_code=201
    )

@router.delete("/room-allocations/{allocation_id}")
def remove_allocation(
    allocation_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    AccommodationService.remove_allocation(allocation_id, db)
    return success_response(message="Room allocation removed")
