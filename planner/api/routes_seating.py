"""
Floor plan, table and seat routes
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from planner.api.deps import authorize, event_access, get_current_principal
from planner.core.db import get_db
from planner.core.errors import Conflict, NotFound
from planner.models import FloorPlan
from planner.schemas.guest import GuestResponse
from planner.schemas.seating import (
    FloorPlanCreate, FloorPlanUpdate, FloorPlanResponse, TableCreate, TableUpdate,
    TableResponse, PositionUpdate, SeatCreate, SeatAssignment, SeatResponse, TableAssignment
)
from planner.services.auth_service import Principal
from planner.services.repositories import FloorPlanRepo, GuestRepo, SeatRepo
from planner.services.seating_service import SeatingService
from planner.utils.responses import success_response

router = APIRouter()

def _plan_for(floor_plan_id: int, principal: Principal, db: Session, write: bool = False) -> FloorPlan:
    plan = FloorPlanRepo.get_or_404(db, floor_plan_id)
    authorize(principal, plan.event_id, "seating", db, write)
    return plan

def _table_event(table_id: int, principal: Principal, db: Session, write: bool = False):
    table = FloorPlanRepo.get_table_or_404(db, table_id)
    authorize(principal, table.floor_plan.event_id, "seating", db, write)
    return table

def _seat_event(seat_id: int, principal: Principal, db: Session, write: bool = False):
    seat = SeatRepo.get_or_404(db, seat_id)
    authorize(principal, seat.floor_plan.event_id, "seating", db, write)
    return seat

def _table_data(table, db: Session) -> dict:
    data = TableResponse.model_validate(table).model_dump()
    data["seats"] = [SeatResponse.model_validate(s) for s in table.seats]
    data["occupancy"] = SeatingService.table_occupancy(table, db)
    return data

# -------- Floor plans --------

@router.get("/events/{event_id}/floor-plans")
def list_floor_plans(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating"))
):
    plans = db.query(FloorPlan).filter(FloorPlan.event_id == event_id).order_by(
        FloorPlan.order_index, FloorPlan.id
    ).all()
    return success_response(
        message="Floor plans retrieved",
        data=[FloorPlanResponse.model_validate(p) for p in plans]
    )

@router.post("/events/{event_id}/floor-plans", status_code=201)
def create_floor_plan(
    event_id: int,
    plan_data: FloorPlanCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating", write=True))
):
    plan = FloorPlan(event_id=event_id, **plan_data.model_dump())
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return success_response(
        message="Floor plan created",
        data=FloorPlanResponse.model_validate(plan),
        status_code=201
    )

@router.get("/floor-plans/{floor_plan_id}")
def get_floor_plan(
    floor_plan_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Floor plan with its tables, seats and occupants"""
    _plan_for(floor_plan_id, principal, db)
    return success_response(
        message="Floor plan retrieved",
        data=SeatingService.get_floor_plan_layout(floor_plan_id, db)
    )

@router.put("/floor-plans/{floor_plan_id}")
def update_floor_plan(
    floor_plan_id: int,
    plan_data: FloorPlanUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    plan = _plan_for(floor_plan_id, principal, db, write=True)
    data = plan_data.model_dump(exclude_unset=True)
    if data.get("mode") == "ceremony" and plan.tables:
        raise Conflict("Remove the tables before switching this plan to ceremony mode")
    for field, value in data.items():
        if value is not None:
            setattr(plan, field, value)
    db.commit()
    db.refresh(plan)
    return success_response(message="Floor plan updated", data=FloorPlanResponse.model_validate(plan))

@router.delete("/floor-plans/{floor_plan_id}")
def delete_floor_plan(
    floor_plan_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    plan = _plan_for(floor_plan_id, principal, db, write=True)
    db.delete(plan)
    db.commit()
    return success_response(message="Floor plan deleted")

# -------- Tables --------

@router.post("/tables", status_code=201)
def create_table(
    table_data: TableCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _plan_for(table_data.floor_plan_id, principal, db, write=True)
    table = SeatingService.create_table(
        floor_plan_id=table_data.floor_plan_id,
        name=table_data.name,
        table_type=table_data.table_type,
        seat_count=table_data.seat_count,
        position_x=table_data.position_x,
        position_y=table_data.position_y,
        db=db
    )
    return success_response(message="Table created", data=_table_data(table, db), status_code=201)

@router.get("/tables/{table_id}")
def get_table(
    table_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    table = _table_event(table_id, principal, db)
    data = _table_data(table, db)
    data["guests"] = SeatingService.get_table_guests(table_id, db)
    return success_response(message="Table retrieved", data=data)

@router.put("/tables/{table_id}")
def rename_table(
    table_id: int,
    table_data: TableUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _table_event(table_id, principal, db, write=True)
    table = SeatingService.update_table(table_id, db, name=table_data.name)
    return success_response(message="Table updated", data=_table_data(table, db))

@router.delete("/tables/{table_id}")
def delete_table(
    table_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _table_event(table_id, principal, db, write=True)
    unseated = SeatingService.delete_table(table_id, db)
    return success_response(message="Table deleted", data={"unassigned_guest_ids": unseated})

@router.put("/tables/{table_id}/position")
def move_table(
    table_id: int,
    position: PositionUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _table_event(table_id, principal, db, write=True)
    table = SeatingService.move_table(table_id, position.position_x, position.position_y, db)
    return success_response(message="Table moved", data=_table_data(table, db))

@router.post("/tables/{table_id}/rotate")
def rotate_table(
    table_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _table_event(table_id, principal, db, write=True)
    table = SeatingService.rotate_table(table_id, db)
    return success_response(message="Table rotated", data=TableResponse.model_validate(table))

# -------- Seats --------

@router.post("/seats", status_code=201)
def create_seat(
    seat_data: SeatCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _plan_for(seat_data.floor_plan_id, principal, db, write=True)
    seat = SeatingService.create_seat(
        seat_data.floor_plan_id, seat_data.position_x, seat_data.position_y, db, table_id=seat_data.table_id
    )
    return success_response(message="Seat created", data=SeatResponse.model_validate(seat), status_code=201)

@router.delete("/seats/{seat_id}")
def delete_seat(
    seat_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _seat_event(seat_id, principal, db, write=True)
    SeatingService.delete_seat(seat_id, db)
    return success_response(message="Seat deleted")

@router.put("/seats/{seat_id}/position")
def move_seat(
    seat_id: int,
    position: PositionUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _seat_event(seat_id, principal, db, write=True)
    seat = SeatingService.update_seat_position(seat_id, position.position_x, position.position_y, db)
    return success_response(message="Seat moved", data=SeatResponse.model_validate(seat))

@router.put("/seats/{seat_id}/guest")
def assign_seat(
    seat_id: int,
    assignment: SeatAssignment,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Seat a guest in this seat, or empty it with ``guest_id: null``"""
    _seat_event(seat_id, principal, db, write=True)
    seat = SeatingService.assign_guest_to_seat(seat_id, assignment.guest_id, db)
    return success_response(message="Seat updated", data=SeatResponse.model_validate(seat))

# -------- Table planner --------

@router.post("/events/{event_id}/seating/assign")
def assign_guest_to_table(
    event_id: int,
    assignment: TableAssignment,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating", write=True))
):
    table = FloorPlanRepo.get_table_or_404(db, assignment.table_id)
    if table.floor_plan.event_id != event_id:
        raise NotFound("Table")
    seat = SeatingService.assign_guest_to_table(assignment.guest_id, assignment.table_id, db)
    return success_response(
        message="Guest assigned to table",
        data={
            "seat": SeatResponse.model_validate(seat),
            "occupancy": SeatingService.table_occupancy(seat.table, db)
        }
    )

@router.delete("/events/{event_id}/seating/guests/{guest_id}")
def unassign_guest(
    event_id: int,
    guest_id: int,
    floor_plan_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating", write=True))
):
    if GuestRepo.get_or_404(db, guest_id).event_id != event_id:
        raise NotFound("Guest")
    released = SeatingService.unassign_guest(guest_id, db, floor_plan_id)
    return success_response(message="Guest unassigned" if released else "Guest was not seated")

@router.get("/events/{event_id}/seating/summary")
def seating_summary(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating"))
):
    return success_response(message="Seating summary retrieved", data=SeatingService.get_seating_summary(event_id, db))

@router.get("/events/{event_id}/seating/unassigned")
def unassigned_guests(
    event_id: int,
    floor_plan_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating"))
):
    guests = SeatingService.get_unassigned_guests(event_id, db, floor_plan_id)
    return success_response(
        message="Unassigned guests retrieved",
        data=[GuestResponse.model_validate(g) for g in guests]
    )

@router.get("/events/{event_id}/seating/search")
def search_guests(
    event_id: int,
    q: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("seating"))
):
    return success_response(message="Guests found", data=SeatingService.search_guests(event_id, q or "", db))
