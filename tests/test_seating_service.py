"""
Tests for seating service functionality
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from planner.core.db import Base
from planner.core.errors import CapacityConflict, Conflict, ValidationFailed
from planner.models import Event, Guest, FloorPlan, Seat
from planner.services.repositories import SeatRepo
from planner.services.seating_service import SeatingService
from planner.utils.layout import seat_ring, clamp_position

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_seating.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

def make_event(db, code="WED1", guests=4):
    event = Event(
        title="Test Wedding",
        couple_name1="Anna",
        couple_name2="Ben",
        event_date=datetime(2030, 6, 15),
        event_code=code
    )
    db.add(event)
    db.flush()
    plan = FloorPlan(event_id=event.id, name="Reception", mode="reception")
    db.add(plan)
    for i in range(1, guests + 1):
        db.add(Guest(event_id=event.id, first_name=f"Guest{i}", last_name=code, name=f"Guest{i} {code}"))
    db.commit()
    db.refresh(event)
    return event, plan

@pytest.fixture
def wedding(db_session):
    """An event with one reception plan and four guests"""
    event, plan = make_event(db_session)
    guests = db_session.query(Guest).filter(Guest.event_id == event.id).order_by(Guest.id).all()
    return event, plan, guests

def test_create_table_lays_out_seat_ring(db_session, wedding):
    event, plan, _ = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)

    assert table.seat_count == 4
    assert [s.seat_number for s in table.seats] == [1, 2, 3, 4]
    positions = [(s.position_x, s.position_y) for s in table.seats]
    assert positions == [(600, 230), (670, 300), (600, 370), (530, 300)]

def test_rectangular_table_uses_smaller_radius():
    assert seat_ring(600, 300, 2, 60) == [(600, 240), (600, 360)]

def test_table_position_is_clamped_to_canvas(db_session, wedding):
    _, plan, _ = wedding
    table = SeatingService.create_table(plan.id, "Corner", "round", 2, 0, 1000, db_session)
    assert (table.position_x, table.position_y) == (80, 520)
    assert clamp_position(5000, -10, 160, 80) == (1088, 72)

def test_seat_count_bounds(db_session, wedding):
    _, plan, _ = wedding
    with pytest.raises(ValidationFailed):
        SeatingService.create_table(plan.id, "Empty", "round", 0, 600, 300, db_session)
    with pytest.raises(ValidationFailed):
        SeatingService.create_table(plan.id, "Huge", "round", 21, 600, 300, db_session)
    with pytest.raises(ValidationFailed):
        SeatingService.create_table(plan.id, "Odd", "oval", 4, 600, 300, db_session)

def test_ceremony_plan_rejects_tables(db_session, wedding):
    event, _, _ = wedding
    ceremony = FloorPlan(event_id=event.id, name="Ceremony", mode="ceremony")
    db_session.add(ceremony)
    db_session.commit()

    with pytest.raises(ValidationFailed):
        SeatingService.create_table(ceremony.id, "Table 1", "round", 4, 600, 300, db_session)

def test_move_table_carries_seats(db_session, wedding):
    _, plan, _ = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    table = SeatingService.move_table(table.id, 700, 250, db_session)

    assert (table.position_x, table.position_y) == (700, 250)
    assert (table.seats[0].position_x, table.seats[0].position_y) == (700, 180)
    assert (table.seats[1].position_x, table.seats[1].position_y) == (770, 250)

def test_rotate_table_wraps_around(db_session, wedding):
    _, plan, _ = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "rectangular", 6, 600, 300, db_session)

    table = SeatingService.rotate_table(table.id, db_session)
    assert table.rotation == 15
    for _ in range(23):
        table = SeatingService.rotate_table(table.id, db_session)
    assert table.rotation == 0

def test_assign_guest_fills_table(db_session, wedding):
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 2, 600, 300, db_session)

    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    SeatingService.assign_guest_to_table(guests[1].id, table.id, db_session)

    occupancy = SeatingService.table_occupancy(table, db_session)
    assert occupancy["occupied"] == 2
    assert occupancy["state"] == "full"
    assert guests[0].table_id == table.id
    assert guests[1].table_name == "Table 1"

def test_full_table_rejects_guest(db_session, wedding):
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 2, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    SeatingService.assign_guest_to_table(guests[1].id, table.id, db_session)

    with pytest.raises(CapacityConflict) as exc_info:
        SeatingService.assign_guest_to_table(guests[2].id, table.id, db_session)

    assert exc_info.value.error_code == "CAPACITY_EXCEEDED"
    assert exc_info.value.status_code == 409
    assert exc_info.value.details["capacity"] == 2
    assert SeatRepo.occupied_count(db_session, table.id) == 2
    assert SeatRepo.seat_for_guest(db_session, guests[2].id) is None

def test_failed_move_keeps_original_seat(db_session, wedding):
    _, plan, guests = wedding
    home = SeatingService.create_table(plan.id, "Home", "round", 4, 300, 300, db_session)
    full = SeatingService.create_table(plan.id, "Full", "round", 1, 900, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, home.id, db_session)
    SeatingService.assign_guest_to_table(guests[1].id, full.id, db_session)

    with pytest.raises(CapacityConflict):
        SeatingService.assign_guest_to_table(guests[0].id, full.id, db_session)

    seat = SeatRepo.seat_for_guest(db_session, guests[0].id)
    assert seat is not None
    assert seat.table_id == home.id

def test_reassign_moves_guest_between_tables(db_session, wedding):
    _, plan, guests = wedding
    first = SeatingService.create_table(plan.id, "First", "round", 4, 300, 300, db_session)
    second = SeatingService.create_table(plan.id, "Second", "round", 4, 900, 300, db_session)

    SeatingService.assign_guest_to_table(guests[0].id, first.id, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, second.id, db_session)

    assert SeatRepo.occupied_count(db_session, first.id) == 0
    assert SeatRepo.occupied_count(db_session, second.id) == 1
    assert db_session.query(Seat).filter(Seat.guest_id == guests[0].id).count() == 1

def test_assign_to_same_table_is_a_no_op(db_session, wedding):
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    seat = SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    again = SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    assert again.id == seat.id

def test_stale_free_seat_list_cannot_overfill(db_session, wedding, monkeypatch):
    """A seat read as free but taken meanwhile is not handed out twice"""
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 1, 600, 300, db_session)
    seat_id = table.seats[0].id
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)

    monkeypatch.setattr(SeatRepo, "free_seat_ids", staticmethod(lambda db, table_id: [seat_id]))

    with pytest.raises(CapacityConflict):
        SeatingService.assign_guest_to_table(guests[1].id, table.id, db_session)
    assert SeatRepo.get_or_404(db_session, seat_id).guest_id == guests[0].id

def test_claim_only_succeeds_once_across_sessions(db_session, wedding):
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 1, 600, 300, db_session)
    seat_id = table.seats[0].id

    other = TestingSessionLocal()
    try:
        assert SeatRepo.free_seat_ids(db_session, table.id) == [seat_id]
        assert SeatRepo.claim(other, seat_id, guests[1].id)
        other.commit()
        assert not SeatRepo.claim(db_session, seat_id, guests[0].id)
        db_session.rollback()
    finally:
        other.close()

    assert SeatRepo.get_or_404(db_session, seat_id).guest_id == guests[1].id

def test_seat_handover_unseats_previous_guest(db_session, wedding):
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 2, 600, 300, db_session)
    seat_id = table.seats[0].id

    SeatingService.assign_guest_to_seat(seat_id, guests[0].id, db_session)
    seat = SeatingService.assign_guest_to_seat(seat_id, guests[1].id, db_session)

    assert seat.guest_id == guests[1].id
    assert SeatRepo.seat_for_guest(db_session, guests[0].id) is None

    seat = SeatingService.assign_guest_to_seat(seat_id, None, db_session)
    assert seat.guest_id is None

def test_cross_event_assignment_rejected(db_session, wedding):
    _, plan, _ = wedding
    other_event, _ = make_event(db_session, code="WED2", guests=1)
    stranger = other_event.guests[0]
    table = SeatingService.create_table(plan.id, "Table 1", "round", 2, 600, 300, db_session)

    with pytest.raises(ValidationFailed):
        SeatingService.assign_guest_to_table(stranger.id, table.id, db_session)
    with pytest.raises(ValidationFailed):
        SeatingService.assign_guest_to_seat(table.seats[0].id, stranger.id, db_session)

def test_delete_table_unseats_guests(db_session, wedding):
    event, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    SeatingService.assign_guest_to_table(guests[1].id, table.id, db_session)

    unseated = SeatingService.delete_table(table.id, db_session)

    assert sorted(unseated) == sorted([guests[0].id, guests[1].id])
    assert db_session.query(Seat).count() == 0
    assert len(SeatingService.get_unassigned_guests(event.id, db_session)) == 4

def test_table_seat_add_and_delete(db_session, wedding):
    _, plan, _ = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 1, 600, 300, db_session)

    extra = SeatingService.create_seat(plan.id, 650, 300, db_session, table_id=table.id)
    db_session.refresh(table)
    assert extra.seat_number == 2
    assert table.seat_count == 2

    SeatingService.delete_seat(extra.id, db_session)
    db_session.refresh(table)
    assert table.seat_count == 1

    with pytest.raises(Conflict):
        SeatingService.delete_seat(table.seats[0].id, db_session)

def test_standalone_seat_is_clamped(db_session, wedding):
    _, plan, _ = wedding
    seat = SeatingService.create_seat(plan.id, -50, 9999, db_session)
    assert seat.table_id is None
    assert (seat.position_x, seat.position_y) == (48, 552)

def test_unassigned_guests_skip_declined(db_session, wedding):
    event, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    guests[1].rsvp_status = "declined"
    db_session.commit()

    unassigned = SeatingService.get_unassigned_guests(event.id, db_session)
    assert [g.id for g in unassigned] == [guests[2].id, guests[3].id]

def test_seating_summary(db_session, wedding):
    event, plan, guests = wedding
    a = SeatingService.create_table(plan.id, "A", "round", 2, 300, 300, db_session)
    b = SeatingService.create_table(plan.id, "B", "rectangular", 6, 900, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, a.id, db_session)
    SeatingService.assign_guest_to_table(guests[1].id, a.id, db_session)
    SeatingService.assign_guest_to_table(guests[2].id, b.id, db_session)

    summary = SeatingService.get_seating_summary(event.id, db_session)

    assert summary["total_guests"] == 4
    assert summary["seated_guests"] == 3
    assert summary["unassigned_guests"] == 1
    assert summary["total_tables"] == 2
    assert summary["total_capacity"] == 8
    assert summary["available_seats"] == 5
    assert summary["full_tables"] == 1

    tables = {t["name"]: t for t in summary["tables"]}
    assert tables["A"]["state"] == "full"
    assert tables["B"]["occupancy_percent"] == 17

def test_search_guests_reports_table(db_session, wedding):
    event, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Top Table", "rectangular", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)

    results = SeatingService.search_guests(event.id, "guest1", db_session)
    assert len(results) == 1
    assert results[0]["table_name"] == "Top Table"
    assert SeatingService.search_guests(event.id, "  ", db_session) == []

def test_eight_seat_round_table_geometry(db_session, wedding):
    _, plan, _ = wedding
    table = SeatingService.create_table(plan.id, "Eight", "round", 8, 600, 300, db_session)
    positions = [(s.position_x, s.position_y) for s in table.seats]
    assert positions == [
        (600, 230), (649, 251), (670, 300), (649, 349),
        (600, 370), (551, 349), (530, 300), (551, 251),
    ]

def test_moving_guest_between_seats_keeps_one_seat(db_session, wedding):
    _, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    seat_a, seat_b = table.seats[0].id, table.seats[1].id

    SeatingService.assign_guest_to_seat(seat_a, guests[0].id, db_session)
    SeatingService.assign_guest_to_seat(seat_b, guests[0].id, db_session)

    assert SeatRepo.get_or_404(db_session, seat_a).guest_id is None
    assert SeatRepo.seat_for_guest(db_session, guests[0].id).id == seat_b

def add_ceremony_plan(db, event):
    plan = FloorPlan(event_id=event.id, name="Ceremony", mode="ceremony", order_index=1)
    db.add(plan)
    db.commit()
    db.refresh(plan)
    return plan

def test_ceremony_seat_keeps_reception_table_seat(db_session, wedding):
    event, plan, guests = wedding
    ceremony = add_ceremony_plan(db_session, event)
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    aisle = SeatingService.create_seat(ceremony.id, 200, 200, db_session)

    reception_seat = SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    SeatingService.assign_guest_to_seat(aisle.id, guests[0].id, db_session)

    assert SeatRepo.occupied_count(db_session, table.id) == 1
    assert SeatRepo.seat_for_guest(db_session, guests[0].id, plan.id).id == reception_seat.id
    assert SeatRepo.seat_for_guest(db_session, guests[0].id, ceremony.id).id == aisle.id

    db_session.refresh(guests[0])
    assert guests[0].table_id == table.id
    assert guests[0].table_name == "Table 1"

def test_moving_within_ceremony_plan_stays_exclusive(db_session, wedding):
    event, plan, guests = wedding
    ceremony = add_ceremony_plan(db_session, event)
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    front = SeatingService.create_seat(ceremony.id, 200, 200, db_session)
    back = SeatingService.create_seat(ceremony.id, 200, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)

    SeatingService.assign_guest_to_seat(front.id, guests[0].id, db_session)
    SeatingService.assign_guest_to_seat(back.id, guests[0].id, db_session)

    assert SeatRepo.get_or_404(db_session, front.id).guest_id is None
    assert SeatRepo.get_or_404(db_session, back.id).guest_id == guests[0].id
    assert SeatRepo.occupied_count(db_session, table.id) == 1

def test_unassigned_guests_per_floor_plan(db_session, wedding):
    event, plan, guests = wedding
    ceremony = add_ceremony_plan(db_session, event)
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    aisle = SeatingService.create_seat(ceremony.id, 200, 200, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    SeatingService.assign_guest_to_seat(aisle.id, guests[1].id, db_session)

    reception = SeatingService.get_unassigned_guests(event.id, db_session)
    assert [g.id for g in reception] == [guests[1].id, guests[2].id, guests[3].id]

    at_ceremony = SeatingService.get_unassigned_guests(event.id, db_session, floor_plan_id=ceremony.id)
    assert [g.id for g in at_ceremony] == [guests[0].id, guests[2].id, guests[3].id]

    summary = SeatingService.get_seating_summary(event.id, db_session)
    assert summary["seated_guests"] == 1
    assert summary["unassigned_guests"] == 3

def test_unassigning_from_one_plan_keeps_the_other(db_session, wedding):
    event, plan, guests = wedding
    ceremony = add_ceremony_plan(db_session, event)
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    aisle = SeatingService.create_seat(ceremony.id, 200, 200, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    SeatingService.assign_guest_to_seat(aisle.id, guests[0].id, db_session)

    assert SeatingService.unassign_guest(guests[0].id, db_session, floor_plan_id=ceremony.id)

    assert SeatRepo.seat_for_guest(db_session, guests[0].id, ceremony.id) is None
    assert SeatRepo.occupied_count(db_session, table.id) == 1

def test_summary_and_unassigned_list_agree_on_declined(db_session, wedding):
    event, plan, guests = wedding
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guests[0].id, table.id, db_session)
    guests[1].rsvp_status = "declined"
    db_session.commit()

    summary = SeatingService.get_seating_summary(event.id, db_session)
    unassigned = SeatingService.get_unassigned_guests(event.id, db_session)

    assert summary["total_guests"] == 4
    assert summary["seated_guests"] == 1
    assert summary["unassigned_guests"] == len(unassigned) == 2
