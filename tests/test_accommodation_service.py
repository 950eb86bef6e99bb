"""
Tests for on-site room allocation
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from planner.core.db import Base
from planner.core.errors import CapacityConflict, Conflict, ValidationFailed
from planner.models import Event, Guest
from planner.services.accommodation_service import AccommodationService, DEFAULT_ROOMS

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_rooms.db"
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

@pytest.fixture
def event_with_rooms(db_session):
    event = Event(title="Test Wedding", event_date=datetime(2030, 6, 15), event_code="ROOMS1")
    db_session.add(event)
    db_session.flush()
    for i in range(1, 5):
        db_session.add(Guest(event_id=event.id, first_name=f"G{i}", last_name="Test", name=f"G{i} Test"))
    db_session.commit()
    rooms = AccommodationService.initialize_rooms(event.id, db_session)
    guests = db_session.query(Guest).order_by(Guest.id).all()
    return event, rooms, guests

def test_default_rooms(db_session, event_with_rooms):
    event, rooms, _ = event_with_rooms
    assert [r.room_name for r in rooms] == [f"Room {n}" for n in range(1, 13)] + ["Cottage", "Lodge"]
    assert all(r.capacity == 2 for r in rooms)
    assert [r.room_name for r in rooms if r.is_accessible] == ["Room 12"]

    # Running it again does not duplicate rooms
    again = AccommodationService.initialize_rooms(event.id, db_session)
    assert len(again) == len(DEFAULT_ROOMS)

def test_room_capacity_is_enforced(db_session, event_with_rooms):
    _, rooms, guests = event_with_rooms
    room = rooms[0]
    AccommodationService.allocate_guest(room.id, guests[0].id, db_session)
    AccommodationService.allocate_guest(room.id, guests[1].id, db_session, notes="Late arrival")

    with pytest.raises(CapacityConflict):
        AccommodationService.allocate_guest(room.id, guests[2].id, db_session)

    summary = AccommodationService.room_summary(AccommodationService.get_room_or_404(room.id, db_session))
    assert summary["occupied"] == 2
    assert summary["available"] == 0

def test_guest_gets_one_room(db_session, event_with_rooms):
    _, rooms, guests = event_with_rooms
    AccommodationService.allocate_guest(rooms[0].id, guests[0].id, db_session)
    with pytest.raises(Conflict):
        AccommodationService.allocate_guest(rooms[1].id, guests[0].id, db_session)

def test_blocked_room_refuses_guests(db_session, event_with_rooms):
    _, rooms, guests = event_with_rooms
    AccommodationService.update_room(rooms[2].id, {"is_blocked": True}, db_session)
    with pytest.raises(Conflict):
        AccommodationService.allocate_guest(rooms[2].id, guests[0].id, db_session)

def test_occupied_room_cannot_be_blocked(db_session, event_with_rooms):
    _, rooms, guests = event_with_rooms
    AccommodationService.allocate_guest(rooms[3].id, guests[0].id, db_session)
    with pytest.raises(Conflict):
        AccommodationService.update_room(rooms[3].id, {"is_blocked": True}, db_session)

def test_room_and_guest_must_share_event(db_session, event_with_rooms):
    _, rooms, _ = event_with_rooms
    other = Event(title="Other", event_date=datetime(2030, 7, 1), event_code="OTHER1")
    db_session.add(other)
    db_session.flush()
    stranger = Guest(event_id=other.id, name="Stranger")
    db_session.add(stranger)
    db_session.commit()

    with pytest.raises(ValidationFailed):
        AccommodationService.allocate_guest(rooms[0].id, stranger.id, db_session)

def test_remove_allocation(db_session, event_with_rooms):
    event, rooms, guests = event_with_rooms
    allocation = AccommodationService.allocate_guest(rooms[0].id, guests[0].id, db_session)
    AccommodationService.remove_allocation(allocation.id, db_session)
    assert AccommodationService.list_allocations(event.id, db_session) == []
