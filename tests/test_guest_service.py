"""
Tests for the guest directory and the save-the-date / RSVP flow
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from planner.core.db import Base
from planner.core.errors import NotFound, ValidationFailed
from planner.models import Event, FloorPlan, MenuItem, RoomAllocation
from planner.schemas.guest import GuestCreate, GuestUpdate, RsvpSubmission, WebsiteRsvpRequest
from planner.services.accommodation_service import AccommodationService
from planner.services.guest_service import GuestService
from planner.services.repositories import SeatRepo
from planner.services.seating_service import SeatingService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_guests.db"
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
def sample_event(db_session):
    """An event with a small menu and a reception plan"""
    event = Event(
        title="Test Wedding",
        couple_name1="Anna",
        couple_name2="Ben",
        event_date=datetime(2030, 6, 15),
        event_code="TEST123"
    )
    db_session.add(event)
    db_session.flush()
    db_session.add(FloorPlan(event_id=event.id, name="Reception", mode="reception"))
    db_session.add_all([
        MenuItem(event_id=event.id, course="Starter", name="Soup"),
        MenuItem(event_id=event.id, course="Starter", name="Terrine"),
        MenuItem(event_id=event.id, course="Main", name="Beef"),
        MenuItem(event_id=event.id, course="Main", name="Risotto"),
        MenuItem(event_id=event.id, course="Main", name="Lobster", is_available=False),
    ])
    db_session.commit()
    db_session.refresh(event)
    return event

def add_guest(db, event, first="John", last="Doe", **kwargs):
    return GuestService.create_guest(event.id, GuestCreate(first_name=first, last_name=last, **kwargs), db)

def test_create_guest_builds_name(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    assert guest.name == "John Doe"
    assert guest.stage == 1
    assert guest.save_the_date_response == "pending"
    assert guest.rsvp_token is None

def test_create_guest_requires_a_name(db_session, sample_event):
    with pytest.raises(ValidationFailed):
        add_guest(db_session, sample_event, first=" ", last="")

def test_meal_selection_validation(db_session, sample_event):
    cleaned = GuestService.validate_meal_selections(
        sample_event.id, {"Starter": "Soup", "Main": "Beef", "Dessert": ""}, db_session
    )
    assert cleaned == {"Starter": "Soup", "Main": "Beef"}

    with pytest.raises(ValidationFailed) as exc_info:
        GuestService.validate_meal_selections(
            sample_event.id, {"Main": "Lobster", "Cheese": "Brie"}, db_session
        )
    assert len(exc_info.value.details) == 2

def test_list_guests_filters(db_session, sample_event):
    add_guest(db_session, sample_event, "Anna", "Smith", group_name="Family")
    add_guest(db_session, sample_event, "Tom", "Brown", group_name="Friends")
    add_guest(db_session, sample_event, "Tim", "Smith", group_name="Family", rsvp_status="declined")

    assert len(GuestService.list_guests(sample_event.id, db_session)) == 3
    assert len(GuestService.list_guests(sample_event.id, db_session, search="smith")) == 2
    assert len(GuestService.list_guests(sample_event.id, db_session, group_name="Friends")) == 1
    assert len(GuestService.list_guests(sample_event.id, db_session, rsvp_status="declined")) == 1

def test_save_the_date_yes_issues_rsvp_link(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    guest = GuestService.send_save_the_date(guest.id, db_session)
    assert guest.invitation_sent
    assert guest.rsvp_status == "invited"

    guest = GuestService.update_save_the_date_response(guest.id, "yes", db_session)
    assert guest.stage == 2
    assert guest.rsvp_token.startswith("rsvp_")
    assert GuestService.get_by_token(guest.rsvp_token, db_session).id == guest.id

def test_save_the_date_no_releases_seat_and_room(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    plan = sample_event.floor_plans[0]
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guest.id, table.id, db_session)
    rooms = AccommodationService.initialize_rooms(sample_event.id, db_session)
    AccommodationService.allocate_guest(rooms[0].id, guest.id, db_session)

    guest = GuestService.update_save_the_date_response(guest.id, "no", db_session)

    assert guest.stage == 1
    assert guest.rsvp_status == "declined"
    assert guest.rsvp_token is None
    assert SeatRepo.seat_for_guest(db_session, guest.id) is None
    assert db_session.query(RoomAllocation).count() == 0

def test_declining_through_update_releases_seat(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    plan = sample_event.floor_plans[0]
    table = SeatingService.create_table(plan.id, "Table 1", "round", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guest.id, table.id, db_session)

    GuestService.update_guest(guest.id, GuestUpdate(rsvp_status="declined"), db_session)
    assert SeatRepo.occupied_count(db_session, table.id) == 0

def test_token_rsvp_confirms_guest(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    guest = GuestService.update_save_the_date_response(guest.id, "yes", db_session)

    submission = RsvpSubmission(
        meal_selections={"Starter": "Terrine", "Main": "Risotto"},
        has_dietary_requirements=True,
        dietary_restrictions="nut allergy",
        allergy_severity="severe",
        can_others_consume_nearby=False
    )
    guest = GuestService.submit_rsvp(guest.rsvp_token, submission, db_session)

    assert guest.stage == 3
    assert guest.rsvp_status == "confirmed"
    assert guest.meal_selections == {"Starter": "Terrine", "Main": "Risotto"}
    assert guest.allergy_severity == "severe"
    assert not guest.can_others_consume_nearby

def test_token_rsvp_rejects_unknown_token(db_session, sample_event):
    with pytest.raises(NotFound):
        GuestService.submit_rsvp("rsvp_missing", RsvpSubmission(), db_session)

def test_token_rsvp_rejects_bad_meal(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    guest = GuestService.update_save_the_date_response(guest.id, "yes", db_session)
    with pytest.raises(ValidationFailed):
        GuestService.submit_rsvp(guest.rsvp_token, RsvpSubmission(meal_selections={"Main": "Lobster"}), db_session)

def test_website_rsvp_responses(db_session, sample_event):
    guest = add_guest(db_session, sample_event)

    guest = GuestService.update_website_rsvp(
        sample_event.id, WebsiteRsvpRequest(guest_id=guest.id, response="maybe"), db_session
    )
    assert guest.rsvp_status == "invited"

    guest = GuestService.update_website_rsvp(
        sample_event.id,
        WebsiteRsvpRequest(guest_id=guest.id, response="yes", meal_selections={"Main": "Beef"}, dietary_restrictions="vegetarian"),
        db_session
    )
    assert guest.rsvp_status == "confirmed"
    assert guest.stage == 3
    assert guest.has_dietary_requirements

    guest = GuestService.update_website_rsvp(
        sample_event.id, WebsiteRsvpRequest(guest_id=guest.id, response="no"), db_session
    )
    assert guest.rsvp_status == "declined"

def test_website_rsvp_scoped_to_event(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    with pytest.raises(NotFound):
        GuestService.update_website_rsvp(
            sample_event.id + 1, WebsiteRsvpRequest(guest_id=guest.id, response="yes"), db_session
        )

def test_guest_stats(db_session, sample_event):
    add_guest(db_session, sample_event, "A", "One", rsvp_status="confirmed", has_dietary_requirements=True)
    add_guest(db_session, sample_event, "B", "Two", rsvp_status="declined")
    add_guest(db_session, sample_event, "C", "Three")

    stats = GuestService.get_stats(sample_event.id, db_session)
    assert stats["total"] == 3
    assert stats["confirmed"] == 1
    assert stats["declined"] == 1
    assert stats["pending"] == 1
    assert stats["with_dietary_requirements"] == 1
    assert stats["by_stage"] == {1: 3, 2: 0, 3: 0}

def test_delete_guest_frees_seat(db_session, sample_event):
    guest = add_guest(db_session, sample_event)
    plan = sample_event.floor_plans[0]
    table = SeatingService.create_table(plan.id, "Table 1", "round", 2, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guest.id, table.id, db_session)

    GuestService.delete_guest(guest.id, db_session)
    assert SeatRepo.occupied_count(db_session, table.id) == 0
