"""
Tests for guest spreadsheet import/export and the printable event document
"""

import io
import pytest
import pandas as pd
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from planner.core.db import Base
from planner.models import Event, FloorPlan, Guest, MenuItem
from planner.services.excel_service import ExcelService
from planner.services.export_service import ExportService
from planner.services.seating_service import SeatingService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_export.db"
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
    """Create a sample event for testing"""
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
    db_session.commit()
    db_session.refresh(event)
    return event

def create_test_excel(data):
    """Helper function to create Excel bytes from data"""
    df = pd.DataFrame(data)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, index=False)
    return buffer.getvalue()

def test_validate_excel_structure_valid():
    df = pd.DataFrame({
        'First Name': ['John'],
        'Last Name': ['Doe'],
        'Email': ['john@example.com']
    })
    valid, errors = ExcelService.validate_excel_structure(df)
    assert valid
    assert len(errors) == 0

def test_validate_excel_structure_missing_columns():
    df = pd.DataFrame({'Name': ['John Doe'], 'Email': ['john@example.com']})
    valid, errors = ExcelService.validate_excel_structure(df)
    assert not valid
    assert 'missing required columns' in errors[0].lower()

def test_validate_excel_structure_case_insensitive():
    df = pd.DataFrame({'FIRST NAME': ['John'], 'surname': ['Doe']})
    valid, errors = ExcelService.validate_excel_structure(df)
    assert valid

def test_validate_data_constraints_duplicates_and_types():
    df = pd.DataFrame({
        'First Name': ['John', 'john', 'Amy'],
        'Last Name': ['Doe', 'Doe', 'Lee'],
        'Guest Type': ['day', 'both', 'brunch']
    })
    valid, errors = ExcelService.validate_data_constraints(df)
    assert not valid
    assert any('guest type' in e for e in errors)
    assert any("duplicate guest 'john doe'" in e.lower() for e in errors)

def test_process_excel_upload_success(db_session, sample_event):
    excel_bytes = create_test_excel({
        'First Name': ['John', 'Jane', 'Bob'],
        'Last Name': ['Doe', 'Smith', 'Johnson'],
        'Group': ['Family', 'Friends', None],
        'Guest Type': ['day', 'evening', None],
        'Dietary Restrictions': ['none', 'vegetarian', None]
    })

    success, errors, count = ExcelService.process_excel_upload(excel_bytes, sample_event.id, db_session)

    assert success
    assert errors == []
    assert count == 3

    guests = {g.name: g for g in db_session.query(Guest).filter(Guest.event_id == sample_event.id).all()}
    assert set(guests) == {"John Doe", "Jane Smith", "Bob Johnson"}
    assert guests["John Doe"].dietary_restrictions is None
    assert guests["Jane Smith"].has_dietary_requirements
    assert guests["Bob Johnson"].guest_type == "both"
    assert all(g.stage == 1 for g in guests.values())

def test_process_excel_upload_validation_failure(db_session, sample_event):
    excel_bytes = create_test_excel({'Name': ['John Doe']})

    success, errors, count = ExcelService.process_excel_upload(excel_bytes, sample_event.id, db_session)

    assert not success
    assert count == 0
    assert db_session.query(Guest).count() == 0

def test_process_excel_upload_unreadable_file(db_session, sample_event):
    success, errors, count = ExcelService.process_excel_upload(b"not a spreadsheet", sample_event.id, db_session)
    assert not success
    assert errors[0].startswith("Error processing Excel file")

def test_create_template():
    template_bytes = ExcelService.create_template()
    df = pd.read_excel(io.BytesIO(template_bytes))
    for col in ['First Name', 'Last Name', 'Email', 'Group', 'Guest Type', 'Dietary Restrictions']:
        assert col in df.columns
    assert len(df) == 3

def test_export_csv_quotes_every_field(db_session, sample_event):
    db_session.add(Guest(
        event_id=sample_event.id, first_name="Mary", last_name="O'Neil, Jr", name="Mary O'Neil, Jr",
        meal_selections={"Main": "Beef"}
    ))
    db_session.commit()

    lines = ExcelService.export_csv(sample_event.id, db_session).splitlines()
    assert lines[0].startswith('"First Name","Last Name","Email"')
    assert lines[1].startswith('"Mary","O\'Neil, Jr",""')
    assert '"Main: Beef"' in lines[1]

def test_export_xlsx_round_trips_table_name(db_session, sample_event):
    guest = Guest(event_id=sample_event.id, first_name="Tom", last_name="Hill", name="Tom Hill")
    db_session.add(guest)
    db_session.commit()
    table = SeatingService.create_table(sample_event.floor_plans[0].id, "Top Table", "round", 4, 600, 300, db_session)
    SeatingService.assign_guest_to_table(guest.id, table.id, db_session)

    df = pd.read_excel(io.BytesIO(ExcelService.export_current_data(sample_event.id, db_session)))
    assert list(df.columns) == ExcelService.EXPORT_COLUMNS
    assert df.loc[0, 'Table'] == "Top Table"

def test_meal_summary_counts():
    guests = [
        Guest(meal_selections={"Main": "Beef", "Starter": "Soup"}),
        Guest(meal_selections={"Main": "Beef"}),
        Guest(meal_selections={"Main": "Risotto"}),
        Guest(meal_selections={}),
    ]
    summary = ExportService.meal_summary(guests)
    assert summary == {"Main": {"Beef": 2, "Risotto": 1}, "Starter": {"Soup": 1}}

def test_event_html_uses_dashes_and_escapes(db_session, sample_event):
    db_session.add(Guest(event_id=sample_event.id, first_name="Eve", last_name="<b>", name="Eve <b>"))
    db_session.add(MenuItem(event_id=sample_event.id, course="Main", name="Beef"))
    db_session.commit()

    html = ExportService.render_event_html(sample_event.id, db_session)

    assert "Anna &amp; Ben" in html
    assert "Eve &lt;b&gt;" in html
    assert "<td>-</td>" in html
    assert "Beef" in html
