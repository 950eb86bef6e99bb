"""
Event routes: CRUD, couple access, statistics and exports
"""

from typing import Optional, Literal
from fastapi import APIRouter, Depends, UploadFile, File, Query
from fastapi.responses import Response, HTMLResponse
from sqlalchemy import func
from sqlalchemy.orm import Session

from planner.api.deps import require_employee, event_access, get_current_principal
from planner.core.db import get_db
from planner.core.errors import Forbidden, ValidationFailed
from planner.models import Event, ChecklistItem, Message
from planner.schemas.event import (
    EventCreate, EventUpdate, EventResponse, CoupleLoginUpdate, CouplePermissionsUpdate
)
from planner.services.auth_service import Principal
from planner.services.event_service import EventService
from planner.services.excel_service import ExcelService
from planner.services.export_service import ExportService
from planner.services.repositories import EventRepo
from planner.utils.responses import success_response, error_response

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

@router.get("/dashboard")
def dashboard(db: Session = Depends(get_db), principal: Principal = Depends(require_employee)):
    """Headline numbers for the staff dashboard"""
    upcoming = EventService.list_events(db, when="upcoming")
    unread = db.query(func.count(Message.id)).filter(
        Message.is_read == False,
        Message.sender_kind == "couple"
    ).scalar()
    pending_tasks = db.query(func.count(ChecklistItem.id)).filter(ChecklistItem.completed == False).scalar()

    return success_response(
        message="Dashboard retrieved",
        data={
            "total_events": db.query(func.count(Event.id)).scalar(),
            "upcoming_events": len(upcoming),
            "unread_messages": unread,
            "pending_tasks": pending_tasks,
            "next_events": [EventResponse.model_validate(e) for e in upcoming[:5]]
        }
    )

@router.get("/events")
def list_events(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    when: Optional[Literal["upcoming", "past"]] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    events = EventService.list_events(db, search=search, status=status, when=when)
    return success_response(
        message="Events retrieved successfully",
        data=[EventResponse.model_validate(e) for e in events]
    )

@router.post("/events", status_code=201)
def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    """Create a new event"""
    event, credentials = EventService.create_event(event_data, db, created_by_id=principal.id)
    return success_response(
        message="Event created successfully",
        data={
            "event": EventResponse.model_validate(event),
            # Shown once: only the hash is stored
            "couple_login": credentials
        },
        status_code=201
    )

@router.get("/events/{event_id}")
def get_event(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("overview"))
):
    event = EventRepo.get_or_404(db, event_id)
    return success_response(message="Event retrieved", data=EventResponse.model_validate(event))

@router.put("/events/{event_id}")
def update_event(
    event_id: int,
    event_data: EventUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    event = EventService.update_event(event_id, event_data, db)
    return success_response(message="Event updated successfully", data=EventResponse.model_validate(event))

@router.delete("/events/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventService.delete_event(event_id, db)
    return success_response(message="Event deleted successfully")

@router.get("/events/{event_id}/stats")
def event_stats(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("overview"))
):
    return success_response(message="Event statistics retrieved", data=EventService.get_stats(event_id, db))

# -------- Couple access --------

@router.post("/events/{event_id}/couple-visibility")
def toggle_couple_visibility(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    event = EventService.toggle_couple_visibility(event_id, db)
    return success_response(
        message="Couple visibility updated",
        data={"event_id": event.id, "couple_can_view": event.couple_can_view}
    )

@router.get("/events/{event_id}/couple-login")
def get_couple_login(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    account = EventService.get_couple_account(event_id, db)
    return success_response(
        message="Couple login retrieved",
        data={"username": account.username, "last_signed_in": account.last_signed_in}
    )

@router.put("/events/{event_id}/couple-login")
def update_couple_login(
    event_id: int,
    login: CoupleLoginUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    account = EventService.update_couple_login(event_id, db, username=login.username, password=login.password)
    return success_response(message="Couple login updated", data={"username": account.username})

@router.get("/events/{event_id}/permissions")
def get_permissions(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    if not principal.is_employee and principal.event_id != event_id:
        raise Forbidden("You do not have access to this event")
    return success_response(message="Permissions retrieved", data=EventService.get_permissions(event_id, db))

@router.put("/events/{event_id}/permissions")
def update_permissions(
    event_id: int,
    permissions: CouplePermissionsUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    data = EventService.update_permissions(event_id, permissions.model_dump(exclude_unset=True), db)
    return success_response(message="Permissions updated", data=data)

# -------- Exports --------

@router.get("/events/{event_id}/export.html", response_class=HTMLResponse)
def export_event_html(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("overview"))
):
    """Printable event summary; the browser's print dialog turns it into a PDF"""
    return HTMLResponse(content=ExportService.render_event_html(event_id, db))

@router.get("/events/{event_id}/guests/export.csv")
def export_guests_csv(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("guests"))
):
    event = EventRepo.get_or_404(db, event_id)
    return Response(
        content=ExcelService.export_csv(event_id, db),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=guests_{event.event_code}.csv"}
    )

@router.get("/events/{event_id}/guests/export.xlsx")
def export_guests_xlsx(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("guests"))
):
    event = EventRepo.get_or_404(db, event_id)
    return Response(
        content=ExcelService.export_current_data(event_id, db),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename=guests_{event.event_code}.xlsx"}
    )

@router.get("/guests/template.xlsx")
def download_template(principal: Principal = Depends(get_current_principal)):
    """Download the guest import template"""
    return Response(
        content=ExcelService.create_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=guest_template.xlsx"}
    )

@router.post("/events/{event_id}/guests/import")
def import_guests(
    event_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("guests", write=True))
):
    """Upload and process an Excel guest list"""
    EventRepo.get_or_404(db, event_id)

    # Validate file type
    if not file.filename or not file.filename.lower().endswith(('.xlsx', '.xls')):
        raise ValidationFailed("Invalid file format. Please upload an Excel file (.xlsx or .xls)")

    success, errors, processed_count = ExcelService.process_excel_upload(
        file_content=file.file.read(),
        event_id=event_id,
        db=db
    )

    if not success:
        return error_response(
            message="Excel file validation failed",
            error_code="VALIDATION_ERROR",
            details=errors,
            status_code=422
        )

    return success_response(
        message=f"Excel file processed successfully. {processed_count} guests imported.",
        data={
            "processed_count": processed_count,
            "filename": file.filename
        }
    )
