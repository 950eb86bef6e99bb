"""
Notes and couple/planner messaging routes
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from planner.api.deps import authorize, event_access, get_current_principal, require_employee
from planner.core.db import get_db
from planner.core.errors import NotFound
from planner.models import Note, Message
from planner.schemas.planning import NoteCreate, NoteUpdate, NoteResponse, MessageCreate, MessageResponse
from planner.services.auth_service import Principal
from planner.services.crud import CRUDBase
from planner.services.repositories import EventRepo
from planner.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter()

note_crud = CRUDBase[Note, NoteCreate, NoteUpdate](
    Note, "Note", order_by=[Note.is_pinned.desc(), Note.updated_at.desc()]
)

def _note_for(note_id: int, principal: Principal, db: Session) -> Note:
    note = note_crud.get_or_404(db, note_id)
    authorize(principal, note.event_id, "notes", db, write=True)
    return note

@router.get("/events/{event_id}/notes")
def list_notes(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("notes"))
):
    EventRepo.get_or_404(db, event_id)
    notes = note_crud.list_for_event(db, event_id)
    return success_response(message="Notes retrieved", data=[NoteResponse.model_validate(n) for n in notes])

@router.post("/events/{event_id}/notes", status_code=201)
def create_note(
    event_id: int,
    note: NoteCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("notes", write=True))
):
    EventRepo.get_or_404(db, event_id)
    obj = note_crud.create(db, note, extra={"event_id": event_id, "created_by": principal.name})
    return success_response(message="Note created", data=NoteResponse.model_validate(obj), status_code=201)

@router.put("/notes/{note_id}")
def update_note(
    note_id: int,
    note: NoteUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    obj = note_crud.update(db, _note_for(note_id, principal, db), note)
    return success_response(message="Note updated", data=NoteResponse.model_validate(obj))

@router.delete("/notes/{note_id}")
def delete_note(
    note_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    _note_for(note_id, principal, db)
    note_crud.remove(db, note_id)
    return success_response(message="Note deleted")

# -------- Messages --------

@router.get("/messages")
def list_all_messages(
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    """Messages center: every event's conversation, newest first"""
    query = db.query(Message)
    if unread_only:
        query = query.filter(Message.is_read == False)
    messages = query.order_by(Message.created_at.desc(), Message.id.desc()).all()
    return success_response(message="Messages retrieved", data=[MessageResponse.model_validate(m) for m in messages])

@router.get("/messages/unread-count")
def unread_count(
    event_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Unread messages sent by the other side of the conversation"""
    if not principal.is_employee:
        event_id = principal.event_id
    other_side = "couple" if principal.is_employee else "employee"
    query = db.query(func.count(Message.id)).filter(
        Message.is_read == False,
        Message.sender_kind == other_side
    )
    if event_id is not None:
        query = query.filter(Message.event_id == event_id)
    return success_response(message="Unread count retrieved", data={"unread": query.scalar()})

@router.get("/events/{event_id}/messages")
def list_event_messages(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("messages"))
):
    EventRepo.get_or_404(db, event_id)
    messages = db.query(Message).filter(Message.event_id == event_id).order_by(
        Message.created_at, Message.id
    ).all()
    return success_response(message="Messages retrieved", data=[MessageResponse.model_validate(m) for m in messages])

@router.post("/events/{event_id}/messages", status_code=201)
def send_message(
    event_id: int,
    body: MessageCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("messages", write=True))
):
    EventRepo.get_or_404(db, event_id)
    message = Message(
        event_id=event_id,
        sender_kind=principal.kind,
        sender_name=principal.name,
        content=body.content,
        is_urgent=body.is_urgent
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    if message.is_urgent:
        logger.info(f"Urgent message {message.id} on event {event_id} from {principal.kind}")
    return success_response(message="Message sent", data=MessageResponse.model_validate(message), status_code=201)

@router.post("/messages/{message_id}/read")
def mark_read(
    message_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        raise NotFound("Message")
    authorize(principal, message.event_id, "messages", db, write=True)
    message.is_read = True
    db.commit()
    return success_response(message="Message marked as read")
