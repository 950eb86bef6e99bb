"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field

EventStatus = Literal["planning", "confirmed", "completed", "cancelled"]

class EventCreate(BaseModel):
    """Schema for creating an event"""
    title: str = Field(..., min_length=1, max_length=255)
    couple_name1: Optional[str] = None
    couple_name2: Optional[str] = None
    event_date: datetime
    event_code: Optional[str] = Field(None, max_length=50)
    status: EventStatus = "planning"

class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    couple_name1: Optional[str] = None
    couple_name2: Optional[str] = None
    event_date: Optional[datetime] = None
    status: Optional[EventStatus] = None
    couple_can_view: Optional[bool] = None

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    title: str
    couple_name1: Optional[str] = None
    couple_name2: Optional[str] = None
    event_date: datetime
    event_code: str
    status: str
    couple_can_view: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class CoupleLoginUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=100)
    password: Optional[str] = Field(None, min_length=6, max_length=128)

class CouplePermissions(BaseModel):
    guest_list_enabled: bool = True
    seating_enabled: bool = True
    timeline_enabled: bool = True
    menu_enabled: bool = True
    notes_enabled: bool = True
    hotel_enabled: bool = True
    website_enabled: bool = True

    class Config:
        from_attributes = True

class CouplePermissionsUpdate(BaseModel):
    guest_list_enabled: Optional[bool] = None
    seating_enabled: Optional[bool] = None
    timeline_enabled: Optional[bool] = None
    menu_enabled: Optional[bool] = None
    notes_enabled: Optional[bool] = None
    hotel_enabled: Optional[bool] = None
    website_enabled: Optional[bool] = None
