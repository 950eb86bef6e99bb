"""
Accommodation schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class AccommodationCreate(BaseModel):
    hotel_name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    room_block_code: Optional[str] = None
    room_rate: Optional[int] = Field(None, ge=0)
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    notes: Optional[str] = None

class AccommodationUpdate(BaseModel):
    hotel_name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    room_block_code: Optional[str] = None
    room_rate: Optional[int] = Field(None, ge=0)
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    notes: Optional[str] = None

class AccommodationResponse(BaseModel):
    id: int
    event_id: int
    hotel_name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    room_block_code: Optional[str] = None
    room_rate: Optional[int] = None
    check_in_date: Optional[datetime] = None
    check_out_date: Optional[datetime] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class RoomUpdate(BaseModel):
    room_name: Optional[str] = None
    is_accessible: Optional[bool] = None
    is_blocked: Optional[bool] = None
    notes: Optional[str] = None

class RoomAllocationCreate(BaseModel):
    room_id: int
    guest_id: int
    notes: Optional[str] = None
