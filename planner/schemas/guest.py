"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional, Dict, Literal
from pydantic import BaseModel, EmailStr, Field

RsvpStatus = Literal["pending", "invited", "confirmed", "declined"]
AllergySeverity = Literal["none", "mild", "severe"]
GuestType = Literal["day", "evening", "both"]

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    first_name: str = ""
    last_name: str = ""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    group_name: Optional[str] = None
    rsvp_status: RsvpStatus = "pending"
    meal_selections: Dict[str, str] = Field(default_factory=dict)
    has_dietary_requirements: bool = False
    dietary_restrictions: Optional[str] = None
    allergy_severity: AllergySeverity = "none"
    can_others_consume_nearby: bool = True
    dietary_details: Optional[str] = None
    guest_type: GuestType = "both"

class GuestUpdate(BaseModel):
    """Schema for updating a guest"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    group_name: Optional[str] = None
    stage: Optional[int] = Field(None, ge=1, le=3)
    rsvp_status: Optional[RsvpStatus] = None
    meal_selections: Optional[Dict[str, str]] = None
    has_dietary_requirements: Optional[bool] = None
    dietary_restrictions: Optional[str] = None
    allergy_severity: Optional[AllergySeverity] = None
    can_others_consume_nearby: Optional[bool] = None
    dietary_details: Optional[str] = None
    guest_type: Optional[GuestType] = None
    invitation_sent: Optional[bool] = None

class GuestResponse(BaseModel):
    """Guest response schema"""
    id: int
    event_id: int
    first_name: str
    last_name: str
    name: str
    email: Optional[str] = None
    group_name: Optional[str] = None
    stage: int
    save_the_date_response: str
    rsvp_token: Optional[str] = None
    rsvp_status: str
    meal_selections: Dict[str, str] = Field(default_factory=dict)
    has_dietary_requirements: bool
    dietary_restrictions: Optional[str] = None
    allergy_severity: str
    can_others_consume_nearby: bool
    dietary_details: Optional[str] = None
    guest_type: str
    invitation_sent: bool
    table_id: Optional[int] = None
    table_name: Optional[str] = None
    seat_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class SaveTheDateUpdate(BaseModel):
    response: Literal["yes", "no"]

class RsvpSubmission(BaseModel):
    """Token RSVP form: the guest confirms and picks their meals"""
    meal_selections: Dict[str, str] = Field(default_factory=dict)
    has_dietary_requirements: bool = False
    dietary_restrictions: Optional[str] = None
    allergy_severity: AllergySeverity = "none"
    can_others_consume_nearby: bool = True
    dietary_details: Optional[str] = None

class WebsiteRsvpRequest(BaseModel):
    """RSVP sent from the public wedding website"""
    guest_id: int
    response: Literal["yes", "no", "maybe"]
    meal_selections: Dict[str, str] = Field(default_factory=dict)
    dietary_restrictions: Optional[str] = None

class GuestLookupRequest(BaseModel):
    """Guest lookup by name on the public website"""
    name: str = Field(..., min_length=2)
