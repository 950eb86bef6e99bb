"""
Schemas for timeline, checklist, vendors, budget, notes and messages
"""

from datetime import datetime
from typing import Optional, Literal, List
from pydantic import BaseModel, EmailStr, Field

# -------- Timeline --------

class TimelineDayCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    date: Optional[datetime] = None
    order_index: int = 0

class TimelineDayUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime] = None
    order_index: Optional[int] = None

class TimelineEventCreate(BaseModel):
    time: str = Field(..., pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    order_index: int = 0

class TimelineEventUpdate(BaseModel):
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    order_index: Optional[int] = None

class TimelineEventResponse(BaseModel):
    id: int
    day_id: int
    time: str
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    order_index: int

    class Config:
        from_attributes = True

class TimelineDayResponse(BaseModel):
    id: int
    event_id: int
    title: str
    date: Optional[datetime] = None
    order_index: int
    events: List[TimelineEventResponse] = []

    class Config:
        from_attributes = True

# -------- Checklist --------

Priority = Literal["low", "medium", "high"]

class ChecklistItemCreate(BaseModel):
    category: str = "General"
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    priority: Priority = "medium"
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    order_index: int = 0

class ChecklistItemUpdate(BaseModel):
    category: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    order_index: Optional[int] = None

class ChecklistItemResponse(BaseModel):
    id: int
    event_id: int
    category: str
    title: str
    description: Optional[str] = None
    completed: bool
    priority: str
    assigned_to: Optional[str] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    order_index: int

    class Config:
        from_attributes = True

# -------- Vendors --------

VendorStatus = Literal["pending", "contacted", "booked", "confirmed", "cancelled"]

class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    contact_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: VendorStatus = "pending"
    contract_signed: bool = False
    deposit_paid: bool = False
    notes: Optional[str] = None

class VendorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = None
    contact_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: Optional[VendorStatus] = None
    contract_signed: Optional[bool] = None
    deposit_paid: Optional[bool] = None
    notes: Optional[str] = None

class VendorResponse(BaseModel):
    id: int
    event_id: int
    name: str
    category: str
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: str
    contract_signed: bool
    deposit_paid: bool
    notes: Optional[str] = None

    class Config:
        from_attributes = True

# -------- Budget --------

BudgetStatus = Literal["pending", "paid", "overdue"]

class BudgetItemCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    item_name: str = Field(..., min_length=1, max_length=255)
    estimated_cost: int = Field(0, ge=0)
    actual_cost: Optional[int] = Field(None, ge=0)
    paid_amount: int = Field(0, ge=0)
    status: BudgetStatus = "pending"
    vendor_id: Optional[int] = None
    notes: Optional[str] = None
    due_date: Optional[datetime] = None

class BudgetItemUpdate(BaseModel):
    category: Optional[str] = None
    item_name: Optional[str] = None
    estimated_cost: Optional[int] = Field(None, ge=0)
    actual_cost: Optional[int] = Field(None, ge=0)
    paid_amount: Optional[int] = Field(None, ge=0)
    status: Optional[BudgetStatus] = None
    vendor_id: Optional[int] = None
    notes: Optional[str] = None
    due_date: Optional[datetime] = None

class BudgetItemResponse(BaseModel):
    id: int
    event_id: int
    category: str
    item_name: str
    estimated_cost: int
    actual_cost: Optional[int] = None
    paid_amount: int
    status: str
    vendor_id: Optional[int] = None
    notes: Optional[str] = None
    due_date: Optional[datetime] = None

    class Config:
        from_attributes = True

# -------- Notes & messages --------

class NoteCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    category: Optional[str] = None
    is_pinned: bool = False

class NoteUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = None
    category: Optional[str] = None
    is_pinned: Optional[bool] = None

class NoteResponse(BaseModel):
    id: int
    event_id: int
    title: str
    content: Optional[str] = None
    category: Optional[str] = None
    is_pinned: bool
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1)
    is_urgent: bool = False

class MessageResponse(BaseModel):
    id: int
    event_id: int
    sender_kind: str
    sender_name: str
    content: str
    is_read: bool
    is_urgent: bool
    created_at: datetime

    class Config:
        from_attributes = True
