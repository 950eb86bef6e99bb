"""
Menu and drinks schemas
"""

from typing import Optional, Literal
from pydantic import BaseModel, Field

class MenuItemCreate(BaseModel):
    course: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    is_available: bool = True
    order_index: int = 0

class MenuItemUpdate(BaseModel):
    course: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_available: Optional[bool] = None
    order_index: Optional[int] = None

class MenuItemResponse(BaseModel):
    id: int
    event_id: int
    course: str
    name: str
    description: Optional[str] = None
    is_available: bool
    order_index: int

    class Config:
        from_attributes = True

class DrinkCreate(BaseModel):
    drink_type: str = Field(..., min_length=1, max_length=100)
    sub_type: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=255)
    quantity: Optional[int] = Field(None, ge=0)
    corkage: Literal["venue", "client"] = "venue"
    notes: Optional[str] = None
    order_index: int = 0

class DrinkUpdate(BaseModel):
    drink_type: Optional[str] = None
    sub_type: Optional[str] = None
    name: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    corkage: Optional[Literal["venue", "client"]] = None
    notes: Optional[str] = None
    order_index: Optional[int] = None

class DrinkResponse(BaseModel):
    id: int
    event_id: int
    drink_type: str
    sub_type: Optional[str] = None
    name: str
    quantity: Optional[int] = None
    corkage: str
    notes: Optional[str] = None
    order_index: int

    class Config:
        from_attributes = True
