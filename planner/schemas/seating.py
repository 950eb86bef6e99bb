"""
Floor plan, table and seat schemas
"""

from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field

from planner.core.config import settings

class FloorPlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    mode: Literal["ceremony", "reception"] = "reception"
    order_index: int = 0

class FloorPlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    mode: Optional[Literal["ceremony", "reception"]] = None
    order_index: Optional[int] = None

class FloorPlanResponse(BaseModel):
    id: int
    event_id: int
    name: str
    mode: str
    order_index: int
    created_at: datetime

    class Config:
        from_attributes = True

class TableCreate(BaseModel):
    floor_plan_id: int
    name: str = Field(..., min_length=1, max_length=255)
    table_type: Literal["round", "rectangular"] = "round"
    seat_count: int = Field(..., ge=1, le=settings.MAX_SEATS_PER_TABLE)
    position_x: int = settings.CANVAS_WIDTH // 2
    position_y: int = settings.CANVAS_HEIGHT // 2

class TableUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)

class PositionUpdate(BaseModel):
    position_x: int
    position_y: int

class TableResponse(BaseModel):
    id: int
    floor_plan_id: int
    name: str
    table_type: str
    seat_count: int
    position_x: int
    position_y: int
    rotation: int

    class Config:
        from_attributes = True

class SeatCreate(BaseModel):
    floor_plan_id: int
    position_x: int
    position_y: int
    table_id: Optional[int] = None

class SeatAssignment(BaseModel):
    guest_id: Optional[int] = None

class TableAssignment(BaseModel):
    guest_id: int
    table_id: int

class SeatResponse(BaseModel):
    id: int
    floor_plan_id: int
    table_id: Optional[int] = None
    seat_number: Optional[int] = None
    guest_id: Optional[int] = None
    position_x: int
    position_y: int

    class Config:
        from_attributes = True
