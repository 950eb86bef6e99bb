"""
Authentication and employee schemas
"""

from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, EmailStr, Field

class LoginRequest(BaseModel):
    username: str
    password: str
    role: Literal["employee", "couple"] = "employee"

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    kind: str
    role: str
    event_id: Optional[int] = None

class EmployeeCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    role: Literal["admin", "employee"] = "employee"

class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8, max_length=128)
    role: Optional[Literal["admin", "employee"]] = None
    is_active: Optional[bool] = None

class EmployeeResponse(BaseModel):
    id: int
    username: str
    name: str
    email: Optional[str] = None
    role: str
    is_active: bool
    created_at: datetime
    last_signed_in: Optional[datetime] = None

    class Config:
        from_attributes = True
