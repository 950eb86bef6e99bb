"""
Employee and couple account models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from planner.core.db import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(320))
    role = Column(String(20), nullable=False, default="employee")  # admin, employee
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_signed_in = Column(DateTime)

class CoupleAccount(Base):
    """Event-scoped login for the couple portal"""
    __tablename__ = "couple_accounts"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), unique=True, nullable=False)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Sections of the portal the couple may open
    guest_list_enabled = Column(Boolean, default=True, nullable=False)
    seating_enabled = Column(Boolean, default=True, nullable=False)
    timeline_enabled = Column(Boolean, default=True, nullable=False)
    menu_enabled = Column(Boolean, default=True, nullable=False)
    notes_enabled = Column(Boolean, default=True, nullable=False)
    hotel_enabled = Column(Boolean, default=True, nullable=False)
    website_enabled = Column(Boolean, default=True, nullable=False)

    last_signed_in = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="couple_account")
