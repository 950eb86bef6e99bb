"""
Accommodation models: partner hotels and on-site rooms
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from planner.core.db import Base

class Accommodation(Base):
    __tablename__ = "accommodations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    hotel_name = Column(String(255), nullable=False)
    address = Column(Text)
    phone = Column(String(50))
    website = Column(String(500))
    room_block_code = Column(String(100))
    room_rate = Column(Integer)  # cents per night
    check_in_date = Column(DateTime)
    check_out_date = Column(DateTime)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class AccommodationRoom(Base):
    __tablename__ = "accommodation_rooms"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    room_name = Column(String(100), nullable=False)
    room_number = Column(Integer)
    is_accessible = Column(Boolean, default=False, nullable=False)
    is_blocked = Column(Boolean, default=False, nullable=False)
    capacity = Column(Integer, default=2, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="rooms")
    allocations = relationship("RoomAllocation", back_populates="room", cascade="all, delete-orphan", order_by="RoomAllocation.id")

class RoomAllocation(Base):
    __tablename__ = "room_allocations"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("accommodation_rooms.id"), nullable=False, index=True)
    # A guest is allocated at most one room
    guest_id = Column(Integer, ForeignKey("guests.id"), unique=True, nullable=False)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    room = relationship("AccommodationRoom", back_populates="allocations")
    guest = relationship("Guest", back_populates="room_allocation")
