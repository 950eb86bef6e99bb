"""
Timeline models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from planner.core.db import Base

class TimelineDay(Base):
    __tablename__ = "timeline_days"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    date = Column(DateTime)
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="timeline_days")
    events = relationship(
        "TimelineEvent",
        back_populates="day",
        cascade="all, delete-orphan",
        order_by="[TimelineEvent.order_index, TimelineEvent.time]",
    )

class TimelineEvent(Base):
    __tablename__ = "timeline_events"

    id = Column(Integer, primary_key=True, index=True)
    day_id = Column(Integer, ForeignKey("timeline_days.id"), nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM
    title = Column(String(255), nullable=False)
    description = Column(Text)
    assigned_to = Column(String(255))
    notes = Column(Text)
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    day = relationship("TimelineDay", back_populates="events")
