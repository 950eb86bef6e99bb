"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from planner.core.db import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    couple_name1 = Column(String(100))
    couple_name2 = Column(String(100))
    event_date = Column(DateTime, nullable=False)
    event_code = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="planning")  # planning, confirmed, completed, cancelled
    couple_can_view = Column(Boolean, default=True, nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    couple_account = relationship("CoupleAccount", back_populates="event", uselist=False, cascade="all, delete-orphan")
    guests = relationship("Guest", back_populates="event", cascade="all, delete-orphan")
    floor_plans = relationship("FloorPlan", back_populates="event", cascade="all, delete-orphan", order_by="FloorPlan.order_index")
    menu_items = relationship("MenuItem", cascade="all, delete-orphan")
    drinks = relationship("Drink", cascade="all, delete-orphan")
    timeline_days = relationship("TimelineDay", back_populates="event", cascade="all, delete-orphan")
    checklist_items = relationship("ChecklistItem", cascade="all, delete-orphan")
    vendors = relationship("Vendor", cascade="all, delete-orphan")
    budget_items = relationship("BudgetItem", cascade="all, delete-orphan")
    accommodations = relationship("Accommodation", cascade="all, delete-orphan")
    rooms = relationship("AccommodationRoom", back_populates="event", cascade="all, delete-orphan")
    notes = relationship("Note", cascade="all, delete-orphan")
    messages = relationship("Message", cascade="all, delete-orphan")
    website = relationship("WeddingWebsite", back_populates="event", uselist=False, cascade="all, delete-orphan")

    @property
    def couple_display_name(self) -> str:
        names = [n for n in (self.couple_name1, self.couple_name2) if n]
        return " & ".join(names) if names else self.title
