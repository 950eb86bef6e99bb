"""
Guest model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship

from planner.core.db import Base

class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    name = Column(String(255), nullable=False)
    email = Column(String(320))
    group_name = Column(String(100))

    # 1 = save the date, 2 = RSVP details, 3 = final database
    stage = Column(Integer, default=1, nullable=False)
    save_the_date_response = Column(String(10), default="pending", nullable=False)  # pending, yes, no
    rsvp_token = Column(String(64), unique=True, index=True)
    rsvp_status = Column(String(20), default="pending", nullable=False)  # pending, invited, confirmed, declined

    # course name -> chosen menu item name
    meal_selections = Column(JSON, default=dict, nullable=False)
    has_dietary_requirements = Column(Boolean, default=False, nullable=False)
    dietary_restrictions = Column(Text)
    allergy_severity = Column(String(10), default="none", nullable=False)  # none, mild, severe
    can_others_consume_nearby = Column(Boolean, default=True, nullable=False)
    dietary_details = Column(Text)

    guest_type = Column(String(10), default="both", nullable=False)  # day, evening, both
    invitation_sent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="guests")
    seats = relationship("Seat", back_populates="guest")
    room_allocation = relationship("RoomAllocation", back_populates="guest", uselist=False, cascade="all, delete-orphan")

    @property
    def seat(self):
        """The reception table seat; ceremony seats are tracked separately"""
        held = [s for s in self.seats if s.table_id is not None]
        if not held:
            return None
        return min(held, key=lambda s: (s.floor_plan.order_index, s.floor_plan_id))

    @property
    def seat_id(self):
        return self.seat.id if self.seat else None

    @property
    def table_id(self):
        return self.seat.table_id if self.seat else None

    @property
    def table_name(self):
        if self.seat and self.seat.table:
            return self.seat.table.name
        return None
