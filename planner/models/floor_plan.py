"""
Floor plan, table and seat models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from planner.core.db import Base

class FloorPlan(Base):
    __tablename__ = "floor_plans"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    mode = Column(String(20), default="reception", nullable=False)  # ceremony, reception
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="floor_plans")
    tables = relationship("Table", back_populates="floor_plan", cascade="all, delete-orphan", order_by="Table.id")
    seats = relationship("Seat", back_populates="floor_plan", cascade="all, delete-orphan", order_by="Seat.id")

class Table(Base):
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    floor_plan_id = Column(Integer, ForeignKey("floor_plans.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    table_type = Column(String(20), nullable=False, default="round")  # round, rectangular
    seat_count = Column(Integer, nullable=False)
    # Centre of the table on the canvas
    position_x = Column(Integer, nullable=False)
    position_y = Column(Integer, nullable=False)
    rotation = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    floor_plan = relationship("FloorPlan", back_populates="tables")
    seats = relationship("Seat", back_populates="table", cascade="all, delete-orphan", order_by="Seat.seat_number")

class Seat(Base):
    __tablename__ = "seats"
    # A guest occupies at most one seat per floor plan
    __table_args__ = (UniqueConstraint("floor_plan_id", "guest_id", name="uq_seat_plan_guest"),)

    id = Column(Integer, primary_key=True, index=True)
    floor_plan_id = Column(Integer, ForeignKey("floor_plans.id"), nullable=False, index=True)
    table_id = Column(Integer, ForeignKey("tables.id"), index=True)  # null for standalone ceremony seats
    seat_number = Column(Integer)
    guest_id = Column(Integer, ForeignKey("guests.id"), index=True)
    position_x = Column(Integer, nullable=False)
    position_y = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    floor_plan = relationship("FloorPlan", back_populates="seats")
    table = relationship("Table", back_populates="seats")
    guest = relationship("Guest", back_populates="seats")
