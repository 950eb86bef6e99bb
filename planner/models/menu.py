"""
Menu and drinks models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text

from planner.core.db import Base

class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    course = Column(String(100), nullable=False)  # e.g. Canapés, Starter, Main, Dessert
    name = Column(String(255), nullable=False)
    description = Column(Text)
    is_available = Column(Boolean, default=True, nullable=False)
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class Drink(Base):
    __tablename__ = "drinks"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    drink_type = Column(String(100), nullable=False)  # e.g. Reception, Table Wine, Toast
    sub_type = Column(String(100))
    name = Column(String(255), nullable=False)
    quantity = Column(Integer)
    # Who supplies the drink: the venue, or the client under corkage
    corkage = Column(String(10), default="venue", nullable=False)
    notes = Column(Text)
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
