"""
Checklist, vendor and budget models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text

from planner.core.db import Base

class ChecklistItem(Base):
    __tablename__ = "checklist_items"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    category = Column(String(100), nullable=False, default="General")
    title = Column(String(255), nullable=False)
    description = Column(Text)
    completed = Column(Boolean, default=False, nullable=False)
    priority = Column(String(10), default="medium", nullable=False)  # low, medium, high
    assigned_to = Column(String(255))
    due_date = Column(DateTime)
    completed_at = Column(DateTime)
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    contact_name = Column(String(255))
    email = Column(String(320))
    phone = Column(String(50))
    website = Column(String(500))
    status = Column(String(20), default="pending", nullable=False)  # pending, contacted, booked, confirmed, cancelled
    contract_signed = Column(Boolean, default=False, nullable=False)
    deposit_paid = Column(Boolean, default=False, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

class BudgetItem(Base):
    __tablename__ = "budget_items"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    item_name = Column(String(255), nullable=False)
    # Amounts in cents
    estimated_cost = Column(Integer, default=0, nullable=False)
    actual_cost = Column(Integer)
    paid_amount = Column(Integer, default=0, nullable=False)
    status = Column(String(10), default="pending", nullable=False)  # pending, paid, overdue
    vendor_id = Column(Integer, ForeignKey("vendors.id", ondelete="SET NULL"))
    notes = Column(Text)
    due_date = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
