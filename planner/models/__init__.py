"""
Database models package
"""

from .user import User, CoupleAccount
from .event import Event
from .guest import Guest
from .floor_plan import FloorPlan, Table, Seat
from .menu import MenuItem, Drink
from .timeline import TimelineDay, TimelineEvent
from .planning import ChecklistItem, Vendor, BudgetItem
from .accommodation import Accommodation, AccommodationRoom, RoomAllocation
from .website import WeddingWebsite, RegistryLink, FaqItem, WebsiteTimelineItem, WebsitePhoto
from .note import Note, Message

__all__ = [
    "User",
    "CoupleAccount",
    "Event",
    "Guest",
    "FloorPlan",
    "Table",
    "Seat",
    "MenuItem",
    "Drink",
    "TimelineDay",
    "TimelineEvent",
    "ChecklistItem",
    "Vendor",
    "BudgetItem",
    "Accommodation",
    "AccommodationRoom",
    "RoomAllocation",
    "WeddingWebsite",
    "RegistryLink",
    "FaqItem",
    "WebsiteTimelineItem",
    "WebsitePhoto",
    "Note",
    "Message",
]
