"""
Wedding website models
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from planner.core.db import Base

class WeddingWebsite(Base):
    __tablename__ = "wedding_websites"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    is_published = Column(Boolean, default=False, nullable=False)
    welcome_message = Column(Text)
    our_story = Column(Text)
    rsvp_enabled = Column(Boolean, default=True, nullable=False)
    theme = Column(String(50), default="classic", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="website")
    registry_links = relationship("RegistryLink", cascade="all, delete-orphan", order_by="RegistryLink.order_index")
    faq_items = relationship("FaqItem", cascade="all, delete-orphan", order_by="FaqItem.order_index")
    timeline_items = relationship("WebsiteTimelineItem", cascade="all, delete-orphan", order_by="WebsiteTimelineItem.order_index")
    photos = relationship("WebsitePhoto", cascade="all, delete-orphan", order_by="WebsitePhoto.order_index")

class RegistryLink(Base):
    __tablename__ = "registry_links"

    id = Column(Integer, primary_key=True, index=True)
    website_id = Column(Integer, ForeignKey("wedding_websites.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    order_index = Column(Integer, default=0, nullable=False)

class FaqItem(Base):
    __tablename__ = "faq_items"

    id = Column(Integer, primary_key=True, index=True)
    website_id = Column(Integer, ForeignKey("wedding_websites.id"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    order_index = Column(Integer, default=0, nullable=False)

class WebsiteTimelineItem(Base):
    __tablename__ = "website_timeline_items"

    id = Column(Integer, primary_key=True, index=True)
    website_id = Column(Integer, ForeignKey("wedding_websites.id"), nullable=False, index=True)
    time = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    order_index = Column(Integer, default=0, nullable=False)

class WebsitePhoto(Base):
    __tablename__ = "website_photos"

    id = Column(Integer, primary_key=True, index=True)
    website_id = Column(Integer, ForeignKey("wedding_websites.id"), nullable=False, index=True)
    url = Column(String(1000), nullable=False)
    caption = Column(String(500))
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
