"""
Wedding website schemas
"""

from typing import Optional
from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"

class WebsiteUpdate(BaseModel):
    slug: Optional[str] = Field(None, min_length=3, max_length=100, pattern=SLUG_PATTERN)
    is_published: Optional[bool] = None
    welcome_message: Optional[str] = None
    our_story: Optional[str] = None
    rsvp_enabled: Optional[bool] = None
    theme: Optional[str] = Field(None, max_length=50)

class RegistryLinkCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=1000)
    order_index: int = 0

class FaqItemCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    order_index: int = 0

class WebsiteTimelineItemCreate(BaseModel):
    time: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    order_index: int = 0

class PhotoUpload(BaseModel):
    """Photo sent as a base64 data payload"""
    filename: str
    content_type: str
    data: str
    caption: Optional[str] = None
    order_index: int = 0
