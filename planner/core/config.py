"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wedding_planner.db")

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "720"))
    FIRST_ADMIN_USERNAME: str = os.getenv("FIRST_ADMIN_USERNAME", "admin")
    FIRST_ADMIN_PASSWORD: str | None = os.getenv("FIRST_ADMIN_PASSWORD")

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    VENUE_NAME: str = os.getenv("VENUE_NAME", "Manor By The Lake")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # File limits
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/png", "image/jpeg", "image/gif", "image/webp"]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    # Floor plan canvas (pixels)
    CANVAS_WIDTH: int = 1200
    CANVAS_HEIGHT: int = 600
    CANVAS_PADDING: int = 32
    SEAT_SIZE: int = 32
    ROUND_TABLE_SIZE: int = 96
    RECT_TABLE_WIDTH: int = 160
    RECT_TABLE_HEIGHT: int = 80
    ROUND_SEAT_RADIUS: int = 70
    RECT_SEAT_RADIUS: int = 60
    ROTATION_STEP: int = 15
    MAX_SEATS_PER_TABLE: int = 20

    # Accommodation
    ROOM_CAPACITY: int = 2

    class Config:
        env_file = ".env"

settings = Settings()
