"""
Wedding Planner - FastAPI Backend
Main application entry point
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
import uvicorn

from planner.core.config import settings
from planner.core.db import engine, Base, SessionLocal
from planner.core.errors import PlannerError
from planner.api import (
    routes_auth, routes_employees, routes_events, routes_guests, routes_seating,
    routes_menu, routes_planning, routes_accommodations, routes_notes, routes_website, routes_public
)
from planner.services.auth_service import AuthService
from planner.utils.responses import error_response

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    db = SessionLocal()
    try:
        AuthService.bootstrap_admin(db)
    finally:
        db.close()
    yield
    logger.info("Application shutdown")

app = FastAPI(
    title="Wedding Planner",
    description="Backend for wedding planning: events, guests, seating, menus and RSVPs",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded website photos
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    return error_response(
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details,
        status_code=exc.status_code
    )

@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return error_response(
        message="The change conflicts with existing data",
        error_code="INTEGRITY_ERROR",
        status_code=409
    )

# Include routers; events go before guests so /guests/template.xlsx is matched first
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(routes_employees.router, prefix="/api/employees", tags=["employees"])
app.include_router(routes_events.router, prefix="/api", tags=["events"])
app.include_router(routes_guests.router, prefix="/api", tags=["guests"])
app.include_router(routes_seating.router, prefix="/api", tags=["seating"])
app.include_router(routes_menu.router, prefix="/api", tags=["menu"])
app.include_router(routes_planning.router, prefix="/api", tags=["planning"])
app.include_router(routes_accommodations.router, prefix="/api", tags=["accommodations"])
app.include_router(routes_notes.router, prefix="/api", tags=["notes"])
app.include_router(routes_website.router, prefix="/api", tags=["website"])

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
