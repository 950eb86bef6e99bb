"""
Login for employees and couples
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from planner.core.config import settings
from planner.core.errors import Unauthorized
from planner.core.security import create_access_token, hash_password, verify_password
from planner.models import User, CoupleAccount

logger = logging.getLogger(__name__)

@dataclass
class Principal:
    """Who is making a request.

    Employees carry ``event_id=None``; a couple principal is a grant scoped
    to exactly one event.
    """
    kind: str
    id: int
    name: str
    role: str
    event_id: Optional[int] = None

    @property
    def is_employee(self) -> bool:
        return self.kind == "employee"

    @property
    def is_admin(self) -> bool:
        return self.kind == "employee" and self.role == "admin"

class AuthService:
    @staticmethod
    def login(username: str, password: str, role: str, db: Session) -> dict:
        """Check credentials and issue a bearer token"""
        username = (username or "").strip()

        if role == "couple":
            account = db.query(CoupleAccount).filter(CoupleAccount.username == username).first()
            if not account or not verify_password(password, account.password_hash):
                logger.warning(f"Failed couple login for '{username}'")
                raise Unauthorized("Invalid username or password")
            if not account.event.couple_can_view:
                raise Unauthorized("The couple portal is not available for this event yet")

            account.last_signed_in = datetime.utcnow()
            db.commit()
            token = create_access_token(
                subject=str(account.id), kind="couple", role="couple", event_id=account.event_id
            )
            return {"access_token": token, "token_type": "bearer", "kind": "couple", "role": "couple", "event_id": account.event_id}

        user = db.query(User).filter(User.username == username).first()
        if not user or not user.is_active or not verify_password(password, user.password_hash):
            logger.warning(f"Failed employee login for '{username}'")
            raise Unauthorized("Invalid username or password")

        user.last_signed_in = datetime.utcnow()
        db.commit()
        token = create_access_token(subject=str(user.id), kind="employee", role=user.role)
        return {"access_token": token, "token_type": "bearer", "kind": "employee", "role": user.role, "event_id": None}

    @staticmethod
    def resolve_principal(payload: dict, db: Session) -> Principal:
        """Turn a decoded token into a live principal; revoked accounts fail"""
        try:
            subject_id = int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise Unauthorized("Invalid token")

        if payload["kind"] == "couple":
            account = db.query(CoupleAccount).filter(CoupleAccount.id == subject_id).first()
            if not account or account.event_id != payload.get("event_id"):
                raise Unauthorized("Session is no longer valid")
            return Principal(
                kind="couple",
                id=account.id,
                name=account.event.couple_display_name,
                role="couple",
                event_id=account.event_id
            )

        user = db.query(User).filter(User.id == subject_id).first()
        if not user or not user.is_active:
            raise Unauthorized("Session is no longer valid")
        return Principal(kind="employee", id=user.id, name=user.name, role=user.role)

    @staticmethod
    def bootstrap_admin(db: Session) -> Optional[User]:
        """Create the first admin from settings when no admin exists"""
        if not settings.FIRST_ADMIN_PASSWORD:
            return None
        if db.query(User).filter(User.role == "admin").first():
            return None

        admin = User(
            username=settings.FIRST_ADMIN_USERNAME,
            password_hash=hash_password(settings.FIRST_ADMIN_PASSWORD),
            name="Administrator",
            role="admin",
            is_active=True
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info(f"Created initial admin user '{admin.username}'")
        return admin
