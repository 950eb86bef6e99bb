"""
Staff account management (administrators only)
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from planner.api.deps import require_admin
from planner.core.db import get_db
from planner.core.errors import Conflict, NotFound
from planner.core.security import hash_password
from planner.models import User, Event
from planner.schemas.auth import EmployeeCreate, EmployeeUpdate, EmployeeResponse
from planner.services.auth_service import Principal
from planner.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("Employee")
    return user

@router.get("")
def list_employees(db: Session = Depends(get_db), admin: Principal = Depends(require_admin)):
    users = db.query(User).order_by(User.name).all()
    return success_response(
        message="Employees retrieved",
        data=[EmployeeResponse.model_validate(u) for u in users]
    )

@router.post("", status_code=201)
def create_employee(
    employee: EmployeeCreate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin)
):
    if db.query(User).filter(User.username == employee.username).first():
        raise Conflict(f"Username '{employee.username}' is already in use")

    user = User(
        username=employee.username,
        password_hash=hash_password(employee.password),
        name=employee.name,
        email=employee.email,
        role=employee.role,
        is_active=True
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Admin {admin.id} created employee {user.id} ({user.role})")
    return success_response(
        message="Employee created successfully",
        data=EmployeeResponse.model_validate(user),
        status_code=201
    )

@router.put("/{user_id}")
def update_employee(
    user_id: int,
    employee: EmployeeUpdate,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin)
):
    user = _get_user(db, user_id)
    data = employee.model_dump(exclude_unset=True)
    password = data.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
    if user.id == admin.id and (data.get("is_active") is False or data.get("role") == "employee"):
        raise Conflict("You cannot remove your own administrator access")
    for field, value in data.items():
        if value is not None:
            setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return success_response(message="Employee updated", data=EmployeeResponse.model_validate(user))

@router.delete("/{user_id}")
def delete_employee(
    user_id: int,
    db: Session = Depends(get_db),
    admin: Principal = Depends(require_admin)
):
    user = _get_user(db, user_id)
    if user.id == admin.id:
        raise Conflict("You cannot delete your own account")
    db.query(Event).filter(Event.created_by_id == user.id).update(
        {Event.created_by_id: None}, synchronize_session=False
    )
    db.delete(user)
    db.commit()
    logger.info(f"Admin {admin.id} deleted employee {user_id}")
    return success_response(message="Employee deleted")
