"""
Menu and drinks routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from planner.api.deps import event_access, require_employee
from planner.core.db import get_db
from planner.core.errors import NotFound
from planner.models import MenuItem, Drink
from planner.schemas.menu import (
    MenuItemCreate, MenuItemUpdate, MenuItemResponse, DrinkCreate, DrinkUpdate, DrinkResponse
)
from planner.services.auth_service import Principal
from planner.services.crud import CRUDBase
from planner.services.repositories import EventRepo
from planner.utils.responses import success_response

router = APIRouter()

menu_crud = CRUDBase[MenuItem, MenuItemCreate, MenuItemUpdate](
    MenuItem, "Menu item", order_by=[MenuItem.order_index, MenuItem.id]
)
drink_crud = CRUDBase[Drink, DrinkCreate, DrinkUpdate](
    Drink, "Drink", order_by=[Drink.order_index, Drink.id]
)

@router.get("/events/{event_id}/menu")
def list_menu(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("menu"))
):
    """Menu items grouped by course"""
    EventRepo.get_or_404(db, event_id)
    courses = {}
    for item in menu_crud.list_for_event(db, event_id):
        courses.setdefault(item.course, []).append(MenuItemResponse.model_validate(item))
    return success_response(
        message="Menu retrieved",
        data=[{"course": course, "items": items} for course, items in courses.items()]
    )

@router.post("/events/{event_id}/menu", status_code=201)
def create_menu_item(
    event_id: int,
    item: MenuItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    obj = menu_crud.create(db, item, extra={"event_id": event_id})
    return success_response(message="Menu item created", data=MenuItemResponse.model_validate(obj), status_code=201)

@router.put("/menu/{item_id}")
def update_menu_item(
    item_id: int,
    item: MenuItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = menu_crud.update(db, menu_crud.get_or_404(db, item_id), item)
    return success_response(message="Menu item updated", data=MenuItemResponse.model_validate(obj))

@router.delete("/menu/{item_id}")
def delete_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    menu_crud.remove(db, item_id)
    return success_response(message="Menu item deleted")

@router.delete("/events/{event_id}/menu/courses/{course}")
def delete_course(
    event_id: int,
    course: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    """Remove a whole course and its items"""
    deleted = db.query(MenuItem).filter(
        MenuItem.event_id == event_id,
        MenuItem.course == course
    ).delete(synchronize_session=False)
    if not deleted:
        raise NotFound("Course")
    db.commit()
    return success_response(message=f"Course '{course}' deleted", data={"deleted_items": deleted})

# -------- Drinks --------

@router.get("/events/{event_id}/drinks")
def list_drinks(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("menu"))
):
    EventRepo.get_or_404(db, event_id)
    drinks = drink_crud.list_for_event(db, event_id)
    return success_response(message="Drinks retrieved", data=[DrinkResponse.model_validate(d) for d in drinks])

@router.post("/events/{event_id}/drinks", status_code=201)
def create_drink(
    event_id: int,
    drink: DrinkCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    obj = drink_crud.create(db, drink, extra={"event_id": event_id})
    return success_response(message="Drink created", data=DrinkResponse.model_validate(obj), status_code=201)

@router.put("/drinks/{drink_id}")
def update_drink(
    drink_id: int,
    drink: DrinkUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = drink_crud.update(db, drink_crud.get_or_404(db, drink_id), drink)
    return success_response(message="Drink updated", data=DrinkResponse.model_validate(obj))

@router.delete("/drinks/{drink_id}")
def delete_drink(
    drink_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    drink_crud.remove(db, drink_id)
    return success_response(message="Drink deleted")
