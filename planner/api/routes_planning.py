"""
Checklist, timeline, vendor and budget routes
"""

from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from planner.api.deps import event_access, require_employee
from planner.core.db import get_db
from planner.core.errors import NotFound
from planner.models import ChecklistItem, TimelineDay, TimelineEvent, Vendor, BudgetItem
from planner.schemas.planning import (
    ChecklistItemCreate, ChecklistItemUpdate, ChecklistItemResponse,
    TimelineDayCreate, TimelineDayUpdate, TimelineDayResponse,
    TimelineEventCreate, TimelineEventUpdate, TimelineEventResponse,
    VendorCreate, VendorUpdate, VendorResponse,
    BudgetItemCreate, BudgetItemUpdate, BudgetItemResponse,
)
from planner.services.auth_service import Principal
from planner.services.crud import CRUDBase
from planner.services.repositories import EventRepo
from planner.utils.responses import success_response

router = APIRouter()

checklist_crud = CRUDBase[ChecklistItem, ChecklistItemCreate, ChecklistItemUpdate](
    ChecklistItem, "Checklist item", order_by=[ChecklistItem.completed, ChecklistItem.order_index, ChecklistItem.id]
)
timeline_day_crud = CRUDBase[TimelineDay, TimelineDayCreate, TimelineDayUpdate](
    TimelineDay, "Timeline day", order_by=[TimelineDay.order_index, TimelineDay.id]
)
timeline_event_crud = CRUDBase[TimelineEvent, TimelineEventCreate, TimelineEventUpdate](
    TimelineEvent, "Timeline event"
)
vendor_crud = CRUDBase[Vendor, VendorCreate, VendorUpdate](Vendor, "Vendor", order_by=[Vendor.category, Vendor.name])
budget_crud = CRUDBase[BudgetItem, BudgetItemCreate, BudgetItemUpdate](
    BudgetItem, "Budget item", order_by=[BudgetItem.category, BudgetItem.id]
)

def _check_vendor(db: Session, event_id: int, vendor_id) -> None:
    if vendor_id is None:
        return
    vendor = vendor_crud.get(db, vendor_id)
    if not vendor or vendor.event_id != event_id:
        raise NotFound("Vendor")

# -------- Checklist --------

@router.get("/events/{event_id}/checklist")
def list_checklist(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("checklist"))
):
    EventRepo.get_or_404(db, event_id)
    items = checklist_crud.list_for_event(db, event_id)
    return success_response(
        message="Checklist retrieved",
        data=[ChecklistItemResponse.model_validate(i) for i in items]
    )

@router.post("/events/{event_id}/checklist", status_code=201)
def create_checklist_item(
    event_id: int,
    item: ChecklistItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    obj = checklist_crud.create(db, item, extra={"event_id": event_id})
    return success_response(message="Checklist item created", data=ChecklistItemResponse.model_validate(obj), status_code=201)

@router.put("/checklist/{item_id}")
def update_checklist_item(
    item_id: int,
    item: ChecklistItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = checklist_crud.get_or_404(db, item_id)
    data = item.model_dump(exclude_unset=True)
    if "completed" in data:
        data["completed_at"] = datetime.utcnow() if data["completed"] else None
    obj = checklist_crud.update(db, obj, data)
    return success_response(message="Checklist item updated", data=ChecklistItemResponse.model_validate(obj))

@router.post("/checklist/{item_id}/toggle")
def toggle_checklist_item(
    item_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    """Flip an item between done and not done"""
    obj = checklist_crud.get_or_404(db, item_id)
    completed = not obj.completed
    obj = checklist_crud.update(db, obj, {
        "completed": completed,
        "completed_at": datetime.utcnow() if completed else None
    })
    return success_response(message="Checklist item updated", data=ChecklistItemResponse.model_validate(obj))

@router.delete("/checklist/{item_id}")
def delete_checklist_item(
    item_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    checklist_crud.remove(db, item_id)
    return success_response(message="Checklist item deleted")

# -------- Timeline --------

@router.get("/events/{event_id}/timeline")
def list_timeline(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(event_access("timeline"))
):
    """Timeline days with their events in running order"""
    EventRepo.get_or_404(db, event_id)
    days = timeline_day_crud.list_for_event(db, event_id)
    return success_response(
        message="Timeline retrieved",
        data=[TimelineDayResponse.model_validate(d) for d in days]
    )

@router.post("/events/{event_id}/timeline/days", status_code=201)
def create_timeline_day(
    event_id: int,
    day: TimelineDayCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    obj = timeline_day_crud.create(db, day, extra={"event_id": event_id})
    return success_response(message="Timeline day created", data=TimelineDayResponse.model_validate(obj), status_code=201)

@router.put("/timeline/days/{day_id}")
def update_timeline_day(
    day_id: int,
    day: TimelineDayUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = timeline_day_crud.update(db, timeline_day_crud.get_or_404(db, day_id), day)
    return success_response(message="Timeline day updated", data=TimelineDayResponse.model_validate(obj))

@router.delete("/timeline/days/{day_id}")
def delete_timeline_day(
    day_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    timeline_day_crud.remove(db, day_id)
    return success_response(message="Timeline day deleted")

@router.post("/timeline/days/{day_id}/events", status_code=201)
def create_timeline_event(
    day_id: int,
    item: TimelineEventCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    timeline_day_crud.get_or_404(db, day_id)
    obj = timeline_event_crud.create(db, item, extra={"day_id": day_id})
    return success_response(message="Timeline event created", data=TimelineEventResponse.model_validate(obj), status_code=201)

@router.put("/timeline/events/{item_id}")
def update_timeline_event(
    item_id: int,
    item: TimelineEventUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = timeline_event_crud.update(db, timeline_event_crud.get_or_404(db, item_id), item)
    return success_response(message="Timeline event updated", data=TimelineEventResponse.model_validate(obj))

@router.delete("/timeline/events/{item_id}")
def delete_timeline_event(
    item_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    timeline_event_crud.remove(db, item_id)
    return success_response(message="Timeline event deleted")

# -------- Vendors --------

@router.get("/events/{event_id}/vendors")
def list_vendors(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    vendors = vendor_crud.list_for_event(db, event_id)
    return success_response(message="Vendors retrieved", data=[VendorResponse.model_validate(v) for v in vendors])

@router.post("/events/{event_id}/vendors", status_code=201)
def create_vendor(
    event_id: int,
    vendor: VendorCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    obj = vendor_crud.create(db, vendor, extra={"event_id": event_id})
    return success_response(message="Vendor created", data=VendorResponse.model_validate(obj), status_code=201)

@router.put("/vendors/{vendor_id}")
def update_vendor(
    vendor_id: int,
    vendor: VendorUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = vendor_crud.update(db, vendor_crud.get_or_404(db, vendor_id), vendor)
    return success_response(message="Vendor updated", data=VendorResponse.model_validate(obj))

@router.delete("/vendors/{vendor_id}")
def delete_vendor(
    vendor_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    vendor_crud.get_or_404(db, vendor_id)
    db.query(BudgetItem).filter(BudgetItem.vendor_id == vendor_id).update(
        {BudgetItem.vendor_id: None}, synchronize_session=False
    )
    vendor_crud.remove(db, vendor_id)
    return success_response(message="Vendor deleted")

# -------- Budget --------

@router.get("/events/{event_id}/budget")
def list_budget(
    event_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    """Budget lines with totals"""
    EventRepo.get_or_404(db, event_id)
    items = budget_crud.list_for_event(db, event_id)
    return success_response(
        message="Budget retrieved",
        data={
            "items": [BudgetItemResponse.model_validate(i) for i in items],
            "total_estimated": sum(i.estimated_cost or 0 for i in items),
            "total_actual": sum(i.actual_cost or 0 for i in items),
            "total_paid": sum(i.paid_amount or 0 for i in items)
        }
    )

@router.post("/events/{event_id}/budget", status_code=201)
def create_budget_item(
    event_id: int,
    item: BudgetItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    EventRepo.get_or_404(db, event_id)
    _check_vendor(db, event_id, item.vendor_id)
    obj = budget_crud.create(db, item, extra={"event_id": event_id})
    return success_response(message="Budget item created", data=BudgetItemResponse.model_validate(obj), status_code=201)

@router.put("/budget/{item_id}")
def update_budget_item(
    item_id: int,
    item: BudgetItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    obj = budget_crud.get_or_404(db, item_id)
    _check_vendor(db, obj.event_id, item.vendor_id)
    obj = budget_crud.update(db, obj, item)
    return success_response(message="Budget item updated", data=BudgetItemResponse.model_validate(obj))

@router.delete("/budget/{item_id}")
def delete_budget_item(
    item_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_employee)
):
    budget_crud.remove(db, item_id)
    return success_response(message="Budget item deleted")
