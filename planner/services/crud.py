"""
Generic event-scoped CRUD for the simple planning resources
"""

from typing import TypeVar, Generic, Type, Any, Optional, List, Dict, Union
from sqlalchemy.orm import Session
from pydantic import BaseModel

from planner.core.db import Base
from planner.core.errors import NotFound

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)

class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    def __init__(self, model: Type[ModelType], label: str, order_by: Optional[List[Any]] = None):
        self.model = model
        self.label = label
        self.order_by = order_by or [model.id]

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def get_or_404(self, db: Session, id: Any) -> ModelType:
        obj = self.get(db, id)
        if not obj:
            raise NotFound(self.label)
        return obj

    def list_for_event(self, db: Session, event_id: int) -> List[ModelType]:
        return db.query(self.model).filter(self.model.event_id == event_id).order_by(*self.order_by).all()

    def create(self, db: Session, obj_in: CreateSchema, extra: Optional[Dict[str, Any]] = None) -> ModelType:
        data = obj_in.model_dump()
        if extra:
            data.update(extra)
        obj = self.model(**data)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: Union[UpdateSchema, Dict[str, Any]]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for field, value in data.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, id: Any) -> ModelType:
        obj = self.get_or_404(db, id)
        db.delete(obj)
        db.commit()
        return obj
