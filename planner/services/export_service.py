"""
Printable event document
"""

from collections import Counter
from datetime import datetime
from typing import Dict, List
from sqlalchemy.orm import Session

from planner.models import Guest, MenuItem, TimelineDay
from planner.services.repositories import EventRepo
from planner.services.seating_service import SeatingService
from planner.utils.rendering import render_template

class ExportService:
    @staticmethod
    def meal_summary(guests: List[Guest]) -> Dict[str, Dict[str, int]]:
        """Count of each chosen item per course"""
        counts: Dict[str, Counter] = {}
        for guest in guests:
            for course, item in (guest.meal_selections or {}).items():
                counts.setdefault(course, Counter())[item] += 1
        return {course: dict(counter.most_common()) for course, counter in counts.items()}

    @staticmethod
    def render_event_html(event_id: int, db: Session) -> str:
        """HTML for the browser's print-to-PDF: cover, guests, menu, seating, timeline"""
        event = EventRepo.get_or_404(db, event_id)
        guests = db.query(Guest).filter(Guest.event_id == event_id).order_by(
            Guest.last_name, Guest.first_name, Guest.id
        ).all()
        menu_items = db.query(MenuItem).filter(MenuItem.event_id == event_id).order_by(
            MenuItem.order_index, MenuItem.id
        ).all()
        menu: Dict[str, list] = {}
        for item in menu_items:
            menu.setdefault(item.course, []).append(item)

        days = db.query(TimelineDay).filter(TimelineDay.event_id == event_id).order_by(
            TimelineDay.order_index, TimelineDay.id
        ).all()

        seating = SeatingService.get_seating_summary(event_id, db)
        tables = []
        for table in seating["tables"]:
            table = dict(table)
            table["guests"] = SeatingService.get_table_guests(table["table_id"], db)
            tables.append(table)

        return render_template(
            "event_export.html",
            event=event,
            guests=guests,
            menu=menu,
            meal_summary=ExportService.meal_summary(guests),
            seating=seating,
            tables=tables,
            timeline_days=days,
            generated_at=datetime.utcnow()
        )
