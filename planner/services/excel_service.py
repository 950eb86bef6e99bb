"""
Spreadsheet service for guest list import/export
"""

import csv
import io
import logging
from typing import List, Dict, Tuple
import pandas as pd
from sqlalchemy.orm import Session

from planner.models import Guest
from planner.services.guest_service import full_name

logger = logging.getLogger(__name__)

class ExcelService:
    """Service for handling guest spreadsheet operations"""

    REQUIRED_COLUMNS = ['first name', 'last name']
    OPTIONAL_COLUMNS = ['email', 'group', 'guest type', 'dietary restrictions']
    GUEST_TYPES = ('day', 'evening', 'both')

    EXPORT_COLUMNS = [
        'First Name', 'Last Name', 'Email', 'Group', 'Guest Type', 'Stage',
        'Save The Date', 'RSVP Status', 'Table', 'Meal Selections',
        'Dietary Restrictions', 'Allergy Severity', 'Invitation Sent'
    ]

    @staticmethod
    def create_template() -> bytes:
        """Create Excel template with the import columns"""
        df = pd.DataFrame(columns=[
            'First Name', 'Last Name', 'Email', 'Group', 'Guest Type', 'Dietary Restrictions'
        ])

        # Add sample data for guidance
        sample_data = [
            ['Jane', 'Smith', 'jane@example.com', 'Bride family', 'both', ''],
            ['Tom', 'Smith', '', 'Bride family', 'day', 'vegetarian'],
            ['Priya', 'Shah', 'priya@example.com', 'University', 'evening', 'nut allergy'],
        ]

        for row in sample_data:
            df.loc[len(df)] = row

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()

    @staticmethod
    def map_columns(df: pd.DataFrame) -> Dict[str, str]:
        """Map normalized column names to the sheet's actual headers"""
        mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            if col_lower in ('first name', 'first_name', 'firstname'):
                mapping['first name'] = col
            elif col_lower in ('last name', 'last_name', 'lastname', 'surname'):
                mapping['last name'] = col
            elif 'email' in col_lower:
                mapping['email'] = col
            elif 'group' in col_lower:
                mapping['group'] = col
            elif 'type' in col_lower:
                mapping['guest type'] = col
            elif 'dietary' in col_lower:
                mapping['dietary restrictions'] = col
        return mapping

    @staticmethod
    def validate_excel_structure(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate Excel file structure"""
        errors = []
        mapping = ExcelService.map_columns(df)

        missing_columns = [col for col in ExcelService.REQUIRED_COLUMNS if col not in mapping]
        if missing_columns:
            errors.append(f"Missing required columns: {', '.join(missing_columns)}")

        return len(errors) == 0, errors

    @staticmethod
    def validate_data_constraints(df: pd.DataFrame) -> Tuple[bool, List[str]]:
        """Validate row values: names present, guest types known, no duplicate names"""
        errors = []
        mapping = ExcelService.map_columns(df)

        names = []
        for index, row in df.iterrows():
            line = index + 2  # header is row 1
            first = ExcelService._cell(row, mapping, 'first name')
            last = ExcelService._cell(row, mapping, 'last name')
            if not first and not last:
                continue
            if not first:
                errors.append(f"Row {line}: first name is required")

            guest_type = ExcelService._cell(row, mapping, 'guest type').lower()
            if guest_type and guest_type not in ExcelService.GUEST_TYPES:
                errors.append(f"Row {line}: guest type must be one of {', '.join(ExcelService.GUEST_TYPES)}")

            names.append(full_name(first, last).lower())

        duplicates = pd.Series(names, dtype=object).value_counts()
        for name, count in duplicates[duplicates > 1].items():
            errors.append(f"Duplicate guest '{name}' ({count} times)")

        return len(errors) == 0, errors

    @staticmethod
    def _cell(row, mapping: Dict[str, str], key: str) -> str:
        if key not in mapping:
            return ''
        value = row[mapping[key]]
        if pd.isna(value):
            return ''
        return str(value).strip()

    @staticmethod
    def process_excel_upload(
        file_content: bytes,
        event_id: int,
        db: Session
    ) -> Tuple[bool, List[str], int]:
        """Add the guests of an uploaded sheet to an event's save-the-date list"""
        try:
            df = pd.read_excel(io.BytesIO(file_content))

            valid_structure, structure_errors = ExcelService.validate_excel_structure(df)
            if not valid_structure:
                return False, structure_errors, 0

            valid_data, data_errors = ExcelService.validate_data_constraints(df)
            if not valid_data:
                return False, data_errors, 0

            mapping = ExcelService.map_columns(df)
            processed_count = 0

            for _, row in df.iterrows():
                first = ExcelService._cell(row, mapping, 'first name')
                last = ExcelService._cell(row, mapping, 'last name')
                # Skip empty rows
                if not first and not last:
                    continue

                dietary = ExcelService._cell(row, mapping, 'dietary restrictions')
                if dietary.lower() in ('none', 'nan', 'n/a'):
                    dietary = ''

                guest = Guest(
                    event_id=event_id,
                    first_name=first,
                    last_name=last,
                    name=full_name(first, last),
                    email=ExcelService._cell(row, mapping, 'email') or None,
                    group_name=ExcelService._cell(row, mapping, 'group') or None,
                    guest_type=ExcelService._cell(row, mapping, 'guest type').lower() or 'both',
                    dietary_restrictions=dietary or None,
                    has_dietary_requirements=bool(dietary),
                    meal_selections={},
                    stage=1
                )
                db.add(guest)
                processed_count += 1

            db.commit()
            logger.info(f"Imported {processed_count} guests into event {event_id}")
            return True, [], processed_count

        except Exception as e:
            db.rollback()
            logger.exception(f"Guest import failed for event {event_id}")
            return False, [f"Error processing Excel file: {str(e)}"], 0

    @staticmethod
    def guest_rows(guests: List[Guest]) -> List[Dict]:
        rows = []
        for guest in guests:
            meals = guest.meal_selections or {}
            rows.append({
                'First Name': guest.first_name,
                'Last Name': guest.last_name,
                'Email': guest.email or '',
                'Group': guest.group_name or '',
                'Guest Type': guest.guest_type,
                'Stage': guest.stage,
                'Save The Date': guest.save_the_date_response,
                'RSVP Status': guest.rsvp_status,
                'Table': guest.table_name or '',
                'Meal Selections': '; '.join(f"{course}: {item}" for course, item in meals.items()),
                'Dietary Restrictions': guest.dietary_restrictions or '',
                'Allergy Severity': guest.allergy_severity,
                'Invitation Sent': 'Yes' if guest.invitation_sent else 'No'
            })
        return rows

    @staticmethod
    def _guest_frame(event_id: int, db: Session) -> pd.DataFrame:
        guests = db.query(Guest).filter(Guest.event_id == event_id).order_by(
            Guest.last_name, Guest.first_name, Guest.id
        ).all()
        return pd.DataFrame(ExcelService.guest_rows(guests), columns=ExcelService.EXPORT_COLUMNS)

    @staticmethod
    def export_csv(event_id: int, db: Session) -> str:
        """Guest list as CSV with every field quoted"""
        df = ExcelService._guest_frame(event_id, db)
        return df.to_csv(index=False, quoting=csv.QUOTE_ALL)

    @staticmethod
    def export_current_data(event_id: int, db: Session) -> bytes:
        """Export current guest data to Excel"""
        df = ExcelService._guest_frame(event_id, db)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()
