"""
CSV import/export for visitor records
"""

import csv
import io
import logging
from typing import Dict, Iterable, List

from societydesk.exceptions import ValidationError
from societydesk.models.enums import RegistrationSource
from societydesk.models.schemas import Visitor, VisitorCreateRequest

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["Name", "Phone", "Email", "ID Number", "Purpose", "Visit Date", "Visit Time"]
OPTIONAL_COLUMNS = ["Vehicle Number"]

# CSV header -> VisitorCreateRequest field
COLUMN_FIELDS: Dict[str, str] = {
    "Name": "name",
    "Phone": "phone",
    "Email": "email",
    "ID Number": "id_number",
    "Purpose": "purpose",
    "Visit Date": "visit_date",
    "Visit Time": "visit_time",
    "Vehicle Number": "vehicle_number",
}

EXPORT_COLUMNS = [
    "Name", "Phone", "Email", "ID Number", "Purpose", "Visit Date", "Visit Time",
    "Vehicle Number", "Host", "Apartment", "Status", "QR Code", "Valid Until",
    "Check In", "Check Out",
]


def parse_visitor_csv(text: str) -> List[VisitorCreateRequest]:
    """
    Turn an uploaded CSV into registration rows.
    Raises ValidationError if required columns are missing; blank lines are skipped.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    headers = [(h or "").strip() for h in (reader.fieldnames or [])]

    missing = [c for c in REQUIRED_COLUMNS if c not in headers]
    if missing:
        logger.info(f"CSV_IMPORT_MISSING_COLUMNS | missing={missing}")
        raise ValidationError(
            [f"Missing required column: {c}" for c in missing],
            message=f"Missing required columns: {', '.join(missing)}",
        )

    rows: List[VisitorCreateRequest] = []
    for raw in reader:
        values = {(k or "").strip(): (v or "").strip() for k, v in raw.items() if k is not None}
        if not any(values.values()):
            continue

        fields = {
            field: values.get(column, "")
            for column, field in COLUMN_FIELDS.items()
        }
        rows.append(
            VisitorCreateRequest(
                registration_source=RegistrationSource.BULK_IMPORT,
                **fields,
            )
        )

    logger.info(f"CSV_IMPORT_PARSED | rows={len(rows)}")
    return rows


def _fmt(value) -> str:
    if value is None:
        return ""
    return value.isoformat() if hasattr(value, "isoformat") else str(value)


def export_visitors_csv(visitors: Iterable[Visitor]) -> str:
    """Render visitors as CSV text with a header row"""
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(EXPORT_COLUMNS)
    for v in visitors:
        writer.writerow([
            v.name,
            v.phone,
            v.email,
            v.id_number,
            v.purpose,
            _fmt(v.visit_date),
            v.visit_time.strftime("%H:%M"),
            v.vehicle_number or "",
            v.host_name,
            v.host_apartment,
            v.status.value,
            v.qr_code,
            _fmt(v.valid_until),
            _fmt(v.check_in_time),
            _fmt(v.check_out_time),
        ])
    return out.getvalue()
