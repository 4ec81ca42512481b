# backend/scripts/validate_visitor_csv.py
"""
Dry-run a bulk visitor CSV before uploading it.
Runs the same per-row validation as POST /api/visitors/bulk against a
throwaway in-memory context and prints which rows would be accepted.
"""

import argparse
import sys

from societydesk.context import build_context
from societydesk.exceptions import ValidationError
from societydesk.models.enums import Role
from societydesk.models.schemas import Actor
from societydesk.services.csv_service import parse_visitor_csv


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("csv_path", help="CSV with Name, Phone, Email, ID Number, Purpose, Visit Date, Visit Time")
    parser.add_argument("--host-id", default="admin", help="host user id recorded on the visitors")
    parser.add_argument("--apartment", default="", help="host apartment, e.g. A-101")
    args = parser.parse_args()

    with open(args.csv_path, encoding="utf-8") as fh:
        text = fh.read()

    try:
        rows = parse_visitor_csv(text)
    except ValidationError as e:
        print(f"❌ {e.message}")
        sys.exit(1)

    ctx = build_context(seed=False)
    actor = Actor(user_id=args.host_id, role=Role.ADMIN, name=args.host_id, apartment_no=args.apartment or None)
    result = ctx.visitor_service.bulk_register(actor, rows)

    print(f"\n=== {args.csv_path} ===")
    print(f"Rows: {len(rows)} | accepted: {result.accepted_count} | rejected: {result.rejected_count}")

    for v in result.accepted:
        print(f"  ✓ {v.name} ({v.phone}) visit={v.visit_date} {v.visit_time:%H:%M}")
    for r in result.rejected:
        print(f"  ✗ row {r.row}: {', '.join(r.errors)}")

    sys.exit(0 if result.rejected_count == 0 else 2)


if __name__ == "__main__":
    main()
