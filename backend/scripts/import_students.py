"""CLI script to bulk-load students from a CSV file into the record DB.

Usage: python scripts/import_students.py students.csv

Expected header: name,email,phone,dateOfBirth (phone and dateOfBirth may
be blank). Rows go through the same validation as the API; bad rows are
reported and skipped.
"""
import sys
import argparse
import csv
import pathlib
# Ensure `backend/` is on sys.path so `student_records` imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from pydantic import ValidationError
from sqlmodel import Session
from student_records.database import engine, create_db_and_tables
from student_records.repositories import SqlStudentRepository
from student_records.schemas import StudentIn, collect_field_errors
from student_records.services import StudentService


def import_rows(svc: StudentService, rows) -> dict:
    """Create a student per CSV row; return created/error counts."""
    created = 0
    errors = []
    for line_no, row in enumerate(rows, start=2):
        data = {k: (v.strip() or None) if isinstance(v, str) else v for k, v in row.items() if k}
        data["name"] = data.get("name") or ""
        data["email"] = data.get("email") or ""
        try:
            payload = StudentIn.model_validate(data)
        except ValidationError as e:
            errors.append({'line': line_no, 'errors': collect_field_errors(e.errors())})
            continue
        svc.create(payload)
        created += 1
    return {'created': created, 'errors': errors}


def main(csv_path: pathlib.Path):
    if not csv_path.exists():
        print(f'CSV file not found at {csv_path}')
        return
    create_db_and_tables()
    with open(csv_path, newline="", encoding="utf-8-sig") as fh, Session(engine) as session:
        result = import_rows(StudentService(SqlStudentRepository(session)), csv.DictReader(fh))
    for err in result['errors']:
        print(f"Line {err['line']}: {err['errors']}")
    print(f"Created students: {result['created']}, rejected rows: {len(result['errors'])}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('csv_path', type=pathlib.Path, help='CSV file with a name,email,phone,dateOfBirth header')
    args = parser.parse_args()
    main(args.csv_path)
