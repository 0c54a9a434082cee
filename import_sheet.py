#!/usr/bin/env python3
"""
import_sheet.py: CLI for importing an xlsx workbook into the skill tracker.

Reads the first worksheet and imports its rows without requiring the FastAPI
server to be running. All data is written to DATA_ROOT (configured in .env,
defaults to ~/Documents/skill_tracker).

Usage:
    python import_sheet.py <team-members|skills|skill-ratings> <file.xlsx>

Example:
    python import_sheet.py skill-ratings ratings-week-20.xlsx
"""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path

# Ensure the src/ directory is on the path so skill_tracker imports resolve
# when running this script directly from the repo root.
_SRC = os.path.join(os.path.dirname(__file__), "src")
if _SRC not in sys.path:
    sys.path.insert(0, _SRC)


def main() -> None:
    kinds = ("team-members", "skills", "skill-ratings")
    if len(sys.argv) < 3 or sys.argv[1] not in kinds:
        print(f"Usage: python import_sheet.py <{'|'.join(kinds)}> <file.xlsx>")
        sys.exit(1)

    kind_arg, path = sys.argv[1], Path(sys.argv[2])
    if not path.is_file():
        print(f"File not found: {path}")
        sys.exit(1)
    start = time.time()

    # Deferred so sys.path manipulation above takes effect first.
    from skill_tracker.config import import_config, settings
    from skill_tracker.database import Base, SessionLocal, engine
    from skill_tracker.exceptions import SpreadsheetError
    from skill_tracker.schemas.imports import ImportKind
    from skill_tracker.services.importer import RowImporter
    from skill_tracker.services.spreadsheet import read_rows
    from skill_tracker.services.store import SkillStore

    print(f"Data root : {settings.data_root}")
    print(f"Database  : {settings.database_url}")
    print()

    Path(settings.data_root).mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)

    try:
        rows = read_rows(path.read_bytes())
    except SpreadsheetError as e:
        print(f"Could not read {path}: {e}")
        sys.exit(1)

    if not rows:
        print("No rows found.")
        sys.exit(1)
    if len(rows) > import_config.max_rows:
        print(f"Too many rows: {len(rows)} (max {import_config.max_rows})")
        sys.exit(1)

    db = SessionLocal()
    try:
        result = RowImporter(SkillStore(db)).import_rows(ImportKind(kind_arg), rows)
    finally:
        db.close()

    print(result.message)
    for error in result.errors:
        print(f"  row {error.row}: {error.message}")
    print(f"Done in {time.time() - start:.1f}s")
    if result.errors and not result.success:
        sys.exit(2)


if __name__ == "__main__":
    main()
