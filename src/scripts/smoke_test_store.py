"""Exercise the scoped store end to end against a real file.

Writes two people in one scope, reads them back in a second scope, then shows
that a failing scope leaves the file untouched.

Usage:

    PYTHONPATH=src python3 -m scripts.smoke_test_store --db data/smoke.db
"""

from __future__ import annotations

import argparse
from pathlib import Path

from app.logging_config import setup_logging
from app.settings import get_settings
from core.errors import StoreError, format_error_report
from infra.db.repositories import PeopleRepo
from infra.db.session import Store


def run(store: Store) -> list[tuple]:
    with store.scope() as db:
        people = PeopleRepo(db)
        people.create_table()
        people.add("Alice", 30)
        people.add("Bob", 25)

    try:
        with store.scope() as db:
            PeopleRepo(db).add("Mallory", 99)
            db.execute("INSERT INTO no_such_table VALUES (1)")
    except StoreError as e:
        print(f"Failing scope reported: {format_error_report(e)}")

    with store.scope() as db:
        return [person.as_row() for person in PeopleRepo(db).list_all()]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--db", type=Path, help="Store file (default: APP_DB_PATH)")
    parser.add_argument(
        "--fresh", action="store_true", help="Delete the store file before running"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings)
    target = args.db or settings.db_path
    if args.fresh and target.exists():
        target.unlink()

    store = Store(target, settings)
    try:
        rows = run(store)
    except StoreError as e:
        print(f"❌ {format_error_report(e)}")
        return 1

    for row in rows:
        print(row)
    print(f"✅ {len(rows)} row(s) in {store.target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
