#!/usr/bin/env python3
"""
Bootstrap the account and job tables.

Run once against a fresh database (or any time; existing tables are left
untouched):

    python -m jobtracker.migrate
"""

import sys

from sqlalchemy import inspect

from .config import DATABASE_URL
from .database import create_db_engine, init_db
from .models import Job, User

EXPECTED_TABLES = {
    User.__tablename__: {c.name for c in User.__table__.columns},
    Job.__tablename__: {c.name for c in Job.__table__.columns},
}


def migrate(database_url: str = DATABASE_URL) -> bool:
    print("Initializing database tables...")
    engine = create_db_engine(database_url)
    try:
        init_db(engine)
        print("✓ Database initialized successfully")

        inspector = inspect(engine)
        ok = True
        for table, expected in EXPECTED_TABLES.items():
            if not inspector.has_table(table):
                print(f"✗ Table {table} not found")
                ok = False
                continue
            existing = {c["name"] for c in inspector.get_columns(table)}
            missing = sorted(expected - existing)
            if missing:
                # create_all never alters an existing table, so this needs a manual migration.
                print(f"✗ Table {table} is missing columns: {', '.join(missing)}")
                ok = False
            else:
                print(f"✓ Table {table} up to date")
        return ok
    finally:
        engine.dispose()


if __name__ == "__main__":
    success = migrate()
    sys.exit(0 if success else 1)
