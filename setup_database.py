#!/usr/bin/env python3
"""
Create or migrate the Appointment Booking SQLite database.

The API applies migrations on startup as well; this script lets you
prepare the database ahead of time, for example in a deployment step.

Usage:
    python setup_database.py --db ./appointment_booking.db

If --db is omitted, the path configured via DATABASE_URL is used.
"""

import argparse
import os
import sys

from appointment_booking_api.app.core.db import get_database_path, init_db


def main() -> None:
    ap = argparse.ArgumentParser(description="Apply Appointment Booking database migrations (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file (defaults to DATABASE_URL)")
    args = ap.parse_args()

    db_path = os.path.abspath(args.db) if args.db else get_database_path()
    parent = os.path.dirname(db_path)
    if parent and not os.path.isdir(parent):
        print(f"[!] Directory not found: {parent}", file=sys.stderr)
        sys.exit(1)

    version = init_db(db_path)
    print(f"[+] Database {db_path} is at schema version {version}")


if __name__ == "__main__":
    main()
