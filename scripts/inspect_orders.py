#!/usr/bin/env python3
"""
Helper script to inspect the orders database.

Safe utility for debugging and CI verification.
Prints the last N rows from the orders table, and optionally runs the
summary path for one order (using whatever provider keys are set in the
environment).

Usage:
    python scripts/inspect_orders.py [--db PATH] [--limit N] [--summarize ORDER_ID]
"""

import argparse
import json
import sqlite3
import sys
from contextlib import closing
from pathlib import Path

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Config  # noqa: E402
from ordering import SummaryOrchestrator  # noqa: E402
from storage import SQLiteStore  # noqa: E402


def inspect_database(db_path: str, limit: int = 10):
    """
    Inspect and display the most recent orders.

    Args:
        db_path: Path to SQLite database file
        limit: Maximum number of rows to display
    """
    try:
        with closing(sqlite3.connect(db_path)) as conn:
            cursor = conn.cursor()

            # Check if table exists
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='orders'"
            )

            if not cursor.fetchone():
                print(f"✗ Table 'orders' does not exist in {db_path}")
                return

            cursor.execute("SELECT COUNT(*) FROM orders")
            total_rows = cursor.fetchone()[0]

            print(f"Orders Database: {db_path}")
            print(f"Total rows: {total_rows}")
            print()

            if total_rows == 0:
                print("(Empty - no orders stored yet)")
                return

            cursor.execute(
                """
                SELECT o.id, u.email, o.preference, o.address, o.pickup_time, o.created_at
                FROM orders o JOIN users u ON u.id = o.user_id
                ORDER BY o.created_at DESC, o.id DESC
                LIMIT ?
                """,
                (limit,)
            )

            rows = cursor.fetchall()

            print(f"Last {min(limit, total_rows)} orders:")
            print("-" * 100)

            for order_id, email, preference, address, pickup_time, created_at in rows:
                print(f"\n[{order_id}] {preference} for {email}")
                print(f"    Address: {address or '(none)'}")
                print(f"    Pickup time: {pickup_time or '(none)'}")
                print(f"    Created: {created_at}")

            print()
            print("-" * 100)
            print(f"✓ Database healthy ({total_rows} total orders)")

    except sqlite3.Error as e:
        print(f"✗ Database error: {str(e)}")


def summarize_order(db_path: str, order_id: int) -> int:
    """Print the summary result for one order as JSON. Returns an exit code."""
    with closing(sqlite3.connect(db_path)) as conn:
        row = conn.execute("SELECT user_id FROM orders WHERE id = ?", (order_id,)).fetchone()

    if row is None:
        print(f"✗ Order {order_id} not found")
        return 1

    record = SQLiteStore(db_path=db_path).get_order(order_id, row[0])
    result = SummaryOrchestrator().produce_summary(record.to_facts())
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Inspect the orders database"
    )
    parser.add_argument(
        "--db",
        default=Config.DATABASE_PATH,
        help=f"Path to SQLite database (default: {Config.DATABASE_PATH})",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Number of rows to display (default: 10)",
    )
    parser.add_argument(
        "--summarize",
        type=int,
        metavar="ORDER_ID",
        help="Generate the summary for this order instead of listing",
    )

    args = parser.parse_args()

    if not Path(args.db).exists():
        print(f"✗ Database file not found: {args.db}")
        sys.exit(1)

    if args.summarize is not None:
        sys.exit(summarize_order(args.db, args.summarize))

    inspect_database(args.db, limit=args.limit)


if __name__ == "__main__":
    main()
