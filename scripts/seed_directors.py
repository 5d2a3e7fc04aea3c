#!/usr/bin/env python3
"""
Seed script to create regions and the directors assigned to them.

Usage:
    # Seed from a CSV with columns: name,email,region
    python scripts/seed_directors.py directors.csv

Safe to re-run: existing regions (by name) and directors (by email) are
left as they are.
"""
import csv
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from salesreports.database import SessionLocal, init_db
from salesreports.models import Director, Region


def read_directors(path):
    """Rows of {name, email, region} from a CSV file."""
    with open(path, newline="", encoding="utf-8") as f:
        return [
            {
                "name": (row.get("name") or "").strip(),
                "email": (row.get("email") or "").strip().lower(),
                "region": (row.get("region") or "").strip(),
            }
            for row in csv.DictReader(f)
        ]


def seed_directors(rows):
    """Create missing regions and directors."""
    db = SessionLocal()
    created = []
    skipped = []
    errors = []

    try:
        regions = {r.name: r for r in db.query(Region).all()}

        for row in rows:
            if not row["name"] or not row["email"]:
                errors.append(f"{row} - name and email are required")
                continue

            region = None
            if row["region"]:
                region = regions.get(row["region"])
                if region is None:
                    region = Region(name=row["region"])
                    db.add(region)
                    db.flush()
                    regions[region.name] = region
                    created.append(f"Region {region.name}")

            existing = db.query(Director).filter(Director.email == row["email"]).first()
            if existing:
                skipped.append(f"{row['name']} ({row['email']}) - already exists")
                continue

            db.add(Director(
                name=row["name"],
                email=row["email"],
                region=region.name if region else "",
                region_id=region.id if region else None,
            ))
            created.append(f"{row['name']} ({row['email']}) - {row['region'] or 'no region'}")

        db.commit()

    except Exception as e:
        db.rollback()
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        db.close()

    # Print summary
    print("\n=== Director Seed Summary ===\n")

    if created:
        print("Created:")
        for item in created:
            print(f"  + {item}")

    if skipped:
        print("\nSkipped (already exist):")
        for item in skipped:
            print(f"  - {item}")

    if errors:
        print("\nErrors:")
        for item in errors:
            print(f"  ! {item}")

    print(f"\nTotal: {len(created)} created, {len(skipped)} skipped, {len(errors)} errors")

    if errors:
        sys.exit(1)


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    init_db()
    seed_directors(read_directors(sys.argv[1]))
