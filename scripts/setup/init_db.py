"""
Initialize database — creates all tables and optionally seeds a demo area.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed]
"""

import argparse
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from sqlalchemy import inspect, text

from parkslot.config import settings
from parkslot.database import SessionLocal, create_tables, engine
from parkslot.services import inventory_store

DEMO_LAYOUT = (
    [{"label": f"A-{i:02d}", "section": "A", "slot_class": "car"} for i in range(1, 9)]
    + [{"label": f"M-{i:02d}", "section": "M", "slot_class": "motorcycle"} for i in range(1, 5)]
    + [{"label": f"B-{i:02d}", "section": "B", "slot_class": "bike"} for i in range(1, 7)]
)


def seed_demo_area():
    db = SessionLocal()
    try:
        area = inventory_store.create_area(db, "Main Campus Lot", "North gate")
        inventory_store.add_slots(db, area.id, DEMO_LAYOUT)
        print(f"✅ Seeded area {area.id} '{area.name}' with {len(DEMO_LAYOUT)} slots")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create tables and optionally seed demo inventory")
    parser.add_argument("--seed", action="store_true", help="provision a demo parking area")
    args = parser.parse_args()

    print("🗄️  Parkslot DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed:
        seed_demo_area()

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn parkslot.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
