# scripts/test/simulate_bookings.py
"""
Fire concurrent booking requests at a running backend and report who got which slot.
Registers one vehicle per simulated user first. No slot should be handed out twice.
"""

import argparse
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import requests

BACKEND_URL = "http://localhost:8080/api/v1"


def register_vehicle(user: str, vehicle_class: str) -> int:
    resp = requests.post(f"{BACKEND_URL}/vehicles",
                         json={"plate_number": f"SIM-{user}", "vehicle_class": vehicle_class},
                         headers={"X-User-Id": user}, timeout=10)
    resp.raise_for_status()
    return resp.json()["id"]


def request_booking(user: str, vehicle_id: int, area_id: int) -> dict:
    resp = requests.post(f"{BACKEND_URL}/bookings",
                         json={"vehicle_id": vehicle_id, "area_id": area_id},
                         headers={"X-User-Id": user}, timeout=10)
    return resp.json()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Race booking requests against one area")
    parser.add_argument("--area", type=int, default=1)
    parser.add_argument("--users", type=int, default=20)
    parser.add_argument("--vehicle-class", default="car",
                        choices=["car", "motorcycle", "bicycle", "ebike"])
    parser.add_argument("--prefix", default="sim")
    args = parser.parse_args()

    users = [f"{args.prefix}-{i}" for i in range(args.users)]
    vehicles = {u: register_vehicle(u, args.vehicle_class) for u in users}

    with ThreadPoolExecutor(max_workers=args.users) as pool:
        results = list(pool.map(lambda u: request_booking(u, vehicles[u], args.area), users))

    statuses = Counter(r.get("status") for r in results)
    slots = Counter(r["booking"]["slot_id"] for r in results if r.get("booking"))
    doubles = {s: n for s, n in slots.items() if n > 1}

    print(f"📊 Results: {dict(statuses)}")
    print(f"🅿️  Slots held: {sorted(slots)}")
    if doubles:
        print(f"❌ Slot(s) handed out more than once: {doubles}")
    else:
        print("✅ No slot handed out twice")
