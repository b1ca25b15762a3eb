#!/usr/bin/env python3
"""Smoke check for a running booking API (start it with USE_MOCK_BACKEND=true for a dry run)."""

import os
import sys

import httpx


BASE_URL = os.getenv("SMOKE_BASE_URL", "http://127.0.0.1:8001")
HEADERS = {"Authorization": f"Bearer {os.getenv('SMOKE_TOKEN', 'local-token')}"}


def check_slots(kind: str, date: str | None = None, resource_id: str | None = None) -> dict | None:
    print("=" * 60)
    print(f"GET /v1/{kind}/slots")
    print("=" * 60)

    params = {key: value for key, value in {"date": date, "resource_id": resource_id}.items() if value}
    try:
        response = httpx.get(f"{BASE_URL}/v1/{kind}/slots", params=params, headers=HEADERS, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None

    data = response.json()
    print(f"✅ {data['date']} status={data['status']} closed={data['closed']}")
    if data.get("advisory_message"):
        print(f"   ({data['advisory_message']})")
    for slot in data["slots"]:
        print(f"  {slot['label']}  {slot['state']}")
    return data


def check_booking(kind: str, slots: dict | None, resource_id: str | None = None) -> bool:
    print("\n" + "=" * 60)
    print(f"POST /v1/{kind}/bookings")
    print("=" * 60)

    free = [s for s in (slots or {}).get("slots", []) if s["selectable"]]
    if not free:
        print("⚠️  No selectable slot, skipping")
        return False

    payload = {
        "date": slots["date"],
        "slot_start": free[-1]["start_instant"],
        "resource_id": resource_id,
        "requester_id": os.getenv("SMOKE_USER_ID", "local-user"),
        "participant_count": "4",
        "purpose": "Smoke check",
    }
    try:
        response = httpx.post(f"{BASE_URL}/v1/{kind}/bookings", json=payload, headers=HEADERS, timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False

    print(f"✅ Booked: {response.json()['booking']}")
    return True


def main():
    print("\n🚀 Checking Facility Booking API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn facility_booking.main:app --reload --port 8001")
        sys.exit(1)

    slots = check_slots("theater")
    check_booking("theater", slots)
    check_slots("cws")
    communal = check_slots("communal", resource_id="1")
    check_booking("communal", communal, resource_id="1")

    print("\n" + "=" * 60)
    print("✅ Checks complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
