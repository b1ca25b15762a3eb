#!/usr/bin/env python3
"""
Interactive local slot picker (no HTTP server).

Usage:
  python3 scripts/picker_local.py [kind]

What it does:
- Builds a SelectionController through the project wiring
- Lets you move between days, pick a resource and a slot, and submit a booking
- Prints the slot grid after every change

Set USE_MOCK_BACKEND=true (ENV=dev) to run against the in-memory backend.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from facility_booking.domain.entities.booking_draft import BookingDraft
from facility_booking.domain.entities.resource import ResourceKind
from facility_booking.wiring.dependencies import (
    build_selection_controller,
    get_catalog_use_case,
    get_session_store,
)

MARKS = {"past": "-", "closed": "x", "booked": "#", "selected": "*", "available": " "}


def _print_header(kind: ResourceKind) -> None:
    print("\nLocal Slot Picker")
    print("-" * 60)
    print(f"kind: {kind.value}")
    print("Commands: <n> (toggle slot n), prev, next, today, date YYYY-MM-DD,")
    print("          resource <id>, login <token> [user_id], book, /quit, /help")
    print("-" * 60)


def _print_slots(controller) -> None:
    selection = controller.selection
    print(f"\n{selection.date}  resource={selection.resource_id or '-'}  status={controller.status.value}")
    if controller.advisory_message:
        print(f"({controller.advisory_message})")
    if controller.error:
        print(f"error: {controller.error}")
    for index, slot in enumerate(controller.slots, 1):
        state = controller.slot_state(slot)
        print(f"  [{MARKS[state]}] {index:2d}. {slot.display_label}  {state}")


def _read_draft(kind: ResourceKind, user_id: str | None) -> BookingDraft:
    requester = user_id or input("requester id: ").strip() or None
    if kind.is_room_like:
        return BookingDraft(
            requester_id=requester,
            participant_count=input("participants: ").strip(),
            purpose=input("purpose: ").strip(),
        )
    if kind is ResourceKind.KITCHEN:
        borrow = input("borrow equipment? [y/N]: ").strip().lower() == "y"
        return BookingDraft(requester_id=requester, borrow_equipment=borrow)
    return BookingDraft(requester_id=requester)


async def main() -> None:
    kind = ResourceKind(sys.argv[1]) if len(sys.argv) > 1 else ResourceKind.THEATER
    store = get_session_store()
    controller = build_selection_controller(kind, store.get_credential())
    _print_header(kind)

    if kind.requires_resource:
        catalog = await get_catalog_use_case().list_resources(kind, store.get_credential())
        if catalog.advisory_message:
            print(f"({catalog.advisory_message})")
        for resource in catalog.resources:
            print(f"  resource {resource.id}: {resource.display_name}")

    await controller.load()
    _print_slots(controller)

    while True:
        try:
            text = (await asyncio.to_thread(input, "\n> ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not text:
            continue
        cmd, _, arg = text.partition(" ")
        cmd = cmd.lower()

        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            _print_header(kind)
            continue
        if cmd == "login":
            token, _, user_id = arg.partition(" ")
            store.save(token, user_id or None)
            controller = build_selection_controller(
                kind, token, date=controller.selection.date, resource_id=controller.selection.resource_id
            )
            await controller.load()
        elif cmd == "prev":
            controller.previous_day()
            await controller.load()
        elif cmd == "next":
            controller.next_day()
            await controller.load()
        elif cmd == "today":
            controller.go_to_today()
            await controller.load()
        elif cmd == "date":
            await controller.change_date(arg.strip())
        elif cmd == "resource":
            try:
                await controller.change_resource(arg.strip())
            except ValueError as e:
                print(f"error: {e}")
                continue
        elif cmd == "book":
            result = await controller.submit(_read_draft(kind, store.get_user_id()))
            if result.action == "booked":
                print(f"Booked: {result.booking}")
            else:
                print(f"{result.action}: {result.message}")
        elif cmd.isdigit():
            slots = controller.slots
            index = int(cmd) - 1
            if not 0 <= index < len(slots):
                print("No such slot")
                continue
            if not controller.select_slot(slots[index]):
                print("That slot cannot be selected")
        else:
            print("Unknown command, try /help")
            continue

        _print_slots(controller)


if __name__ == "__main__":
    asyncio.run(main())
