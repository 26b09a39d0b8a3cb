from __future__ import annotations

from datetime import timedelta

from models.ripeness import Climate, ComputedWindow, ItemRule, Storage

# Which rule day-count each storage mode reads.
# Cool-dark cupboards ripen at roughly room pace; the vegetable drawer and
# the fridge both use the cool count.
STORAGE_BUCKETS: dict[Storage, str] = {
    Storage.ROOM: "room",
    Storage.COOL_DARK: "room",
    Storage.VEG_ROOM: "cool",
    Storage.FRIDGE: "cool",
}

# Upper bound on days-to-ready; keeps every window inside the calendar
MAX_RIPENING_DAYS = 365

# Intake dates need this many days before date.max (cold delta plus the window end)
INTAKE_HEADROOM_DAYS = MAX_RIPENING_DAYS + 2

CLIMATE_DELTA: dict[Climate, int] = {
    Climate.HOT: -1,
    Climate.NORMAL: 0,
    Climate.COLD: 1,
}

DISCLAIMER = (
    "This is an estimate. Actual ripening varies with the item, "
    "your home and the season, so check the item itself before eating."
)


def ripening_days(rule: ItemRule, storage: Storage, climate: Climate) -> int:
    if STORAGE_BUCKETS[storage] == "room":
        base = rule.ripen_room_days
    else:
        base = rule.ripen_cool_days
    return min(MAX_RIPENING_DAYS, max(0, base + CLIMATE_DELTA[climate]))


def compute_window(rule: ItemRule, storage: Storage, climate: Climate, received_at) -> ComputedWindow:
    days = ripening_days(rule, storage, climate)
    return ComputedWindow(
        ready_date=received_at + timedelta(days=days),
        start=received_at + timedelta(days=max(0, days - 1)),
        end=received_at + timedelta(days=days + 1),
    )


def baseline_summary(rule: ItemRule, window: ComputedWindow) -> str:
    """Rule-derived recommendation text; never depends on the advisor."""
    lines = [
        f"Estimated ready date: {window.ready_date.isoformat()} "
        f"(best between {window.start.isoformat()} and {window.end.isoformat()})",
    ]
    if rule.temp_advice:
        lines.append(f"Storage: {rule.temp_advice}")
    if rule.donts:
        lines.append(f"Common mistakes: {', '.join(rule.donts)}")
    if rule.ready_signs:
        lines.append(f"Signs it is ready: {', '.join(rule.ready_signs)}")
    lines.append(DISCLAIMER)
    return "\n".join(lines)
