"""
Tests for ready-date and window arithmetic
"""
from datetime import date, timedelta

import pytest

from models.ripeness import Climate, ItemRule, Storage
from ripeness import MAX_RIPENING_DAYS, baseline_summary, compute_window, ripening_days
from utils.validators import LATEST_INTAKE_DATE


def test_room_normal_uses_room_days(sample_rule):
    window = compute_window(sample_rule, Storage.ROOM, Climate.NORMAL, date(2024, 1, 1))

    assert window.ready_date == date(2024, 1, 6)
    assert window.start == date(2024, 1, 5)
    assert window.end == date(2024, 1, 7)


def test_fridge_hot_uses_cool_days_minus_one(sample_rule):
    window = compute_window(sample_rule, Storage.FRIDGE, Climate.HOT, date(2024, 1, 1))

    assert ripening_days(sample_rule, Storage.FRIDGE, Climate.HOT) == 2
    assert window.ready_date == date(2024, 1, 3)


def test_cold_adds_a_day_to_zero_base():
    rule = ItemRule(sku="x", name="X", ripen_room_days=0, ripen_cool_days=0)

    assert ripening_days(rule, Storage.ROOM, Climate.COLD) == 1


def test_days_never_negative():
    rule = ItemRule(sku="x", name="X", ripen_room_days=0, ripen_cool_days=-4)

    assert ripening_days(rule, Storage.ROOM, Climate.HOT) == 0
    assert ripening_days(rule, Storage.FRIDGE, Climate.HOT) == 0
    window = compute_window(rule, Storage.FRIDGE, Climate.HOT, date(2024, 3, 1))
    assert window.ready_date == date(2024, 3, 1)
    assert window.start == date(2024, 3, 1)
    assert window.end == date(2024, 3, 2)


def test_days_are_capped():
    rule = ItemRule(sku="x", name="X", ripen_room_days=100000, ripen_cool_days=100000)

    assert ripening_days(rule, Storage.ROOM, Climate.COLD) == MAX_RIPENING_DAYS


def test_latest_intake_date_fits_the_calendar():
    rule = ItemRule(sku="x", name="X", ripen_room_days=100000, ripen_cool_days=100000)
    window = compute_window(rule, Storage.FRIDGE, Climate.COLD, LATEST_INTAKE_DATE)

    assert window.end == date.max - timedelta(days=1)
    assert window.ready_date == LATEST_INTAKE_DATE + timedelta(days=MAX_RIPENING_DAYS)


@pytest.mark.parametrize("storage,expected", [
    (Storage.ROOM, 5),
    (Storage.COOL_DARK, 5),
    (Storage.VEG_ROOM, 3),
    (Storage.FRIDGE, 3),
])
def test_storage_buckets(sample_rule, storage, expected):
    assert ripening_days(sample_rule, storage, Climate.NORMAL) == expected


def test_window_invariants_hold_for_all_inputs():
    intake = date(2024, 2, 28)
    for room_days in range(0, 4):
        for cool_days in range(0, 4):
            rule = ItemRule(sku="x", name="X", ripen_room_days=room_days, ripen_cool_days=cool_days)
            for storage in Storage:
                for climate in Climate:
                    window = compute_window(rule, storage, climate, intake)
                    assert window.ready_date >= intake
                    assert window.start >= intake
                    assert window.start <= window.ready_date <= window.end
                    assert window.end - window.ready_date == timedelta(days=1)


def test_compute_window_is_repeatable(sample_rule):
    first = compute_window(sample_rule, Storage.VEG_ROOM, Climate.COLD, date(2024, 12, 30))
    second = compute_window(sample_rule, Storage.VEG_ROOM, Climate.COLD, date(2024, 12, 30))

    assert first == second
    assert first.ready_date == date(2025, 1, 3)


def test_baseline_summary_mentions_rule_facts(sample_rule):
    window = compute_window(sample_rule, Storage.ROOM, Climate.NORMAL, date(2024, 1, 1))
    text = baseline_summary(sample_rule, window)

    assert "2024-01-06" in text
    assert "Keep somewhere cool and dry." in text
    assert "Squeezing" in text
    assert "Sweet smell" in text
    assert "estimate" in text
