"""CareRepository against an in-memory database."""

from __future__ import annotations

import sqlite3
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from infrastructure.database.repositories.cares import CareRepository, completion_note


@pytest.fixture()
def alice(seed):
    return seed.create_user("alice")


@pytest.fixture()
def bob(seed):
    return seed.create_user("bob")


@pytest.fixture()
def fern(seed, alice):
    return seed.create_plant(alice, "Fern", species="Nephrolepis", location="Bathroom")


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


def test_create_care_canonicalizes_type_and_derives_due_date(care_repo, seed, alice, fern, today):
    assert care_repo.create_care(alice, fern, "pruning", today, "shaped the fronds") is True

    [row] = care_repo.find_by_plant(fern, alice)
    assert row["care_type"] == "Prune"
    assert row["care_date"] == today.isoformat()
    assert row["next_maintenance_date"] == (today + timedelta(days=90)).isoformat()
    assert row["observations"] == "shaped the fronds"


def test_create_care_with_unknown_type_is_recorded_as_watering(care_repo, alice, fern, today):
    assert care_repo.create_care(alice, fern, "dance", today.isoformat()) is True

    [row] = care_repo.find_by_plant(fern, alice)
    assert row["care_type"] == "Water"
    assert row["next_maintenance_date"] == (today + timedelta(days=3)).isoformat()


def test_create_care_without_schedule_leaves_due_date_empty(care_repo, alice, fern, today):
    assert care_repo.create_care(alice, fern, "Repot", today, schedule_next=False) is True

    [row] = care_repo.find_by_plant(fern, alice)
    assert row["next_maintenance_date"] is None


def test_create_care_on_foreign_plant_is_rejected(care_repo, bob, fern, today, db_connection):
    assert care_repo.create_care(bob, fern, "Water", today) is False
    assert db_connection.execute("SELECT COUNT(*) FROM cares").fetchone()[0] == 0


def test_create_care_with_invalid_date_is_rejected(care_repo, alice, fern):
    assert care_repo.create_care(alice, fern, "Water", "not-a-date") is False


def test_update_care_rederives_due_date(care_repo, seed, alice, fern, today):
    care_id = seed.create_care(fern, "Water", care_date=today, next_date=today)

    assert care_repo.update_care(care_id, alice, "Fertilize", today, "liquid feed") is True

    row = seed.care_row(care_id)
    assert row["care_type"] == "Fertilize"
    assert row["next_maintenance_date"] == (today + timedelta(days=30)).isoformat()
    assert row["observations"] == "liquid feed"


def test_update_and_delete_are_scoped_to_the_owner(care_repo, seed, bob, fern, today):
    care_id = seed.create_care(fern, "Water", care_date=today, next_date=today)

    assert care_repo.update_care(care_id, bob, "Prune", today) is False
    assert care_repo.delete_care(care_id, bob) is False
    assert seed.care_row(care_id)["care_type"] == "Water"


def test_delete_care(care_repo, seed, alice, fern, today):
    care_id = seed.create_care(fern, "Water", care_date=today, next_date=today)

    assert care_repo.delete_care(care_id, alice) is True
    assert seed.care_row(care_id) is None
    assert care_repo.delete_care(care_id, alice) is False


# ---------------------------------------------------------------------------
# Completing a care
# ---------------------------------------------------------------------------


def test_completion_note_format(today):
    assert completion_note(today) == "\n\nCompleted on 15/06/2024"
    assert completion_note(today, "  all good ") == "\n\nCompleted on 15/06/2024: all good"


def test_complete_care_moves_date_and_due_date_together(care_repo, seed, alice, fern, today):
    care_id = seed.create_care(
        fern,
        "Water",
        care_date=today - timedelta(days=5),
        next_date=today - timedelta(days=2),
        observations="First watering",
    )

    assert care_repo.complete_care(care_id, alice, today=today, note="soil was dry") is True

    row = seed.care_row(care_id)
    assert row["care_date"] == today.isoformat()
    assert row["next_maintenance_date"] == (today + timedelta(days=3)).isoformat()
    assert row["observations"] == "First watering\n\nCompleted on 15/06/2024: soil was dry"


def test_complete_care_of_another_user_changes_nothing(care_repo, seed, bob, fern, today):
    original = seed.create_care(fern, "Prune", care_date="2024-01-01", next_date="2024-03-31")
    before = seed.care_row(original)

    assert care_repo.complete_care(original, bob, today=today) is False
    assert seed.care_row(original) == before


def test_complete_missing_care_returns_false(care_repo, alice, today):
    assert care_repo.complete_care(9999, alice, today=today) is False


def test_failed_completion_rolls_back_every_field(care_repo, seed, alice, fern, today, db_handler):
    care_id = seed.create_care(fern, "Water", care_date="2024-06-01", next_date="2024-06-04")
    before = seed.care_row(care_id)
    with db_handler.connection() as db:
        db.execute(
            """
            CREATE TRIGGER refuse_care_updates BEFORE UPDATE ON cares
            BEGIN SELECT RAISE(ABORT, 'refused'); END
            """
        )

    assert care_repo.complete_care(care_id, alice, today=today) is False
    assert seed.care_row(care_id) == before


# ---------------------------------------------------------------------------
# Scheduling queries
# ---------------------------------------------------------------------------


def test_find_pending_orders_overdue_then_today_then_upcoming(care_repo, seed, alice, fern, days, today):
    cactus = seed.create_plant(alice, "Cactus")
    due_today = seed.create_care(fern, "Water", care_date=days(-3), next_date=days(0))
    upcoming = seed.create_care(cactus, "Water", care_date=days(-1), next_date=days(2))
    overdue_recent = seed.create_care(fern, "Prune", care_date=days(-91), next_date=days(-1))
    overdue_oldest = seed.create_care(cactus, "Fertilize", care_date=days(-35), next_date=days(-5))
    seed.create_care(fern, "Repot", care_date=days(-300), next_date=days(65))
    seed.create_care(fern, "Water", care_date=days(-1), next_date=None)

    rows = care_repo.find_pending(alice, today=today, horizon_days=7)

    assert [r["care_id"] for r in rows] == [overdue_oldest, overdue_recent, due_today, upcoming]
    assert rows[0]["plant_name"] == "Cactus"
    assert rows[2]["species"] == "Nephrolepis"
    assert rows[2]["location"] == "Bathroom"


def test_find_pending_never_shows_other_users_cares(care_repo, seed, bob, fern, days, today):
    seed.create_care(fern, "Water", care_date=days(-4), next_date=days(-1))

    assert care_repo.find_pending(bob, today=today, horizon_days=7) == []


def test_count_pending_as_of_ignores_future(care_repo, seed, alice, fern, days, today):
    seed.create_care(fern, "Water", care_date=days(-4), next_date=days(-1))
    seed.create_care(fern, "Water", care_date=days(-3), next_date=days(0))
    seed.create_care(fern, "Water", care_date=days(-2), next_date=days(1))

    assert care_repo.count_pending_as_of(alice, today=today) == 2


def test_find_upcoming_is_inclusive(care_repo, seed, alice, fern, days, today):
    seed.create_care(fern, "Water", care_date=days(-4), next_date=days(-1))
    first = seed.create_care(fern, "Water", care_date=days(-3), next_date=days(0))
    last = seed.create_care(fern, "CleanLeaves", care_date=days(0), next_date=days(7))
    seed.create_care(fern, "Fertilize", care_date=days(-20), next_date=days(8))

    rows = care_repo.find_upcoming(alice, today=today, days_ahead=7)

    assert [r["care_id"] for r in rows] == [first, last]


def test_find_recent_newest_first_and_limited(care_repo, seed, alice, fern, days):
    seed.create_care(fern, "Water", care_date=days(-10))
    newest = seed.create_care(fern, "Prune", care_date=days(-1))
    middle = seed.create_care(fern, "Water", care_date=days(-2))

    rows = care_repo.find_recent(alice, limit=2)

    assert [r["id"] for r in rows] == [newest, middle]
    assert rows[0]["plant_name"] == "Fern"


def test_get_stats(care_repo, seed, alice, fern, days, today):
    cactus = seed.create_plant(alice, "Cactus")
    seed.create_care(fern, "Water", care_date=days(-1))
    seed.create_care(fern, "Water", care_date=days(-3))
    seed.create_care(cactus, "Prune", care_date=days(-20))
    seed.create_care(cactus, "Water", care_date=days(-45))

    stats = care_repo.get_stats(alice, today=today)

    assert stats["total_cares"] == 3
    assert stats["plants_cared"] == 2
    assert stats["cares_last_week"] == 2
    assert stats["avg_cares_per_day"] == 0.1
    assert stats["type_distribution"] == [
        {"care_type": "Water", "count": 2},
        {"care_type": "Prune", "count": 1},
    ]


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------


@pytest.fixture()
def broken_repo():
    backend = MagicMock()
    backend.connection.side_effect = sqlite3.OperationalError("database is locked")
    backend.transaction.side_effect = sqlite3.OperationalError("database is locked")
    return CareRepository(backend)


def test_reads_degrade_to_empty_values(broken_repo, today):
    assert broken_repo.find_pending(1, today=today, horizon_days=7) == []
    assert broken_repo.find_by_user(1) == []
    assert broken_repo.get_care(1, 1) is None
    assert broken_repo.count_pending_as_of(1, today=today) == 0
    assert broken_repo.get_stats(1, today=today) == {
        "total_cares": 0,
        "plants_cared": 0,
        "cares_last_week": 0,
        "avg_cares_per_day": 0.0,
        "type_distribution": [],
    }


def test_writes_report_false(broken_repo, today):
    assert broken_repo.create_care(1, 1, "Water", today) is False
    assert broken_repo.delete_care(1, 1) is False
    assert broken_repo.complete_care(1, 1, today=today) is False
