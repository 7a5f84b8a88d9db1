"""PlantRepository against an in-memory database."""

from __future__ import annotations

import sqlite3
from datetime import date
from unittest.mock import MagicMock

import pytest

from infrastructure.database.repositories.plants import PlantRepository


@pytest.fixture()
def alice(seed):
    return seed.create_user("alice")


@pytest.fixture()
def bob(seed):
    return seed.create_user("bob")


def test_create_and_get_plant(plant_repo, alice):
    plant_id = plant_repo.create_plant(
        alice,
        name="  Monstera ",
        species="Monstera deliciosa",
        acquisition_date=date(2024, 3, 2),
        location="Living room",
    )

    plant = plant_repo.get_plant(plant_id, alice)
    assert plant["name"] == "Monstera"
    assert plant["acquisition_date"] == "2024-03-02"
    assert plant["location"] == "Living room"
    assert plant["user_id"] == alice


def test_create_plant_for_unknown_user_returns_none(plant_repo):
    assert plant_repo.create_plant(404, name="Ghost") is None


def test_plants_are_private_to_their_owner(plant_repo, seed, alice, bob):
    plant_id = seed.create_plant(alice, "Fern")

    assert plant_repo.get_plant(plant_id, bob) is None
    assert plant_repo.get_plants_by_user(bob) == []
    assert plant_repo.update_plant(plant_id, bob, name="Mine now") is False
    assert plant_repo.delete_plant(plant_id, bob) is False
    assert plant_repo.get_plant(plant_id, alice)["name"] == "Fern"


def test_list_and_filter_by_location(plant_repo, seed, alice):
    seed.create_plant(alice, "Ivy", location="Balcony")
    seed.create_plant(alice, "Basil", location="Kitchen window")
    seed.create_plant(alice, "Aloe", location="balcony shelf")

    assert [p["name"] for p in plant_repo.get_plants_by_user(alice)] == ["Aloe", "Basil", "Ivy"]
    assert [p["name"] for p in plant_repo.get_plants_by_location(alice, "balcony")] == ["Aloe", "Ivy"]


def test_update_plant(plant_repo, seed, alice):
    plant_id = seed.create_plant(alice, "Fern")

    assert plant_repo.update_plant(plant_id, alice, name="Boston Fern", location="Bathroom") is True

    plant = plant_repo.get_plant(plant_id, alice)
    assert plant["name"] == "Boston Fern"
    assert plant["location"] == "Bathroom"
    assert plant["acquisition_date"] is None


def test_delete_plant_cascades_to_cares(plant_repo, care_repo, seed, alice, today, db_connection):
    plant_id = seed.create_plant(alice, "Fern")
    seed.create_care(plant_id, "Water", care_date=today, next_date=today)
    seed.create_care(plant_id, "Prune", care_date=today, next_date=today)

    assert plant_repo.delete_plant(plant_id, alice) is True

    assert db_connection.execute("SELECT COUNT(*) FROM cares").fetchone()[0] == 0
    assert care_repo.find_by_user(alice) == []


def test_garden_counters(plant_repo, seed, alice, bob):
    seed.create_plant(alice, "Fern", location="Bathroom")
    seed.create_plant(alice, "Ivy", location="Bathroom")
    seed.create_plant(alice, "Cactus", location="Desk")
    seed.create_plant(alice, "Orphan")
    seed.create_plant(bob, "Basil", location="Kitchen")

    assert plant_repo.count_plants_by_user(alice) == 4
    assert plant_repo.get_total_locations(alice) == 2


def test_healthy_plants_window(plant_repo, seed, alice, days, today):
    recent = seed.create_plant(alice, "Recently watered")
    stale = seed.create_plant(alice, "Neglected")
    seed.create_plant(alice, "Never cared for")
    mixed = seed.create_plant(alice, "Old and new care")
    seed.create_care(recent, "Water", care_date=days(-15))
    seed.create_care(stale, "Water", care_date=days(-16))
    seed.create_care(mixed, "Water", care_date=days(-40))
    seed.create_care(mixed, "Water", care_date=days(-2))

    assert plant_repo.get_healthy_plants_count(alice, today=today) == 3
    assert plant_repo.get_healthy_plants_count(alice, today=today, window_days=1) == 1


def test_plant_level_care_signals(plant_repo, seed, alice, days, today):
    fern = seed.create_plant(alice, "Fern")
    cactus = seed.create_plant(alice, "Cactus")
    seed.create_plant(alice, "Ivy")
    seed.create_care(fern, "Water", care_date=days(-5), next_date=days(-2))
    seed.create_care(fern, "Prune", care_date=days(-5), next_date=days(5))
    seed.create_care(cactus, "Water", care_date=days(-1), next_date=days(9))

    pending = plant_repo.get_plants_with_pending_care(alice, today=today)
    assert [(p["name"], p["next_care_date"]) for p in pending] == [("Fern", days(-2).isoformat())]
    assert plant_repo.count_plants_with_due_care(alice, today=today) == 1
    assert [p["name"] for p in plant_repo.get_plants_without_care(alice)] == ["Ivy"]


def test_recently_added_plants_newest_first(plant_repo, seed, alice):
    seed.create_plant(alice, "Old", created_at="2024-01-01 09:00:00")
    seed.create_plant(alice, "New", created_at="2024-06-14 09:00:00")
    seed.create_plant(alice, "Middle", created_at="2024-03-01 09:00:00")

    assert [p["name"] for p in plant_repo.get_recently_added_plants(alice, 2)] == ["New", "Middle"]


def test_location_and_species_stats(plant_repo, seed, alice):
    seed.create_plant(alice, "A", species="Fern", location="Bathroom")
    seed.create_plant(alice, "B", species="Fern", location="Bathroom")
    seed.create_plant(alice, "C", species="Cactus", location="Desk")

    assert plant_repo.get_plants_by_location_stats(alice) == [
        {"location": "Bathroom", "count": 2},
        {"location": "Desk", "count": 1},
    ]
    assert plant_repo.get_top_species(alice, limit=1) == [{"species": "Fern", "count": 2}]


def test_storage_failures_degrade():
    backend = MagicMock()
    backend.connection.side_effect = sqlite3.OperationalError("disk I/O error")
    repo = PlantRepository(backend)

    assert repo.get_plants_by_user(1) == []
    assert repo.get_plant(1, 1) is None
    assert repo.count_plants_by_user(1) == 0
    assert repo.create_plant(1, name="Fern") is None
    assert repo.update_plant(1, 1, name="Fern") is False
