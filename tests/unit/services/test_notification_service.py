from __future__ import annotations

import pytest

from app.enums.common import NotificationType


@pytest.fixture()
def alice(seed):
    return seed.create_user("alice")


def test_two_overdue_plants_give_one_urgent_notification(notification_service, seed, alice, days):
    fern = seed.create_plant(alice, "Fern")
    cactus = seed.create_plant(alice, "Cactus")
    seed.create_plant(alice, "Ivy")
    seed.create_care(fern, "Water", care_date=days(-6), next_date=days(-3))
    seed.create_care(cactus, "Water", care_date=days(-4), next_date=days(-1))

    notifications = notification_service.build_notifications(alice)

    urgent = [n for n in notifications if n.type is NotificationType.URGENT]
    assert len(urgent) == 1
    assert urgent[0].message == "2 overdue care(s) in: Fern, Cactus"
    assert not any(n.type is NotificationType.WARNING for n in notifications)


def test_severity_order_is_fixed(notification_service, seed, alice, days):
    fern = seed.create_plant(alice, "Fern")
    seed.create_care(fern, "Water", care_date=days(-4), next_date=days(-1))
    seed.create_care(fern, "CleanLeaves", care_date=days(-7), next_date=days(0))
    seed.create_care(fern, "Prune", care_date=days(0), next_date=days(90))

    notifications = notification_service.build_notifications(alice)

    assert [n.type for n in notifications] == [
        NotificationType.URGENT,
        NotificationType.WARNING,
        NotificationType.INFO,
    ]
    assert notifications[1].message == "1 care(s) due today in: Fern"
    assert notifications[2].message == "Pruned Fern"


def test_nothing_to_report_gives_an_empty_list(notification_service, alice):
    assert notification_service.build_notifications(alice) == []


def test_plant_notifications(notification_service, seed, alice, days):
    fern = seed.create_plant(alice, "Fern", created_at="2024-06-10 08:00:00")
    seed.create_plant(alice, "Ivy", created_at="2024-06-12 08:00:00")
    seed.create_care(fern, "Water", care_date=days(-5), next_date=days(-2))

    notifications = notification_service.plant_notifications(alice)

    assert [n.title for n in notifications] == [
        "Plants without care",
        "Plants with overdue care",
        "Recently added plants",
    ]
    assert notifications[0].message == "1 plant(s) have never received care"
    assert notifications[1].message == "1 plant(s) with overdue care"
    assert notifications[2].message == "New plants: Ivy, Fern"
    assert notifications[2].created_at.isoformat() == "2024-06-12T08:00:00+00:00"


def test_merged_feed_is_newest_first(notification_service, seed, alice, days):
    fern = seed.create_plant(alice, "Fern", created_at="2024-06-01 08:00:00")
    seed.create_care(fern, "Water", care_date=days(-4), next_date=days(-1))

    feed = notification_service.get_user_notifications(alice)

    stamps = [n.created_at for n in feed]
    assert stamps == sorted(stamps, reverse=True)
    assert feed[-1].title == "Recently added plants"
    assert notification_service.get_unread_notification_count(alice) == len(feed)


def test_count_unread_skips_read_notifications(notification_service, seed, alice, days):
    fern = seed.create_plant(alice, "Fern")
    seed.create_care(fern, "Water", care_date=days(-4), next_date=days(-1))
    feed = notification_service.get_user_notifications(alice)

    feed[0].is_read = True

    assert notification_service.count_unread(feed) == len(feed) - 1


def test_care_reminders_skip_upcoming(notification_service, seed, alice, days):
    fern = seed.create_plant(alice, "Fern")
    overdue = seed.create_care(fern, "Water", care_date=days(-5), next_date=days(-2))
    seed.create_care(fern, "Prune", care_date=days(-89), next_date=days(1))

    reminders = notification_service.care_reminders(alice)

    assert len(reminders) == 1
    assert reminders[0].message == "Water overdue by 2 day(s)"
    assert reminders[0].action_url == f"/api/cares/{overdue}/complete"
    assert notification_service.serialize(reminders)[0]["type"] == "care_reminder"
