import pytest

from app.domain.care_types import (
    DEFAULT_CARE_TYPE,
    DEFAULT_ICON,
    CareType,
    describe_activity,
    icon_for,
    interval_for,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Water", CareType.WATER),
        ("watering", CareType.WATER),
        ("  REGA ", CareType.WATER),
        ("fertilizer", CareType.FERTILIZE),
        ("adubacao", CareType.FERTILIZE),
        ("pruning", CareType.PRUNE),
        ("transplant", CareType.REPOT),
        ("clean_leaves", CareType.CLEAN_LEAVES),
        ("Clean-Leaves", CareType.CLEAN_LEAVES),
        ("treatment", CareType.CLEAN_LEAVES),
    ],
)
def test_canonicalize_known_spellings(raw, expected):
    assert CareType.canonicalize(raw) is expected


@pytest.mark.parametrize("raw", ["", "dance", None, 42, ["Water"]])
def test_canonicalize_unknown_input_falls_back_to_watering(raw):
    assert CareType.canonicalize(raw) is DEFAULT_CARE_TYPE is CareType.WATER


def test_canonicalize_passes_members_through():
    assert CareType.canonicalize(CareType.REPOT) is CareType.REPOT


def test_intervals_per_type():
    assert interval_for(CareType.WATER).days == 3
    assert interval_for(CareType.FERTILIZE).days == 30
    assert interval_for(CareType.PRUNE).days == 90
    assert interval_for(CareType.REPOT).days == 365
    assert interval_for(CareType.CLEAN_LEAVES).days == 7


def test_interval_for_stored_non_canonical_value_is_one_week():
    assert interval_for("Misting").days == 7


def test_icon_and_description_fall_back_for_unknown_types():
    assert icon_for("Water") == "💧"
    assert icon_for("Misting") == DEFAULT_ICON
    assert describe_activity("Prune", "Fern") == "Pruned Fern"
    assert describe_activity("Misting", "Fern") == "Cared for Fern"
    assert describe_activity("Water", "") == "Watered a plant"


def test_str_is_the_stored_value():
    assert str(CareType.CLEAN_LEAVES) == "CleanLeaves"
