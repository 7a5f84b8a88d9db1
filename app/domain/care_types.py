"""
Care Type Registry
==================

Canonical care categories and the per-type data hung off them: recurrence
interval, display icon and the activity phrase used in feeds.

Raw care-type input comes from forms and API clients as free text.
``CareType.canonicalize`` is total: recognised spellings map to their
canonical member and everything else falls through to ``DEFAULT_CARE_TYPE``
(watering). Unknown input is never an error anywhere in the pipeline.
"""

from __future__ import annotations

import logging
import re
from datetime import timedelta
from enum import Enum

logger = logging.getLogger(__name__)


class CareType(str, Enum):
    """Canonical care categories, stored verbatim in ``cares.care_type``."""

    WATER = "Water"
    FERTILIZE = "Fertilize"
    PRUNE = "Prune"
    REPOT = "Repot"
    CLEAN_LEAVES = "CleanLeaves"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def canonicalize(cls, raw: object) -> "CareType":
        """Map free-text input to a canonical care type.

        Matching ignores case, surrounding whitespace and the separators
        ``_``, ``-`` and space. Non-string input and unrecognised text take the
        default branch and return ``DEFAULT_CARE_TYPE``.
        """
        if isinstance(raw, CareType):
            return raw
        if not isinstance(raw, str):
            logger.debug("Non-text care type %r, using default %s", raw, DEFAULT_CARE_TYPE)
            return DEFAULT_CARE_TYPE

        key = _normalize_key(raw)
        if key in _ALIASES:
            return _ALIASES[key]

        logger.debug("Unrecognised care type %r, using default %s", raw, DEFAULT_CARE_TYPE)
        return DEFAULT_CARE_TYPE

    @classmethod
    def from_stored(cls, value: object) -> "CareType | None":
        """Exact lookup of a persisted value; None when it is not canonical."""
        if isinstance(value, CareType):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


DEFAULT_CARE_TYPE = CareType.WATER

DEFAULT_INTERVAL = timedelta(days=7)
DEFAULT_ICON = "🌿"

_INTERVALS: dict[CareType, timedelta] = {
    CareType.WATER: timedelta(days=3),
    CareType.FERTILIZE: timedelta(days=30),
    CareType.PRUNE: timedelta(days=90),
    CareType.REPOT: timedelta(days=365),
    CareType.CLEAN_LEAVES: timedelta(days=7),
}

_ICONS: dict[CareType, str] = {
    CareType.WATER: "💧",
    CareType.FERTILIZE: "🌱",
    CareType.PRUNE: "✂️",
    CareType.REPOT: "🪴",
    CareType.CLEAN_LEAVES: "🍃",
}

_ACTIVITY_TEMPLATES: dict[CareType, str] = {
    CareType.WATER: "Watered {plant}",
    CareType.FERTILIZE: "Fertilized {plant}",
    CareType.PRUNE: "Pruned {plant}",
    CareType.REPOT: "Repotted {plant}",
    CareType.CLEAN_LEAVES: "Cleaned the leaves of {plant}",
}
_DEFAULT_ACTIVITY_TEMPLATE = "Cared for {plant}"

# Keys are normalised with _normalize_key. The Portuguese entries are the
# form values the first version of the web UI posted and are still accepted.
_ALIASES: dict[str, CareType] = {
    "water": CareType.WATER,
    "watering": CareType.WATER,
    "rega": CareType.WATER,
    "regar": CareType.WATER,
    "fertilize": CareType.FERTILIZE,
    "fertilise": CareType.FERTILIZE,
    "fertilizing": CareType.FERTILIZE,
    "fertilizer": CareType.FERTILIZE,
    "fertilization": CareType.FERTILIZE,
    "feed": CareType.FERTILIZE,
    "adubacao": CareType.FERTILIZE,
    "adubar": CareType.FERTILIZE,
    "prune": CareType.PRUNE,
    "pruning": CareType.PRUNE,
    "trim": CareType.PRUNE,
    "poda": CareType.PRUNE,
    "podar": CareType.PRUNE,
    "repot": CareType.REPOT,
    "repotting": CareType.REPOT,
    "transplant": CareType.REPOT,
    "transplante": CareType.REPOT,
    "mudarvaso": CareType.REPOT,
    "cleanleaves": CareType.CLEAN_LEAVES,
    "leafcleaning": CareType.CLEAN_LEAVES,
    "cleaning": CareType.CLEAN_LEAVES,
    "treatment": CareType.CLEAN_LEAVES,
    "tratamento": CareType.CLEAN_LEAVES,
    "limpeza": CareType.CLEAN_LEAVES,
    "limparfolhas": CareType.CLEAN_LEAVES,
}

_SEPARATORS = re.compile(r"[\s_\-]+")


def _normalize_key(raw: str) -> str:
    return _SEPARATORS.sub("", raw.strip().lower())


def interval_for(care_type: CareType | str) -> timedelta:
    """Recurrence interval for a care type; 7 days for non-canonical values."""
    member = CareType.from_stored(care_type)
    if member is None:
        return DEFAULT_INTERVAL
    return _INTERVALS[member]


def icon_for(care_type: CareType | str) -> str:
    member = CareType.from_stored(care_type)
    if member is None:
        return DEFAULT_ICON
    return _ICONS[member]


def describe_activity(care_type: CareType | str, plant_name: str) -> str:
    """Short past-tense sentence for an activity feed entry."""
    member = CareType.from_stored(care_type)
    template = _ACTIVITY_TEMPLATES[member] if member is not None else _DEFAULT_ACTIVITY_TEMPLATE
    return template.format(plant=plant_name or "a plant")


__all__ = [
    "CareType",
    "DEFAULT_CARE_TYPE",
    "DEFAULT_ICON",
    "DEFAULT_INTERVAL",
    "describe_activity",
    "icon_for",
    "interval_for",
]
