"""Configuration ⇄ URL-hash query string (``#lot=double&stories=4&...``).

This is the one layer that substitutes defaults for bad input: a hash
comes from an untrusted URL, so unknown values fall back silently and
``stories`` is clamped. The engines behind it reject bad values instead.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import parse_qs, urlencode

from single_stair.models.config import (
    BuildingConfig,
    BuildingType,
    GroundUse,
    LotType,
    StairCode,
)

logger = logging.getLogger(__name__)

MIN_STORIES = 2
MAX_STORIES = 4

# Leading integer, as a browser parseInt reads it: "4x" is 4, "2.9" is 2
_INT_PREFIX = re.compile(r"\s*[-+]?\d+")

DEFAULTS = BuildingConfig(
    lot=LotType.SINGLE,
    stories=3,
    stair=StairCode.CURRENT,
    ground=GroundUse.RESIDENTIAL,
    building_type=BuildingType.STANDARD,
)


def encode_hash(config: BuildingConfig) -> str:
    """``#lot=...&stories=...&stair=...&ground=...&building=...``"""
    return "#" + urlencode({
        "lot": config.lot.value,
        "stories": str(config.stories),
        "stair": config.stair.value,
        "ground": config.ground.value,
        "building": config.building_type.value,
    })


def _pick(params: dict[str, list[str]], key: str, enum: type, default):
    values = params.get(key)
    if not values:
        return default
    try:
        return enum(values[0])
    except ValueError:
        logger.debug("Ignoring invalid %s=%r in URL hash", key, values[0])
        return default


def clamp_stories(stories: int) -> int:
    return max(MIN_STORIES, min(MAX_STORIES, stories))


def decode_hash(hash_str: str | None) -> BuildingConfig:
    """Parse a URL hash into a configuration. Never raises.

    Missing or invalid values take the defaults (single lot, 3 stories,
    current code, residential ground, standard building); ``stories`` is
    clamped to [2, 4].
    """
    params = parse_qs((hash_str or "").lstrip("#"))

    stories = DEFAULTS.stories
    raw = params.get("stories")
    if raw:
        match = _INT_PREFIX.match(raw[0])
        if match:
            stories = clamp_stories(int(match.group()))
        else:
            logger.debug("Ignoring invalid stories=%r in URL hash", raw[0])

    return BuildingConfig(
        lot=_pick(params, "lot", LotType, DEFAULTS.lot),
        stories=stories,
        stair=_pick(params, "stair", StairCode, DEFAULTS.stair),
        ground=_pick(params, "ground", GroundUse, DEFAULTS.ground),
        building_type=_pick(params, "building", BuildingType, DEFAULTS.building_type),
    )
