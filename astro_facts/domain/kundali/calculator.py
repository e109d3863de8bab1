import math
from typing import List, Tuple

from astro_facts.domain.kundali.tables import SIGNS, SPECIAL_ASPECTS, UNIVERSAL_ASPECT


# ─────────────────────────────────────────────
# Degree helpers
# ─────────────────────────────────────────────

def normalize_degree(degree: float) -> float:
    """
    Normalize any longitude into the [0, 360) range.
    """
    value = math.fmod(float(degree), 360.0)
    if value < 0:
        value += 360.0
    # fmod of a tiny negative can round back up to 360.0
    if value >= 360.0:
        value = 0.0
    return value


def degree_in_sign(longitude: float) -> float:
    """
    Degree of a longitude within its own sign (0–30).
    """
    return normalize_degree(longitude) % 30.0


def sign_from_longitude(longitude: float) -> int:
    """
    Sidereal sign id (1–12) for an absolute longitude.
    """
    return int(normalize_degree(longitude) // 30) + 1


# ─────────────────────────────────────────────
# Sign / house arithmetic
# ─────────────────────────────────────────────

def wrap_sign(sign: int) -> int:
    """
    Wrap any integer into a sign id 1–12 (0 → 12, 13 → 1).
    """
    return (int(sign) - 1) % 12 + 1


wrap_house = wrap_sign


def house_from_signs(planet_sign: int, asc_sign: int) -> int:
    """
    Whole-sign house of a planet counted from the ascendant sign.

    This is the one house formula used across the package.
    """
    return ((int(planet_sign) - int(asc_sign) + 12) % 12) + 1


def house_from_degrees(asc_degree: float, planet_degree: float) -> int:
    """
    House from absolute longitudes, 30° per house starting at the
    ascendant degree.
    """
    diff = normalize_degree(planet_degree - asc_degree)
    return wrap_house(int(diff // 30) + 1)


def sign_in_house(asc_sign: int, house: int) -> int:
    """
    Sign id occupying a given house for an ascendant sign.
    """
    return wrap_sign(int(asc_sign) + int(house) - 1)


def count_from(from_house: int, steps: int) -> int:
    """
    House reached counting `steps` houses inclusively from `from_house`
    (so steps=7 is the opposite house).
    """
    return wrap_house(int(from_house) + int(steps) - 1)


def sign_label(sign: int) -> str:
    return SIGNS[wrap_sign(sign) - 1]


# ─────────────────────────────────────────────
# Aspects (drishti)
# ─────────────────────────────────────────────

def aspected_houses(planet: str, from_house: int) -> List[Tuple[int, str]]:
    """
    Houses aspected by a planet as (house, kind) pairs.

    Every body casts the 7th aspect (kind "7"); Mars, Jupiter and Saturn
    add their special aspects, tagged with their lowercase name.
    """
    targets = [(count_from(from_house, UNIVERSAL_ASPECT), str(UNIVERSAL_ASPECT))]

    for steps in SPECIAL_ASPECTS.get(planet, ()):
        targets.append((count_from(from_house, steps), planet.lower()))

    return targets
