from typing import List, Optional

from astro_facts.domain.kundali.calculator import sign_in_house
from astro_facts.domain.kundali.tables import (
    DEBILITATION_SIGNS,
    EXALTATION_SIGNS,
    OWN_SIGNS,
    SIGN_LORDS,
)


EXALTED = "Exalted"
DEBILITATED = "Debilitated"
OWN = "Own"
NEUTRAL = "Neutral"


# ─────────────────────────────────────────────
# Dignity
# ─────────────────────────────────────────────

def calculate_dignity(planet: str, sign: int) -> Optional[str]:
    """
    Classify a planet's dignity in a sign.

    Checked in order: exaltation, debilitation, own sign. Nodes have no
    dignity and return None.
    """
    if planet not in EXALTATION_SIGNS:
        return None

    if EXALTATION_SIGNS[planet] == sign:
        return EXALTED
    if DEBILITATION_SIGNS[planet] == sign:
        return DEBILITATED
    if sign in OWN_SIGNS[planet]:
        return OWN
    return NEUTRAL


# ─────────────────────────────────────────────
# Lordship
# ─────────────────────────────────────────────

def sign_lord(sign: int) -> str:
    return SIGN_LORDS[sign]


def house_lords(asc_sign: int) -> dict[int, str]:
    """
    Ruling planet of each house 1–12 for an ascendant sign.
    """
    return {
        house: SIGN_LORDS[sign_in_house(asc_sign, house)]
        for house in range(1, 13)
    }


def houses_owned_by(planet: str, asc_sign: int) -> List[int]:
    """
    Houses ruled by a planet counted from the ascendant, ascending.

    Derived only from the ascendant sign and the sign→lord table; nodes
    own nothing.
    """
    return [
        house
        for house, lord in house_lords(asc_sign).items()
        if lord == planet
    ]
