from typing import List

from astro_facts.domain.kundali.derived.schemas import PlanetRelation
from astro_facts.domain.kundali.tables import (
    ALL_BODIES,
    NATURAL_FRIENDS,
    NATURAL_NEUTRALS,
)


def natural_relation(a: str, b: str) -> str:
    """
    Natural relationship of planet `a` towards planet `b`.

    Anything that is neither a listed friend nor a listed neutral is an
    enemy. Not symmetric: Moon counts Mars as an enemy while Mars counts
    Moon as a friend.
    """
    if b in NATURAL_FRIENDS.get(a, ()):
        return "friend"
    if b in NATURAL_NEUTRALS.get(a, ()):
        return "neutral"
    return "enemy"


class RelationCalculator:
    """
    Static relationship graph over the nine bodies. Independent of the
    chart; positions are never consulted.
    """

    def calculate(self) -> List[PlanetRelation]:
        return [
            PlanetRelation(a=a, b=b, natural=natural_relation(a, b))
            for a in ALL_BODIES
            for b in ALL_BODIES
            if a != b
        ]
