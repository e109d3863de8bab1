from typing import List, Literal, Optional, Tuple

from pydantic import Field

from astro_facts.domain.kundali.schemas import Dignity, FactModel


StrengthBand = Literal["strong", "medium", "weak"]


# ─────────────────────────────────────────────
# Atomic Derived Facts
# ─────────────────────────────────────────────

class AspectSource(FactModel):
    """
    One incoming aspect on a house.
    """
    planet: str
    kind: str
    weight: float


class HouseAnalysis(FactModel):
    """
    Occupancy and aspect picture of a single house.
    """
    house: int = Field(..., ge=1, le=12)
    sign_id: int = Field(..., ge=1, le=12)
    sign_label: str
    name: str
    lord: str
    occupants: Tuple[str, ...] = ()
    aspects_from: Tuple[AspectSource, ...] = ()
    aspect_power: float = 0.0
    strength: Literal["strong", "average", "weak"] = "average"
    reasons: Tuple[str, ...] = ()


class PlanetRelation(FactModel):
    """
    Natural (position-independent) relationship of `a` towards `b`.
    """
    a: str
    b: str
    natural: Literal["friend", "neutral", "enemy"]


class PlanetStrength(FactModel):
    """
    Strength evaluation of a planet.
    """
    planet: str
    shadbala: Optional[float] = None
    normalized: Optional[int] = Field(None, ge=0, le=100)
    dignity: Optional[Dignity] = None
    band: StrengthBand
    inferred: bool = False


# ─────────────────────────────────────────────
# Aggregated Derived Bundle
# ─────────────────────────────────────────────

class DerivedBundle(FactModel):
    """
    Houses, relations and strengths derived from one fact sheet.
    """
    houses: Tuple[HouseAnalysis, ...] = ()
    relations: Tuple[PlanetRelation, ...] = ()
    strengths: Tuple[PlanetStrength, ...] = ()

    def house(self, number: int) -> Optional[HouseAnalysis]:
        for house in self.houses:
            if house.house == number:
                return house
        return None

    def strength_of(self, planet: str) -> Optional[PlanetStrength]:
        for strength in self.strengths:
            if strength.planet == planet:
                return strength
        return None

    def relation(self, a: str, b: str) -> Optional[str]:
        for relation in self.relations:
            if relation.a == a and relation.b == b:
                return relation.natural
        return None

    def friends_of(self, planet: str) -> List[str]:
        return [
            r.b for r in self.relations
            if r.a == planet and r.natural == "friend"
        ]
