from typing import List

from astro_facts.domain.kundali.calculator import sign_in_house, sign_label
from astro_facts.domain.kundali.derived.schemas import AspectSource, HouseAnalysis
from astro_facts.domain.kundali.schemas import FactSheet
from astro_facts.domain.kundali.tables import ASPECT_WEIGHTS, HOUSE_NAMES, SIGN_LORDS


# Benefic and malefic planet classification (simplified)
BENEFIC_PLANETS = {"Jupiter", "Venus", "Mercury", "Moon"}
MALEFIC_PLANETS = {"Saturn", "Mars", "Rahu", "Ketu", "Sun"}


class HouseCalculator:
    """
    Builds the per-house table: occupying sign and lord, occupants,
    incoming aspects and a weighted aspect power.
    """

    def calculate(
        self,
        facts: FactSheet
    ) -> List[HouseAnalysis]:
        """
        Analyse every house 1–12.
        """
        houses: List[HouseAnalysis] = []
        asc_sign = facts.ascendant.sign

        for house in range(1, 13):
            sign = sign_in_house(asc_sign, house)
            occupants = facts.planets_in_house(house)

            aspects_from = [
                AspectSource(
                    planet=aspect.from_planet,
                    kind=aspect.kind,
                    weight=ASPECT_WEIGHTS.get(aspect.kind, 1.0),
                )
                for aspect in facts.aspects
                if aspect.type == "aspect" and aspect.to_house == house
            ]

            # Relative ranking signal only
            aspect_power = round(sum(a.weight for a in aspects_from), 2)

            strength, reasons = self._occupancy_strength(
                house, [p.planet for p in occupants]
            )

            houses.append(HouseAnalysis(
                house=house,
                sign_id=sign,
                sign_label=sign_label(sign),
                name=HOUSE_NAMES[house],
                lord=SIGN_LORDS[sign],
                occupants=tuple(p.planet for p in occupants),
                aspects_from=tuple(aspects_from),
                aspect_power=aspect_power,
                strength=strength,
                reasons=tuple(reasons),
            ))

        return houses

    def _occupancy_strength(
        self,
        house: int,
        occupants: List[str],
    ) -> tuple[str, List[str]]:
        reasons: List[str] = []
        score = 0

        for planet in occupants:
            if planet in BENEFIC_PLANETS:
                score += 1
                reasons.append(f"{planet} (benefic) occupies house {house}")
            elif planet in MALEFIC_PLANETS:
                score -= 1
                reasons.append(f"{planet} (malefic) occupies house {house}")

        # Normalize score to strength
        if score >= 2:
            strength = "strong"
        elif score <= -1:
            strength = "weak"
        else:
            strength = "average"

        return strength, reasons
