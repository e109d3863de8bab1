import math
from typing import List, Optional

from astro_facts.config import Settings, settings as default_settings
from astro_facts.domain.kundali.derived.schemas import PlanetStrength
from astro_facts.domain.kundali.schemas import FactSheet, PlanetFact
from astro_facts.domain.kundali.tables import DIGNITY_FALLBACK_SCORES


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class StrengthCalculator:
    """
    Combines optional external strength scores with dignity.

    With a score: normalized 0–100 value plus a band from the score.
    Without one: band inferred from dignity through fixed fallback
    scores (Exalted > Own > Neutral > Debilitated).
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings

    def calculate(self, facts: FactSheet) -> List[PlanetStrength]:
        shadbala = facts.shadbala or {}
        return [
            self.strength_for(planet, shadbala.get(planet.planet))
            for planet in facts.planets
        ]

    def strength_for(
        self,
        planet: PlanetFact,
        score: Optional[float],
    ) -> PlanetStrength:
        if score is not None and math.isfinite(score):
            return PlanetStrength(
                planet=planet.planet,
                shadbala=score,
                normalized=self.normalize(score),
                dignity=planet.dignity,
                band=self.band_for_score(score),
            )

        return PlanetStrength(
            planet=planet.planet,
            dignity=planet.dignity,
            band=self.band_for_dignity(planet.dignity),
            inferred=True,
        )

    # ─────────────────────────────────────────────
    # Scoring helpers
    # ─────────────────────────────────────────────

    def normalize(self, raw: float) -> int:
        """
        Map a raw score onto 0–100; values above the ceiling are halved
        before capping.
        """
        value = raw / 2 if raw > self.settings.SHADBALA_NORMALIZE_CEILING else raw
        return max(0, min(100, _round_half_up(value)))

    def band_for_score(self, score: float) -> str:
        if score >= self.settings.SHADBALA_STRONG_THRESHOLD:
            return "strong"
        if score >= self.settings.SHADBALA_MEDIUM_THRESHOLD:
            return "medium"
        return "weak"

    def band_for_dignity(self, dignity: Optional[str]) -> str:
        fallback = DIGNITY_FALLBACK_SCORES.get(
            dignity or "Neutral", DIGNITY_FALLBACK_SCORES["Neutral"]
        )
        return self.band_for_score(fallback)
