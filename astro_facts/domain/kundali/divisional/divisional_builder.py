from typing import Dict, List

from astro_facts.domain.kundali.divisional.base import BaseDivisionalCalculator
from astro_facts.domain.kundali.divisional.d9 import D9Calculator
from astro_facts.domain.kundali.divisional.d10 import D10Calculator
from astro_facts.domain.kundali.schemas import DivisionalPosition


class DivisionalBuilder:
    """
    Computes divisional snapshots for a planet from its longitude.
    """

    def __init__(
        self,
        calculators: List[BaseDivisionalCalculator] | None = None
    ):
        # Default supported divisionals
        self.calculators = calculators or [
            D9Calculator(),
            D10Calculator(),
        ]

    def build(
        self,
        planet: str,
        longitude: float,
    ) -> Dict[str, DivisionalPosition]:
        return {
            calculator.chart_type: calculator.calculate(planet, longitude)
            for calculator in self.calculators
        }
