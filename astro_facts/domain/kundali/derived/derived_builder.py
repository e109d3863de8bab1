import logging

from astro_facts.config import Settings
from astro_facts.domain.kundali.derived.house_calculator import HouseCalculator
from astro_facts.domain.kundali.derived.relation_calculator import RelationCalculator
from astro_facts.domain.kundali.derived.schemas import DerivedBundle
from astro_facts.domain.kundali.derived.strength_calculator import StrengthCalculator
from astro_facts.domain.kundali.schemas import FactSheet

logger = logging.getLogger(__name__)


class DerivedBuilder:
    """
    Orchestrates the derived analytics for a fact sheet.
    """

    def __init__(self, settings: Settings | None = None):
        self.house_calculator = HouseCalculator()
        self.relation_calculator = RelationCalculator()
        self.strength_calculator = StrengthCalculator(settings)

    def build(self, facts: FactSheet) -> DerivedBundle:
        bundle = DerivedBundle(
            houses=tuple(self.house_calculator.calculate(facts)),
            relations=tuple(self.relation_calculator.calculate()),
            strengths=tuple(self.strength_calculator.calculate(facts)),
        )
        logger.debug(f"Derived analytics built for {len(bundle.strengths)} planets")
        return bundle
