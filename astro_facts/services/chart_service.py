import logging
from typing import Any, List

from astro_facts.config import Settings, settings as default_settings
from astro_facts.domain.dasha.expander import DashaExpander
from astro_facts.domain.dasha.schemas import ExpandedDasha
from astro_facts.domain.kundali.derived.derived_builder import DerivedBuilder
from astro_facts.domain.kundali.derived.schemas import DerivedBundle
from astro_facts.domain.kundali.engine import FactSheetBuilder
from astro_facts.domain.kundali.errors import ValidationMismatchError
from astro_facts.domain.kundali.schemas import FactModel, FactSheet
from astro_facts.domain.rules.evaluator import RuleEvaluator
from astro_facts.domain.rules.rule_engine import RuleEngine
from astro_facts.domain.rules.schemas import CustomRule, EvaluatedRules, RuleMatchResult
from astro_facts.domain.validation.outline_validator import validate_outline
from astro_facts.domain.validation.schemas import ValidationResult

logger = logging.getLogger(__name__)


class ChartAnalysis(FactModel):
    """
    Everything computed for one chart, handed to downstream consumers.
    """
    facts: FactSheet
    derived: DerivedBundle
    rules: EvaluatedRules
    dasha: ExpandedDasha


class ChartService:
    """
    Core orchestration service for chart analysis.

    Data flows one way: payload → facts → derived / rules / dasha, and an
    outline can only be released once it agrees with all of them.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings
        self.fact_builder = FactSheetBuilder(self.settings)
        self.derived_builder = DerivedBuilder(self.settings)
        self.rule_evaluator = RuleEvaluator()
        self.dasha_expander = DashaExpander(self.settings)
        self.rule_engine = RuleEngine()

    def analyze(self, payload: Any) -> ChartAnalysis:
        # 1. Facts
        facts = self.fact_builder.build(payload)

        # 2. Derived analytics
        derived = self.derived_builder.build(facts)

        # 3. Yogas and doshas
        rules = self.rule_evaluator.evaluate(facts)

        # 4. Dasha
        dasha = self.dasha_expander.expand(facts)

        logger.info(
            f"Chart analyzed: lagna={facts.ascendant.sign_label}, "
            f"{len(rules.yogas)} yogas, {len(rules.doshas)} doshas, "
            f"{len(facts.diagnostics)} diagnostics"
        )
        return ChartAnalysis(facts=facts, derived=derived, rules=rules, dasha=dasha)

    def verify(self, analysis: ChartAnalysis, outline: Any) -> ValidationResult:
        return validate_outline(
            analysis.facts,
            outline,
            rules=analysis.rules,
            dasha=analysis.dasha,
            strengths=analysis.derived.strengths,
            settings=self.settings,
        )

    def guard_release(self, analysis: ChartAnalysis, outline: Any) -> ValidationResult:
        """
        Return the validation result, or raise ValidationMismatchError
        while any mismatch remains.
        """
        result = self.verify(analysis, outline)
        if not result.valid:
            error = ValidationMismatchError(list(result.errors))
            logger.warning(f"[{error.code.value}] Release blocked: {len(error.errors)} mismatch(es)")
            raise error
        return result

    def evaluate_custom(
        self,
        analysis: ChartAnalysis,
        rules: List[Any],
    ) -> List[RuleMatchResult]:
        parsed = [
            rule if isinstance(rule, CustomRule) else CustomRule.model_validate(rule)
            for rule in rules
        ]
        return self.rule_engine.evaluate(
            analysis.facts,
            parsed,
            derived=analysis.derived,
            evaluated=analysis.rules,
        )
