from typing import Any, Dict, List

from astro_facts.domain.kundali.derived.schemas import DerivedBundle
from astro_facts.domain.kundali.schemas import FactSheet
from astro_facts.domain.rules.rule_matcher import RuleMatcher
from astro_facts.domain.rules.schemas import CustomRule, EvaluatedRules, RuleMatchResult


class RuleEngine:
    """
    Evaluates caller-supplied declarative rules against a chart.

    This engine:
    - Evaluates structured rule conditions
    - Is deterministic
    - Produces explainable outputs
    """

    def __init__(self, matcher: RuleMatcher | None = None):
        self.matcher = matcher or RuleMatcher()

    def evaluate(
        self,
        facts: FactSheet,
        rules: List[CustomRule],
        *,
        derived: DerivedBundle | None = None,
        evaluated: EvaluatedRules | None = None,
    ) -> List[RuleMatchResult]:
        """
        Evaluate all rules and return the ones that matched.
        """
        results: List[RuleMatchResult] = []

        for rule in rules:
            conditions = rule.conditions.model_dump()
            matched, triggers = self._evaluate_rule(
                facts, derived, evaluated, conditions,
            )

            if matched:
                results.append(
                    RuleMatchResult(
                        rule=rule,
                        matched=True,
                        triggered_entities=triggers,
                    )
                )

        return results

    # ─────────────────────────────────────────────
    # Internal evaluation logic
    # ─────────────────────────────────────────────

    def _evaluate_rule(
        self,
        facts: FactSheet,
        derived: DerivedBundle | None,
        evaluated: EvaluatedRules | None,
        conditions: Dict[str, Any],
    ) -> tuple[bool, List[Dict[str, Any]]]:
        """
        Evaluate a single rule condition tree.
        """
        if "all" in conditions:
            triggers = []
            for clause in conditions["all"]:
                ok, trigger = self.matcher.match(facts, derived, evaluated, clause)
                if not ok:
                    return False, []
                triggers.append(trigger)
            return True, triggers

        if "any" in conditions:
            for clause in conditions["any"]:
                ok, trigger = self.matcher.match(facts, derived, evaluated, clause)
                if ok:
                    return True, [trigger]
            return False, []

        # Unknown structure → fail safely
        return False, []
