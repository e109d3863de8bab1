from typing import Any, Dict, Tuple

from astro_facts.domain.kundali.derived.schemas import DerivedBundle
from astro_facts.domain.kundali.names import resolve_planet, resolve_sign
from astro_facts.domain.kundali.schemas import FactSheet
from astro_facts.domain.rules.schemas import EvaluatedRules


class RuleMatcher:
    """
    Evaluates atomic rule conditions against domain objects.
    """

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def match(
        self,
        facts: FactSheet,
        derived: DerivedBundle | None,
        rules: EvaluatedRules | None,
        condition: Dict[str, Any],
    ) -> Tuple[bool, Dict[str, Any]]:
        """
        Evaluate a single atomic condition.

        Returns:
            (matched, trigger_snapshot)
        """
        entity = condition.get("entity")

        if entity == "planet":
            return self._match_planet(facts, condition)

        if entity == "house":
            return self._match_house(derived, condition)

        if entity == "dosha":
            return self._match_detection(rules, condition, "dosha")

        if entity == "yoga":
            return self._match_detection(rules, condition, "yoga")

        # Unknown condition type
        return False, {}

    # ─────────────────────────────────────────────
    # Planet condition
    # ─────────────────────────────────────────────

    def _match_planet(
        self,
        facts: FactSheet,
        condition: Dict[str, Any],
    ) -> Tuple[bool, Dict[str, Any]]:
        planet_name = resolve_planet(condition.get("name"))
        required_house = condition.get("house")
        required_sign = condition.get("sign")
        required_dignity = condition.get("dignity")
        required_retro = condition.get("retrograde")

        planet = facts.get_planet(planet_name) if planet_name else None

        if not planet:
            return False, {}

        if required_house is not None and planet.house != required_house:
            return False, {}

        if required_sign is not None and planet.sign != resolve_sign(required_sign):
            return False, {}

        if required_dignity is not None and planet.dignity != required_dignity:
            return False, {}

        if required_retro is not None and planet.is_retro != required_retro:
            return False, {}

        return True, {
            "entity_type": "planet",
            "entity_key": planet.planet,
            "snapshot": {
                "sign": planet.sign_label,
                "house": planet.house,
                "degree": planet.degree,
                "dignity": planet.dignity,
                "retrograde": planet.is_retro,
            },
        }

    # ─────────────────────────────────────────────
    # House condition
    # ─────────────────────────────────────────────

    def _match_house(
        self,
        derived: DerivedBundle | None,
        condition: Dict[str, Any],
    ) -> Tuple[bool, Dict[str, Any]]:
        if not derived:
            return False, {}

        house_num = condition.get("house")
        required_strength = condition.get("strength")
        occupied_by = condition.get("occupied_by")
        min_power = condition.get("min_aspect_power")

        house = derived.house(house_num)

        if not house:
            return False, {}

        if required_strength and house.strength != required_strength:
            return False, {}

        if occupied_by and resolve_planet(occupied_by) not in house.occupants:
            return False, {}

        if min_power is not None and house.aspect_power < min_power:
            return False, {}

        return True, {
            "entity_type": "house",
            "entity_key": str(house_num),
            "snapshot": {
                "sign": house.sign_label,
                "lord": house.lord,
                "occupants": list(house.occupants),
                "aspect_power": house.aspect_power,
                "strength": house.strength,
                "reasons": list(house.reasons),
            },
        }

    # ─────────────────────────────────────────────
    # Yoga / Dosha condition
    # ─────────────────────────────────────────────

    def _match_detection(
        self,
        rules: EvaluatedRules | None,
        condition: Dict[str, Any],
        kind: str,
    ) -> Tuple[bool, Dict[str, Any]]:
        if not rules:
            return False, {}

        key = condition.get("name")
        required_present = condition.get("present", True)

        detections = rules.doshas if kind == "dosha" else rules.yogas
        detection = next((d for d in detections if d.key == key), None)

        if (detection is not None) != required_present:
            return False, {}

        return True, {
            "entity_type": kind,
            "entity_key": key,
            "snapshot": {
                "present": detection is not None,
                "label": detection.label if detection else None,
                "factors": list(detection.factors) if detection else [],
            },
        }
