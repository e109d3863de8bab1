"""
Consistency check of an externally produced outline against the facts.

Pure function over already-built structures: it never raises for a data
mismatch, only for an outline that lacks required fields.
"""
import logging
from typing import Any, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from astro_facts.config import Settings, settings as default_settings
from astro_facts.domain.dasha.schemas import ExpandedDasha
from astro_facts.domain.kundali.derived.schemas import PlanetStrength
from astro_facts.domain.kundali.errors import InvalidOutlineError
from astro_facts.domain.kundali.names import resolve_planet, resolve_sign
from astro_facts.domain.kundali.schemas import FactSheet
from astro_facts.domain.kundali.tables import DUSTHANA_HOUSES
from astro_facts.domain.rules.catalog import YOGA_ALIASES, YOGA_CATALOG
from astro_facts.domain.rules.evaluator import provider_key
from astro_facts.domain.rules.schemas import EvaluatedRules
from astro_facts.domain.rules.yogas import GREAT_PERSON_YOGAS, lord_of_house
from astro_facts.domain.validation.schemas import (
    Outline,
    OutlineDashas,
    OutlinePosition,
    OutlineStrength,
    OutlineYoga,
    ValidationResult,
)

logger = logging.getLogger(__name__)

VIPAREETA = "yoga.vipareeta"


def validate_outline(
    facts: FactSheet,
    outline: Any,
    *,
    rules: EvaluatedRules | None = None,
    dasha: ExpandedDasha | None = None,
    strengths: Sequence[PlanetStrength] | None = None,
    settings: Settings | None = None,
) -> ValidationResult:
    """
    Compare every claim in `outline` with the canonical facts.

    All discrepancies are collected; `valid` is True only when there are
    none. Catalog yogas are re-derived from the facts; provider-only yoga
    keys, dasha and strength claims are checked only when the matching
    evaluated structure is supplied.
    """
    settings = settings or default_settings
    outline = _parse(outline)
    errors: List[str] = []

    # ─────────────────────────────────────────────
    # Step 1: Lagna
    # ─────────────────────────────────────────────

    claimed_lagna = resolve_sign(outline.summary.lagna)
    if claimed_lagna != facts.ascendant.sign:
        errors.append(
            f"Lagna mismatch: outline says {outline.summary.lagna}, "
            f"facts say {facts.ascendant.sign_label}"
        )

    if resolve_planet(outline.summary.lagna_lord) != facts.ascendant.lord:
        errors.append(
            f"Lagna lord mismatch: outline says {outline.summary.lagna_lord}, "
            f"facts say {facts.ascendant.lord}"
        )

    # ─────────────────────────────────────────────
    # Step 2: Positions
    # ─────────────────────────────────────────────

    for position in outline.positions:
        errors.extend(_check_position(facts, position))

    # ─────────────────────────────────────────────
    # Step 3: Yoga attributions
    # ─────────────────────────────────────────────

    for yoga in outline.yogas:
        errors.extend(_check_yoga(facts, yoga, rules, settings.STRICT_VALIDATION))

    # ─────────────────────────────────────────────
    # Step 4: Dasha and strength claims
    # ─────────────────────────────────────────────

    if outline.dashas is not None and dasha is not None:
        errors.extend(_check_dasha(outline.dashas, dasha))

    if outline.shadbala and strengths is not None:
        errors.extend(_check_strengths(outline.shadbala, strengths))

    if errors:
        logger.warning(f"Outline rejected with {len(errors)} mismatch(es)")
    return ValidationResult(valid=not errors, errors=tuple(errors))


# ─────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────

def _parse(outline: Any) -> Outline:
    if isinstance(outline, Outline):
        return outline
    try:
        return Outline.model_validate(outline)
    except ValidationError as e:
        raise InvalidOutlineError(f"Malformed outline: {e}") from e


def canonical_yoga_key(yoga: OutlineYoga) -> str:
    """
    Map an outline yoga key (canonical or legacy such as "PMP_Shasha" or
    "VRY") onto the catalog key space.
    """
    key = yoga.key.strip()
    if key in YOGA_CATALOG or key.startswith(VIPAREETA + "."):
        canonical = key
    else:
        canonical = provider_key(key, "yoga", YOGA_ALIASES)

    if canonical == VIPAREETA and yoga.lord_of is not None and yoga.placed_in is not None:
        canonical = f"{VIPAREETA}.{yoga.lord_of}-{yoga.placed_in}"
    return canonical


# ─────────────────────────────────────────────
# Checks
# ─────────────────────────────────────────────

def _check_position(facts: FactSheet, position: OutlinePosition) -> List[str]:
    name = resolve_planet(position.planet)
    planet = facts.get_planet(name) if name else None
    if planet is None:
        return [f"Planet {position.planet} not found in facts"]

    errors: List[str] = []
    label = position.planet

    if position.house != planet.house:
        errors.append(
            f"House mismatch for {label}: outline says {position.house}, facts say {planet.house}"
        )

    if resolve_sign(position.sign) != planet.sign:
        errors.append(
            f"Sign mismatch for {label}: outline says {position.sign}, facts say {planet.sign_label}"
        )

    if sorted(position.lord_of) != sorted(planet.lord_of):
        claimed = ",".join(str(h) for h in position.lord_of)
        actual = ",".join(str(h) for h in planet.lord_of)
        errors.append(
            f"Lordship mismatch for {label}: outline says [{claimed}], facts say [{actual}]"
        )

    if not _same_dignity(position.dignity, planet.dignity):
        errors.append(
            f"Dignity mismatch for {label}: outline says {position.dignity}, facts say {planet.dignity}"
        )

    return errors


def _check_yoga(
    facts: FactSheet,
    yoga: OutlineYoga,
    rules: EvaluatedRules | None,
    strict: bool,
) -> List[str]:
    key = canonical_yoga_key(yoga)

    if key in GREAT_PERSON_YOGAS:
        errors = _check_great_person(facts, key, yoga)
    elif key == VIPAREETA or key.startswith(VIPAREETA + "."):
        errors = _check_vipareeta(facts, key, yoga)
    else:
        errors = []

    if errors or not strict:
        return errors

    # Catalog yogas are re-derived from the facts; provider-only keys
    # can only be checked against evaluated rules.
    in_catalog = key in YOGA_CATALOG or key.startswith(VIPAREETA + ".")
    if not in_catalog and rules is None:
        return errors

    holds = in_catalog and _holds(facts, key)
    if not holds and rules is not None:
        holds = _detected(key, rules)
    if not holds:
        errors.append(f"Yoga {yoga.key} claimed but not detected in chart")

    return errors


def _check_great_person(facts: FactSheet, key: str, yoga: OutlineYoga) -> List[str]:
    bound, label = GREAT_PERSON_YOGAS[key]
    errors: List[str] = []

    if yoga.planet is not None and resolve_planet(yoga.planet) != bound:
        errors.append(f"{label} can only be by {bound}, not {yoga.planet}")
        return errors

    planet = facts.get_planet(bound)
    if planet is None:
        return [f"{label} claimed but {bound} not found in facts"]

    if yoga.kendra is not None and yoga.kendra != planet.house:
        errors.append(
            f"{label} kendra mismatch: outline says {yoga.kendra}, facts say {planet.house}"
        )
    if not _same_dignity(yoga.dignity, planet.dignity):
        errors.append(
            f"{label} dignity mismatch: outline says {yoga.dignity}, facts say {planet.dignity}"
        )
    return errors


def _check_vipareeta(facts: FactSheet, key: str, yoga: OutlineYoga) -> List[str]:
    owned, placed = yoga.lord_of, yoga.placed_in

    if key.startswith(VIPAREETA + "."):
        pair = _vipareeta_pair(key)
        if pair is None:
            return [f"Unreadable vipareeta key {yoga.key}"]
        if owned is None and placed is None:
            owned, placed = pair
        elif pair != (owned, placed):
            return [
                f"Vipareeta key {yoga.key} disagrees with lord of {owned} placed in {placed}"
            ]

    if owned is None or placed is None:
        return []

    if owned not in DUSTHANA_HOUSES or placed not in DUSTHANA_HOUSES or owned == placed:
        return [
            f"Vipareeta Raja Yoga needs two different dusthana houses, "
            f"outline says lord of {owned} placed in {placed}"
        ]

    if yoga.planet is None:
        lord = lord_of_house(facts, owned)
        if lord is None:
            return [f"Vipareeta claim: lord of house {owned} not found in facts"]
        if lord.house != placed:
            return [
                f"Vipareeta claim: lord of house {owned} ({lord.planet}) "
                f"placed in house {lord.house}, not {placed}"
            ]
        return []

    name = resolve_planet(yoga.planet)
    planet = facts.get_planet(name) if name else None
    if planet is None:
        return [f"Planet {yoga.planet} not found in facts"]

    errors: List[str] = []
    if owned not in planet.lord_of:
        errors.append(
            f"Vipareeta claim for {yoga.planet}: it does not rule house {owned}"
        )
    if planet.house != placed:
        errors.append(
            f"Vipareeta claim for {yoga.planet}: placed in house {planet.house}, not {placed}"
        )
    return errors


def _vipareeta_pair(key: str) -> Optional[Tuple[int, int]]:
    owned, _, placed = key[len(VIPAREETA) + 1:].partition("-")
    if not owned.isdigit() or not placed.isdigit():
        return None
    return int(owned), int(placed)


def _holds(facts: FactSheet, key: str) -> bool:
    if key.startswith(VIPAREETA):
        detections = YOGA_CATALOG[VIPAREETA](facts)
        if key == VIPAREETA:
            return bool(detections)
        return any(d.key == key for d in detections)
    return bool(YOGA_CATALOG[key](facts))


def _same_dignity(claimed: Optional[str], actual: Optional[str]) -> bool:
    if claimed is None:
        return True
    return claimed.strip().lower() == (actual or "").lower()


def _detected(key: str, rules: EvaluatedRules) -> bool:
    keys = rules.yoga_keys()
    if key == VIPAREETA:
        return any(k.startswith(VIPAREETA) for k in keys)
    return key in keys


def _check_dasha(claim: OutlineDashas, dasha: ExpandedDasha) -> List[str]:
    current = dasha.current
    if current is None:
        return ["Current dasha claimed but no dasha data is available"]

    errors: List[str] = []
    for level in ("maha", "antar", "pratyantar"):
        claimed = getattr(claim.current, level)
        if claimed is None:
            continue
        period = getattr(current, level)
        actual: Optional[str] = period.planet if period else None
        if resolve_planet(claimed) != actual:
            errors.append(
                f"Current {level} dasha mismatch: outline says {claimed}, facts say {actual}"
            )
    return errors


def _check_strengths(
    claims: Sequence[OutlineStrength],
    strengths: Sequence[PlanetStrength],
) -> List[str]:
    by_planet = {s.planet: s for s in strengths}
    errors: List[str] = []
    for claim in claims:
        name = resolve_planet(claim.planet)
        strength = by_planet.get(name) if name else None
        if strength is None:
            errors.append(f"Planet {claim.planet} not found in strength table")
            continue
        if claim.band.lower() != strength.band:
            errors.append(
                f"Strength band mismatch for {claim.planet}: "
                f"outline says {claim.band}, facts say {strength.band}"
            )
    return errors
