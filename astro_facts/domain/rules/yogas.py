"""
Canonical yoga detectors.

Each detector is a pure function `FactSheet -> list[YogaDetection]`.
An empty list means the yoga is absent (or a planet it needs is
missing from the chart).
"""
from typing import Callable, List, Optional

from astro_facts.domain.kundali.calculator import house_from_signs, sign_in_house
from astro_facts.domain.kundali.dignity import sign_lord
from astro_facts.domain.kundali.schemas import FactSheet, PlanetFact
from astro_facts.domain.kundali.tables import DUSTHANA_HOUSES, KENDRA_HOUSES
from astro_facts.domain.rules.schemas import YogaDetection


YogaDetector = Callable[[FactSheet], List[YogaDetection]]


# ─────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────

def divisional_support(planet: PlanetFact) -> Optional[str]:
    """
    Navamsha confirmation of a yoga-forming planet.
    """
    d9 = planet.divisional.get("D9")
    if d9 is None or d9.dignity is None:
        return None
    if d9.dignity in ("Own", "Exalted"):
        return "reinforced"
    if d9.dignity == "Debilitated":
        return "weakened"
    return None


def lord_of_house(facts: FactSheet, house: int) -> Optional[PlanetFact]:
    lord = sign_lord(sign_in_house(facts.ascendant.sign, house))
    return facts.get_planet(lord)


# ─────────────────────────────────────────────
# Pancha Mahapurusha
# ─────────────────────────────────────────────

GREAT_PERSON_YOGAS = {
    "yoga.ruchaka": ("Mars", "Ruchaka Yoga"),
    "yoga.bhadra": ("Mercury", "Bhadra Yoga"),
    "yoga.hamsa": ("Jupiter", "Hamsa Yoga"),
    "yoga.malavya": ("Venus", "Malavya Yoga"),
    "yoga.shasha": ("Saturn", "Shasha Yoga"),
}


def great_person_detector(key: str) -> YogaDetector:
    """
    Detector for one Pancha Mahapurusha yoga.

    The planet is bound here, not read from whichever entry happens to
    satisfy the condition, so `yoga.shasha` can only ever name Saturn.
    """
    bound_planet, label = GREAT_PERSON_YOGAS[key]

    def detect(facts: FactSheet) -> List[YogaDetection]:
        planet = facts.get_planet(bound_planet)
        if planet is None:
            return []

        if planet.house not in KENDRA_HOUSES or planet.dignity not in ("Own", "Exalted"):
            return []

        return [YogaDetection(
            key=key,
            label=label,
            factors=(
                f"{bound_planet} {planet.dignity} in {planet.sign_label}",
                f"Kendra house {planet.house}",
            ),
            why=(
                f"{bound_planet} occupies kendra house {planet.house} in "
                f"{planet.dignity.lower()} dignity ({planet.sign_label})"
            ),
            strength_hint="strong",
            group="pancha-mahapurusha",
            planets=(bound_planet,),
            planet=bound_planet,
            kendra=planet.house,
            dignity=planet.dignity,
            divisional_support=divisional_support(planet),
        )]

    detect.__name__ = f"detect_{key.split('.')[-1]}"
    return detect


# ─────────────────────────────────────────────
# Vipareeta Raja Yoga
# ─────────────────────────────────────────────

VIPAREETA_LABELS = {
    6: "Harsha Vipareeta Raja Yoga",
    8: "Sarala Vipareeta Raja Yoga",
    12: "Vimala Vipareeta Raja Yoga",
}


def detect_vipareeta(facts: FactSheet) -> List[YogaDetection]:
    """
    One detection per (owned dusthana, placed dusthana) pair where a
    dusthana lord sits in a different dusthana.
    """
    detections: List[YogaDetection] = []

    for planet in facts.planets:
        if planet.house not in DUSTHANA_HOUSES:
            continue

        for owned in planet.lord_of:
            if owned not in DUSTHANA_HOUSES or owned == planet.house:
                continue

            detections.append(YogaDetection(
                key=f"yoga.vipareeta.{owned}-{planet.house}",
                label=VIPAREETA_LABELS[owned],
                factors=(
                    f"{planet.planet} rules house {owned}",
                    f"{planet.planet} placed in house {planet.house}",
                ),
                why=f"Lord of dusthana {owned} placed in dusthana {planet.house}",
                strength_hint="medium",
                group="vipareeta",
                planets=(planet.planet,),
                planet=planet.planet,
                lord_of=owned,
                placed_in=planet.house,
                divisional_support=divisional_support(planet),
            ))

    return detections


# ─────────────────────────────────────────────
# Moon / Sun combinations
# ─────────────────────────────────────────────

def detect_gajakesari(facts: FactSheet) -> List[YogaDetection]:
    """
    Jupiter in the 1st, 4th, 7th or 10th sign counted from the Moon.
    """
    moon = facts.get_planet("Moon")
    jupiter = facts.get_planet("Jupiter")
    if moon is None or jupiter is None:
        return []

    distance = house_from_signs(jupiter.sign, moon.sign)
    if distance not in KENDRA_HOUSES:
        return []

    both_angular = moon.house in KENDRA_HOUSES and jupiter.house in KENDRA_HOUSES

    return [YogaDetection(
        key="yoga.gajakesari",
        label="Gaja-Kesari Yoga",
        factors=(
            f"Jupiter (H{jupiter.house}) is {distance} from Moon (H{moon.house})",
        ),
        why=f"Jupiter stands in kendra {distance} counted from the Moon",
        strength_hint="strong" if both_angular else "medium",
        group="lunar",
        planets=("Moon", "Jupiter"),
        planet="Jupiter",
        kendra=distance,
        divisional_support=divisional_support(jupiter),
    )]


def detect_budha_aditya(facts: FactSheet) -> List[YogaDetection]:
    sun = facts.get_planet("Sun")
    mercury = facts.get_planet("Mercury")
    if sun is None or mercury is None or sun.sign != mercury.sign:
        return []

    return [YogaDetection(
        key="yoga.budha-aditya",
        label="Budha-Aditya Yoga",
        factors=(f"Sun & Mercury conjoined in {sun.sign_label} (H{sun.house})",),
        why="Sun and Mercury occupy the same sign",
        strength_hint="strong" if sun.house in KENDRA_HOUSES else "medium",
        group="solar",
        planets=("Sun", "Mercury"),
        planet="Mercury",
        divisional_support=divisional_support(mercury),
    )]


# ─────────────────────────────────────────────
# Lordship yogas
# ─────────────────────────────────────────────

def lordship_detector(
    key: str,
    label: str,
    owned_house: int,
    placements: frozenset,
) -> YogaDetector:
    """
    Detector for "lord of house X placed in one of houses Y".
    """

    def detect(facts: FactSheet) -> List[YogaDetection]:
        lord = lord_of_house(facts, owned_house)
        if lord is None or lord.house not in placements:
            return []

        return [YogaDetection(
            key=key,
            label=label,
            factors=(f"{lord.planet} rules house {owned_house}",
                     f"{lord.planet} placed in house {lord.house}"),
            why=f"Lord of house {owned_house} placed in house {lord.house}",
            strength_hint="medium",
            group="lordship",
            planets=(lord.planet,),
            planet=lord.planet,
            lord_of=owned_house,
            placed_in=lord.house,
            divisional_support=divisional_support(lord),
        )]

    detect.__name__ = f"detect_{key.split('.')[-1].replace('-', '_')}"
    return detect


detect_raja = lordship_detector("yoga.raja-yoga", "Raja Yoga", 9, frozenset({9, 10, 11}))
detect_dhana = lordship_detector("yoga.dhana-yoga", "Dhana Yoga", 2, frozenset({2, 5, 9, 11}))
detect_karma = lordship_detector("yoga.karma-yoga", "Karma Yoga", 10, frozenset({10}))
detect_moksha = lordship_detector("yoga.moksha-yoga", "Moksha Yoga", 12, frozenset({12}))
