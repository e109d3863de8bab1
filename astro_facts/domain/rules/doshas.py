"""
Canonical dosha detectors.

Each detector is a pure function `FactSheet -> list[DoshaDetection]`.
Relative positions from the Moon use whole-sign counting.
"""
from typing import Callable, List

from astro_facts.domain.kundali.calculator import house_from_signs, wrap_house
from astro_facts.domain.kundali.schemas import FactSheet, PlanetFact
from astro_facts.domain.kundali.tables import CLASSICAL_PLANETS, DUSTHANA_HOUSES, NODES
from astro_facts.domain.rules.schemas import DoshaDetection


DoshaDetector = Callable[[FactSheet], List[DoshaDetection]]

# Houses considered for Mangal Dosha
MANGAL_DOSHA_HOUSES = frozenset({1, 2, 4, 7, 8, 12})


def _with_node(facts: FactSheet, planet: PlanetFact) -> List[str]:
    nodes = []
    for node in NODES:
        other = facts.get_planet(node)
        if other is not None and other.house == planet.house:
            nodes.append(node)
    return nodes


# ─────────────────────────────────────────────
# Eclipse-type doshas
# ─────────────────────────────────────────────

def detect_grahan_surya(facts: FactSheet) -> List[DoshaDetection]:
    sun = facts.get_planet("Sun")
    if sun is None:
        return []

    nodes = _with_node(facts, sun)
    if not nodes:
        return []

    return [DoshaDetection(
        key="dosha.grahan.surya",
        label="Surya Grahan Dosha",
        factors=(f"Sun with {'/'.join(nodes)} in H{sun.house}",),
        why="Sun shares a house with a lunar node",
        group="grahan",
        planets=("Sun", *nodes),
    )]


def detect_grahan_chandra(facts: FactSheet) -> List[DoshaDetection]:
    moon = facts.get_planet("Moon")
    if moon is None:
        return []

    nodes = _with_node(facts, moon)
    if not nodes:
        return []

    return [DoshaDetection(
        key="dosha.grahan.chandra",
        label="Chandra Grahan Dosha",
        factors=(f"Moon with {'/'.join(nodes)} in H{moon.house}",),
        why="Moon shares a house with a lunar node",
        group="grahan",
        planets=("Moon", *nodes),
    )]


def detect_pitri(facts: FactSheet) -> List[DoshaDetection]:
    sun = facts.get_planet("Sun")
    if sun is None:
        return []

    nodes = _with_node(facts, sun)
    if not nodes:
        return []

    return [DoshaDetection(
        key="dosha.pitri",
        label="Pitri Dosha",
        factors=("Sun afflicted by Rahu/Ketu",),
        why="Sun conjoined with a node afflicts the significator of the father",
        group="grahan",
        planets=("Sun", *nodes),
    )]


# ─────────────────────────────────────────────
# Mangal Dosha
# ─────────────────────────────────────────────

def detect_mangal(facts: FactSheet) -> List[DoshaDetection]:
    """
    Mars in 1/2/4/7/8/12 counted from the ascendant or from the Moon.
    """
    mars = facts.get_planet("Mars")
    if mars is None:
        return []

    reasons: List[str] = []
    if mars.house in MANGAL_DOSHA_HOUSES:
        reasons.append(f"Mars in sensitive house (H{mars.house})")

    moon = facts.get_planet("Moon")
    if moon is not None:
        from_moon = house_from_signs(mars.sign, moon.sign)
        if from_moon in MANGAL_DOSHA_HOUSES:
            reasons.append(f"Mars {from_moon} from Moon")

    if not reasons:
        return []

    return [DoshaDetection(
        key="dosha.mangal",
        label="Mangal (Kuja) Dosha",
        factors=tuple(reasons),
        why="Mars occupies a Manglik position",
        severity="medium",
        group="mangal",
        planets=("Mars",),
    )]


# ─────────────────────────────────────────────
# Kaal Sarpa Dosha
# ─────────────────────────────────────────────

def detect_kaalsarpa(facts: FactSheet) -> List[DoshaDetection]:
    """
    All seven classical planets strictly inside, or strictly outside,
    the house span between Rahu and Ketu.
    """
    rahu = facts.get_planet("Rahu")
    ketu = facts.get_planet("Ketu")
    if rahu is None or ketu is None or rahu.house == ketu.house:
        return []

    seven = [facts.get_planet(name) for name in CLASSICAL_PLANETS]
    if any(p is None for p in seven):
        return []

    low, high = sorted((rahu.house, ketu.house))
    inside = all(low < p.house < high for p in seven)
    outside = all(p.house < low or p.house > high for p in seven)

    if not (inside or outside):
        return []

    return [DoshaDetection(
        key="dosha.kaalsarpa",
        label="Kaal Sarpa Dosha",
        factors=("Seven planets hemmed by the Rahu-Ketu axis",),
        why=f"All classical planets lie on one side of Rahu (H{rahu.house}) and Ketu (H{ketu.house})",
        severity="high",
        group="nodal",
        planets=("Rahu", "Ketu"),
    )]


# ─────────────────────────────────────────────
# Conjunction doshas
# ─────────────────────────────────────────────

def _conjunction(
    facts: FactSheet,
    first: str,
    second: str,
) -> PlanetFact | None:
    a = facts.get_planet(first)
    b = facts.get_planet(second)
    if a is None or b is None or a.house != b.house:
        return None
    return a


def detect_shrapit(facts: FactSheet) -> List[DoshaDetection]:
    saturn = _conjunction(facts, "Saturn", "Rahu")
    if saturn is None:
        return []

    return [DoshaDetection(
        key="dosha.shrapit",
        label="Shrapit Dosha",
        factors=(f"Saturn & Rahu in H{saturn.house}",),
        why="Saturn conjoined with Rahu",
        group="conjunction",
        planets=("Saturn", "Rahu"),
    )]


def detect_vish(facts: FactSheet) -> List[DoshaDetection]:
    saturn = _conjunction(facts, "Saturn", "Moon")
    if saturn is None:
        return []

    return [DoshaDetection(
        key="dosha.vish-yoga",
        label="Vish (Saturn-Moon) Dosha",
        factors=(f"Saturn & Moon together in H{saturn.house}",),
        why="Saturn conjoined with the Moon",
        group="conjunction",
        planets=("Saturn", "Moon"),
    )]


def detect_guru_chandala(facts: FactSheet) -> List[DoshaDetection]:
    jupiter = facts.get_planet("Jupiter")
    if jupiter is None:
        return []

    nodes = _with_node(facts, jupiter)
    if not nodes:
        return []

    return [DoshaDetection(
        key="dosha.guru-chandala",
        label="Guru-Chandala Dosha",
        factors=(f"Jupiter with {'/'.join(nodes)} in H{jupiter.house}",),
        why="Jupiter conjoined with a lunar node",
        group="conjunction",
        planets=("Jupiter", *nodes),
    )]


# ─────────────────────────────────────────────
# Moon-centred doshas
# ─────────────────────────────────────────────

def detect_kemadruma(facts: FactSheet) -> List[DoshaDetection]:
    """
    No classical planet other than the Moon in the houses on either side
    of the Moon.
    """
    moon = facts.get_planet("Moon")
    if moon is None:
        return []

    neighbours = {wrap_house(moon.house - 1), wrap_house(moon.house + 1)}
    flanking = [
        p.planet for p in facts.planets
        if p.planet in CLASSICAL_PLANETS and p.planet != "Moon" and p.house in neighbours
    ]
    if flanking:
        return []

    return [DoshaDetection(
        key="dosha.kemadruma",
        label="Kemadruma Dosha",
        factors=("No classical planet on either side of Moon",),
        why=f"Houses {min(neighbours)} and {max(neighbours)} around the Moon are empty of classical planets",
        group="lunar",
        planets=("Moon",),
    )]


def detect_ashtama_shani(facts: FactSheet) -> List[DoshaDetection]:
    saturn = facts.get_planet("Saturn")
    moon = facts.get_planet("Moon")
    if saturn is None or moon is None:
        return []

    if house_from_signs(saturn.sign, moon.sign) != 8:
        return []

    return [DoshaDetection(
        key="dosha.ashtama-shani",
        label="Ashtama Shani (from Moon)",
        factors=("Saturn is 8th from Moon",),
        why=f"Saturn in {saturn.sign_label} is eighth from the Moon in {moon.sign_label}",
        group="lunar",
        planets=("Saturn", "Moon"),
    )]


# ─────────────────────────────────────────────
# House-pattern doshas
# ─────────────────────────────────────────────

def detect_daridra(facts: FactSheet) -> List[DoshaDetection]:
    heavy = [
        p.planet for p in facts.planets
        if p.planet in ("Mars", "Saturn", "Rahu", "Ketu") and p.house in (2, 11)
    ]
    if len(heavy) < 2:
        return []

    return [DoshaDetection(
        key="dosha.daridra",
        label="Daridra Dosha",
        factors=("Multiple malefics in 2nd/11th houses",),
        why=f"{', '.join(heavy)} occupy the wealth and gains houses",
        group="house-pattern",
        planets=tuple(heavy),
    )]


def detect_papakartari_10(facts: FactSheet) -> List[DoshaDetection]:
    malefics = [facts.get_planet(name) for name in ("Mars", "Saturn")]
    in_9 = [p.planet for p in malefics if p is not None and p.house == 9]
    in_11 = [p.planet for p in malefics if p is not None and p.house == 11]
    if not in_9 or not in_11:
        return []

    return [DoshaDetection(
        key="dosha.papakartari.10",
        label="Papakartari (around 10th)",
        factors=("Malefics in 9th and 11th hemming the 10th house",),
        why=f"{in_9[0]} in the 9th and {in_11[0]} in the 11th flank the career house",
        group="house-pattern",
        planets=(in_9[0], in_11[0]),
    )]


def detect_alpa_shakti(facts: FactSheet) -> List[DoshaDetection]:
    crowd = [
        p.planet for p in facts.planets
        if p.planet not in NODES and p.house in DUSTHANA_HOUSES
    ]
    if len(crowd) < 4:
        return []

    return [DoshaDetection(
        key="dosha.alpa-shakti",
        label="Alpa Shakti (Dusthana crowd)",
        factors=(f"{len(crowd)} planets across 6/8/12 houses",),
        why="Four or more planets occupy dusthana houses",
        group="house-pattern",
        planets=tuple(crowd),
    )]
