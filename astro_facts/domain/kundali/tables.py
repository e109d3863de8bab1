"""
Fixed Vedic domain tables.

Every table is read-only (tuples, frozensets and MappingProxyType) so
that no caller can mutate shared state between chart requests.
"""
from types import MappingProxyType


# ─────────────────────────────────────────────
# Signs and planets
# ─────────────────────────────────────────────

SIGNS = (
    "Aries", "Taurus", "Gemini", "Cancer",
    "Leo", "Virgo", "Libra", "Scorpio",
    "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)

CLASSICAL_PLANETS = (
    "Sun", "Moon", "Mars", "Mercury", "Jupiter", "Venus", "Saturn",
)

NODES = ("Rahu", "Ketu")

ALL_BODIES = CLASSICAL_PLANETS + NODES


# ─────────────────────────────────────────────
# House groups
# ─────────────────────────────────────────────

KENDRA_HOUSES = frozenset({1, 4, 7, 10})
DUSTHANA_HOUSES = frozenset({6, 8, 12})

HOUSE_NAMES = MappingProxyType({
    1: "1st House (Lagna)",
    2: "2nd House (Dhana)",
    3: "3rd House (Sahaja)",
    4: "4th House (Sukha)",
    5: "5th House (Putra)",
    6: "6th House (Ari)",
    7: "7th House (Kalatra)",
    8: "8th House (Ayu)",
    9: "9th House (Bhagya)",
    10: "10th House (Karma)",
    11: "11th House (Labha)",
    12: "12th House (Vyaya)",
})

HOUSE_THEMES = MappingProxyType({
    1: ("personality", "health", "appearance", "overall life"),
    2: ("wealth", "family", "speech", "food habits"),
    3: ("courage", "siblings", "communication", "short journeys"),
    4: ("mother", "home", "education", "property"),
    5: ("children", "creativity", "speculation", "romance"),
    6: ("health", "service", "enemies", "daily work"),
    7: ("marriage", "partnerships", "business", "spouse"),
    8: ("transformation", "occult", "longevity", "shared resources"),
    9: ("father", "higher learning", "spirituality", "long journeys"),
    10: ("career", "reputation", "authority", "public image"),
    11: ("gains", "friends", "aspirations", "income"),
    12: ("losses", "spirituality", "foreign lands", "subconscious"),
})


# ─────────────────────────────────────────────
# Lordship and dignity
# ─────────────────────────────────────────────

SIGN_LORDS = MappingProxyType({
    1: "Mars",
    2: "Venus",
    3: "Mercury",
    4: "Moon",
    5: "Sun",
    6: "Mercury",
    7: "Venus",
    8: "Mars",
    9: "Jupiter",
    10: "Saturn",
    11: "Saturn",
    12: "Jupiter",
})

EXALTATION_SIGNS = MappingProxyType({
    "Sun": 1,
    "Moon": 2,
    "Mars": 10,
    "Mercury": 6,
    "Jupiter": 4,
    "Venus": 12,
    "Saturn": 7,
})

DEBILITATION_SIGNS = MappingProxyType({
    "Sun": 7,
    "Moon": 8,
    "Mars": 4,
    "Mercury": 12,
    "Jupiter": 10,
    "Venus": 6,
    "Saturn": 1,
})

OWN_SIGNS = MappingProxyType({
    "Sun": frozenset({5}),
    "Moon": frozenset({4}),
    "Mars": frozenset({1, 8}),
    "Mercury": frozenset({3, 6}),
    "Jupiter": frozenset({9, 12}),
    "Venus": frozenset({2, 7}),
    "Saturn": frozenset({10, 11}),
})


# ─────────────────────────────────────────────
# Natural relationships
# ─────────────────────────────────────────────

NATURAL_FRIENDS = MappingProxyType({
    "Sun": frozenset({"Moon", "Mars", "Jupiter"}),
    "Moon": frozenset({"Sun", "Mercury"}),
    "Mars": frozenset({"Sun", "Moon", "Jupiter"}),
    "Mercury": frozenset({"Sun", "Venus"}),
    "Jupiter": frozenset({"Sun", "Moon", "Mars"}),
    "Venus": frozenset({"Mercury", "Saturn"}),
    "Saturn": frozenset({"Mercury", "Venus"}),
    "Rahu": frozenset({"Venus", "Saturn", "Mercury"}),
    "Ketu": frozenset({"Mars", "Jupiter", "Venus"}),
})

# Explicit neutrals; bodies not listed here or as friends are enemies.
NATURAL_NEUTRALS = MappingProxyType({
    body: frozenset() for body in ALL_BODIES
})


# ─────────────────────────────────────────────
# Aspects (drishti)
# ─────────────────────────────────────────────

# Houses counted inclusively from the aspecting planet's own house.
SPECIAL_ASPECTS = MappingProxyType({
    "Mars": (4, 8),
    "Jupiter": (5, 9),
    "Saturn": (3, 10),
})

UNIVERSAL_ASPECT = 7

ASPECT_WEIGHTS = MappingProxyType({
    "7": 1.0,
    "mars": 1.1,
    "jupiter": 1.2,
    "saturn": 1.1,
})


# ─────────────────────────────────────────────
# Strength fallback
# ─────────────────────────────────────────────

DIGNITY_FALLBACK_SCORES = MappingProxyType({
    "Exalted": 1.2,
    "Own": 0.9,
    "Neutral": 0.6,
    "Debilitated": 0.3,
})
