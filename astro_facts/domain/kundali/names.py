"""
Multi-vocabulary name normalization for planets and signs.

Provider payloads mix English names, Sanskrit/Hindi transliterations,
two-letter abbreviations and Devanagari labels. Everything is mapped
onto the canonical English vocabulary used by the fact sheet.

`resolve_*` functions are strict and return None for unknown input.
`normalize_sign` is lenient: an unknown sign falls back to Aries and a
warning is logged. Unknown planets have no safe default.
"""
import logging
import unicodedata
from types import MappingProxyType
from typing import Any, Optional

from astro_facts.domain.kundali.calculator import wrap_sign
from astro_facts.domain.kundali.tables import SIGNS

logger = logging.getLogger(__name__)

DEFAULT_SIGN = 1


# ─────────────────────────────────────────────
# Vocabularies
# ─────────────────────────────────────────────

_PLANET_ALIASES = {
    "Sun": ("sun", "su", "surya", "ravi", "सूर्य"),
    "Moon": ("moon", "mo", "chandra", "chandrama", "soma", "चन्द्र", "चन्द्रमा", "चंद्र", "चंद्रमा"),
    "Mars": ("mars", "ma", "mangal", "mangala", "kuja", "मंगल", "मङ्गल"),
    "Mercury": ("mercury", "me", "budh", "budha", "बुध"),
    "Jupiter": ("jupiter", "ju", "guru", "brihaspati", "brhaspati", "बृहस्पति", "गुरु"),
    "Venus": ("venus", "ve", "shukra", "sukra", "शुक्र"),
    "Saturn": ("saturn", "sa", "shani", "sani", "शनि"),
    "Rahu": ("rahu", "ra", "northnode", "राहु"),
    "Ketu": ("ketu", "ke", "southnode", "केतु"),
}

_SIGN_ALIASES = {
    1: ("aries", "ar", "mesha", "mesh", "मेष"),
    2: ("taurus", "ta", "vrishabha", "vrishabh", "vrisha", "vrushabha", "वृष", "वृषभ"),
    3: ("gemini", "ge", "mithuna", "mithun", "मिथुन"),
    4: ("cancer", "cn", "karka", "kark", "karkata", "कर्क"),
    5: ("leo", "le", "simha", "simh", "singh", "सिंह"),
    6: ("virgo", "vi", "kanya", "कन्या"),
    7: ("libra", "li", "tula", "तुला"),
    8: ("scorpio", "sc", "vrishchika", "vrischika", "vrishchik", "वृश्चिक"),
    9: ("sagittarius", "sg", "dhanu", "dhanus", "dhanush", "धनु"),
    10: ("capricorn", "cp", "makara", "makar", "मकर"),
    11: ("aquarius", "aq", "kumbha", "kumbh", "कुम्भ", "कुंभ"),
    12: ("pisces", "pi", "meena", "meen", "mina", "मीन"),
}


def _key(value: str) -> str:
    text = unicodedata.normalize("NFC", value).strip().casefold()
    for ch in (" ", "-", "_", "."):
        text = text.replace(ch, "")
    return text


def _ascii_fold(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


PLANET_LOOKUP = MappingProxyType({
    _key(alias): planet
    for planet, aliases in _PLANET_ALIASES.items()
    for alias in aliases
})

SIGN_LOOKUP = MappingProxyType({
    _key(alias): sign_id
    for sign_id, aliases in _SIGN_ALIASES.items()
    for alias in aliases
})


# ─────────────────────────────────────────────
# Strict resolution
# ─────────────────────────────────────────────

def resolve_planet(value: Any) -> Optional[str]:
    """
    Map a provider planet name onto the canonical vocabulary.

    Returns None when the name is not recognised.
    """
    if not isinstance(value, str) or not value.strip():
        return None

    key = _key(value)
    if key in PLANET_LOOKUP:
        return PLANET_LOOKUP[key]

    folded = _key(_ascii_fold(value))
    return PLANET_LOOKUP.get(folded)


def resolve_sign(value: Any) -> Optional[int]:
    """
    Map a sign name or numeric id onto a sign id 1–12.

    Numeric ids outside 1–12 are wrapped. Returns None when the value
    cannot be interpreted as a sign.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        if not float(value).is_integer():
            return None
        return wrap_sign(int(value))

    if not isinstance(value, str) or not value.strip():
        return None

    stripped = value.strip()
    if stripped.lstrip("-").isdigit():
        return wrap_sign(int(stripped))

    key = _key(stripped)
    if key in SIGN_LOOKUP:
        return SIGN_LOOKUP[key]

    folded = _key(_ascii_fold(stripped))
    return SIGN_LOOKUP.get(folded)


def is_out_of_range_sign(value: Any) -> bool:
    """
    True when a numeric sign id had to be wrapped into 1–12.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if isinstance(value, (int, float)):
        return not 1 <= value <= 12
    return False


# ─────────────────────────────────────────────
# Lenient normalization
# ─────────────────────────────────────────────

def normalize_sign(value: Any) -> int:
    sign = resolve_sign(value)
    if sign is None:
        logger.warning(
            f"Unknown sign {value!r}, defaulting to {SIGNS[DEFAULT_SIGN - 1]}"
        )
        return DEFAULT_SIGN
    return sign


def is_node(planet: str) -> bool:
    return planet in ("Rahu", "Ketu")
