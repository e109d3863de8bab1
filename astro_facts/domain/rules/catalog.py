"""
The canonical rule catalog: one entry per stable key.

Detectors never read each other's output, so catalog order only
affects output order, never the result set.
"""
from types import MappingProxyType

from astro_facts.domain.rules import doshas, yogas


YOGA_CATALOG = MappingProxyType({
    "yoga.ruchaka": yogas.great_person_detector("yoga.ruchaka"),
    "yoga.bhadra": yogas.great_person_detector("yoga.bhadra"),
    "yoga.hamsa": yogas.great_person_detector("yoga.hamsa"),
    "yoga.malavya": yogas.great_person_detector("yoga.malavya"),
    "yoga.shasha": yogas.great_person_detector("yoga.shasha"),
    "yoga.vipareeta": yogas.detect_vipareeta,
    "yoga.gajakesari": yogas.detect_gajakesari,
    "yoga.budha-aditya": yogas.detect_budha_aditya,
    "yoga.raja-yoga": yogas.detect_raja,
    "yoga.dhana-yoga": yogas.detect_dhana,
    "yoga.karma-yoga": yogas.detect_karma,
    "yoga.moksha-yoga": yogas.detect_moksha,
})

DOSHA_CATALOG = MappingProxyType({
    "dosha.mangal": doshas.detect_mangal,
    "dosha.kaalsarpa": doshas.detect_kaalsarpa,
    "dosha.grahan.surya": doshas.detect_grahan_surya,
    "dosha.grahan.chandra": doshas.detect_grahan_chandra,
    "dosha.pitri": doshas.detect_pitri,
    "dosha.shrapit": doshas.detect_shrapit,
    "dosha.vish-yoga": doshas.detect_vish,
    "dosha.daridra": doshas.detect_daridra,
    "dosha.kemadruma": doshas.detect_kemadruma,
    "dosha.guru-chandala": doshas.detect_guru_chandala,
    "dosha.papakartari.10": doshas.detect_papakartari_10,
    "dosha.alpa-shakti": doshas.detect_alpa_shakti,
    "dosha.ashtama-shani": doshas.detect_ashtama_shani,
})


# ─────────────────────────────────────────────
# Provider label aliases
# ─────────────────────────────────────────────

# Compact label (lowercase alphanumerics, yoga/dosha affixes removed)
# → canonical key.
YOGA_ALIASES = MappingProxyType({
    "shasha": "yoga.shasha",
    "sasha": "yoga.shasha",
    "sasa": "yoga.shasha",
    "ruchaka": "yoga.ruchaka",
    "ruchak": "yoga.ruchaka",
    "bhadra": "yoga.bhadra",
    "hamsa": "yoga.hamsa",
    "hansa": "yoga.hamsa",
    "malavya": "yoga.malavya",
    "malavaya": "yoga.malavya",
    "gajakesari": "yoga.gajakesari",
    "gajakeshari": "yoga.gajakesari",
    "budhaaditya": "yoga.budha-aditya",
    "budhaditya": "yoga.budha-aditya",
    "vry": "yoga.vipareeta",
    "vipareeta": "yoga.vipareeta",
    "vipareetaraja": "yoga.vipareeta",
    "viparitaraja": "yoga.vipareeta",
    "vipreetraja": "yoga.vipareeta",
    "harsha": "yoga.vipareeta",
    "sarala": "yoga.vipareeta",
    "vimala": "yoga.vipareeta",
    "raja": "yoga.raja-yoga",
    "dhana": "yoga.dhana-yoga",
    "karma": "yoga.karma-yoga",
    "moksha": "yoga.moksha-yoga",
})

DOSHA_ALIASES = MappingProxyType({
    "mangal": "dosha.mangal",
    "manglik": "dosha.mangal",
    "kuja": "dosha.mangal",
    "mangalkuja": "dosha.mangal",
    "kaalsarpa": "dosha.kaalsarpa",
    "kaalsarp": "dosha.kaalsarpa",
    "kalsarpa": "dosha.kaalsarpa",
    "kalsarp": "dosha.kaalsarpa",
    "grahansurya": "dosha.grahan.surya",
    "suryagrahan": "dosha.grahan.surya",
    "grahanchandra": "dosha.grahan.chandra",
    "chandragrahan": "dosha.grahan.chandra",
    "pitri": "dosha.pitri",
    "pitra": "dosha.pitri",
    "shrapit": "dosha.shrapit",
    "srapit": "dosha.shrapit",
    "vish": "dosha.vish-yoga",
    "vishyoga": "dosha.vish-yoga",
    "daridra": "dosha.daridra",
    "kemadruma": "dosha.kemadruma",
    "guruchandala": "dosha.guru-chandala",
    "papakartari10": "dosha.papakartari.10",
    "papakatari10": "dosha.papakartari.10",
    "papakartari": "dosha.papakartari.10",
    "alpashakti": "dosha.alpa-shakti",
    "ashtamashani": "dosha.ashtama-shani",
})
