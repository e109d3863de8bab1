import logging
import re
import unicodedata
from typing import Iterable, List, Mapping, Sequence, TypeVar

from astro_facts.domain.kundali.schemas import FactSheet
from astro_facts.domain.rules.catalog import (
    DOSHA_ALIASES,
    DOSHA_CATALOG,
    YOGA_ALIASES,
    YOGA_CATALOG,
)
from astro_facts.domain.rules.schemas import (
    Detection,
    DoshaDetection,
    EvaluatedRules,
    YogaDetection,
)

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=Detection)

_AFFIXES = ("yoga", "dosha", "dosa", "pmp")


# ─────────────────────────────────────────────
# Dedup
# ─────────────────────────────────────────────

def dedup_by_key(detections: Iterable[D]) -> List[D]:
    """
    Drop repeated keys; the first occurrence wins and input order is kept.
    """
    seen = set()
    unique: List[D] = []
    for detection in detections:
        if detection.key in seen:
            continue
        seen.add(detection.key)
        unique.append(detection)
    return unique


# ─────────────────────────────────────────────
# Provider labels
# ─────────────────────────────────────────────

def compact_label(label: str) -> str:
    """
    Lowercase alphanumerics of a label with yoga/dosha affixes removed,
    e.g. "Gaja–Kesari Yoga" → "gajakesari", "PMP_Shasha" → "shasha".
    """
    folded = unicodedata.normalize("NFKD", label)
    text = "".join(ch for ch in folded if not unicodedata.combining(ch))
    text = re.sub(r"[^a-z0-9]", "", text.lower())

    changed = True
    while changed and text:
        changed = False
        for affix in _AFFIXES:
            if text.startswith(affix) and len(text) > len(affix):
                text = text[len(affix):]
                changed = True
            if text.endswith(affix) and len(text) > len(affix):
                text = text[:-len(affix)]
                changed = True
    return text


def slugify(label: str) -> str:
    folded = unicodedata.normalize("NFKD", label)
    text = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "unnamed"


def provider_key(label: str, kind: str, aliases: Mapping[str, str]) -> str:
    return aliases.get(compact_label(label)) or f"{kind}.provider.{slugify(label)}"


def _covered(key: str, existing: Sequence[str]) -> bool:
    """
    A generic provider key is covered by a more specific engine key of
    the same family (yoga.vipareeta vs yoga.vipareeta.8-6).
    """
    return any(k == key or k.startswith(key + ".") for k in existing)


# ─────────────────────────────────────────────
# Evaluator
# ─────────────────────────────────────────────

class RuleEvaluator:
    """
    Runs the canonical yoga/dosha catalog over a fact sheet and merges
    the result with provider-supplied labels.
    """

    def __init__(
        self,
        yoga_catalog: Mapping = YOGA_CATALOG,
        dosha_catalog: Mapping = DOSHA_CATALOG,
    ):
        self.yoga_catalog = yoga_catalog
        self.dosha_catalog = dosha_catalog

    def evaluate(self, facts: FactSheet) -> EvaluatedRules:
        engine_yogas: List[YogaDetection] = []
        for detector in self.yoga_catalog.values():
            engine_yogas.extend(detector(facts))

        engine_doshas: List[DoshaDetection] = []
        for detector in self.dosha_catalog.values():
            engine_doshas.extend(detector(facts))

        yogas = dedup_by_key(
            engine_yogas
            + self._provider_detections(
                facts.yogas_raw, "yoga", YOGA_ALIASES, YogaDetection,
                [y.key for y in engine_yogas],
            )
        )
        doshas = dedup_by_key(
            engine_doshas
            + self._provider_detections(
                facts.doshas_raw, "dosha", DOSHA_ALIASES, DoshaDetection,
                [d.key for d in engine_doshas],
            )
        )

        logger.debug(
            f"Rules evaluated: {len(yogas)} yogas, {len(doshas)} doshas "
            f"({len(engine_yogas)} / {len(engine_doshas)} from engine)"
        )
        return EvaluatedRules(yogas=tuple(yogas), doshas=tuple(doshas))

    def _provider_detections(
        self,
        labels: Sequence[str],
        kind: str,
        aliases: Mapping[str, str],
        model: type,
        engine_keys: List[str],
    ) -> List[Detection]:
        detections = []
        for label in labels:
            key = provider_key(label, kind, aliases)
            if _covered(key, engine_keys):
                continue
            detections.append(model(
                key=key,
                label=label,
                factors=(f"Reported by chart provider: {label}",),
                why="Provider-supplied label",
                source="provider",
            ))
        return detections
