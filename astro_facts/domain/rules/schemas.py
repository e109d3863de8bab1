from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

from astro_facts.domain.kundali.schemas import Dignity, FactModel


# ─────────────────────────────────────────────
# Detections
# ─────────────────────────────────────────────

class Detection(FactModel):
    """
    A yoga or dosha found in a chart, keyed by a stable identifier.
    """
    key: str
    label: str
    factors: Tuple[str, ...] = ()
    why: str = ""
    strength_hint: Optional[str] = None
    group: Optional[str] = None
    planets: Tuple[str, ...] = ()
    source: Literal["engine", "provider"] = "engine"


class YogaDetection(Detection):
    planet: Optional[str] = None
    kendra: Optional[int] = None
    dignity: Optional[Dignity] = None
    lord_of: Optional[int] = None
    placed_in: Optional[int] = None
    divisional_support: Optional[Literal["reinforced", "weakened"]] = None


class DoshaDetection(Detection):
    severity: Optional[str] = None


class EvaluatedRules(FactModel):
    """
    Merged and deduplicated yoga/dosha detections for one chart.
    """
    yogas: Tuple[YogaDetection, ...] = ()
    doshas: Tuple[DoshaDetection, ...] = ()

    def yoga_keys(self) -> List[str]:
        return [y.key for y in self.yogas]

    def dosha_keys(self) -> List[str]:
        return [d.key for d in self.doshas]

    def find_yoga(self, key: str) -> Optional[YogaDetection]:
        for yoga in self.yogas:
            if yoga.key == key:
                return yoga
        return None

    def find_dosha(self, key: str) -> Optional[DoshaDetection]:
        for dosha in self.doshas:
            if dosha.key == key:
                return dosha
        return None


# ─────────────────────────────────────────────
# Atomic Conditions
# ─────────────────────────────────────────────

class PlanetCondition(BaseModel):
    """
    Condition based on a planet's placement.
    """
    entity: Literal["planet"] = "planet"
    name: str = Field(..., description="Planet name (e.g., Jupiter)")
    house: Optional[int] = Field(None, description="House number (1–12)")
    sign: Optional[Union[int, str]] = Field(None, description="Zodiac sign name or id")
    dignity: Optional[Dignity] = None
    retrograde: Optional[bool] = None


class HouseCondition(BaseModel):
    """
    Condition based on a house's occupancy or strength.
    """
    entity: Literal["house"] = "house"
    house: int
    strength: Optional[str] = Field(None, description="strong / average / weak")
    occupied_by: Optional[str] = None
    min_aspect_power: Optional[float] = None


class DoshaCondition(BaseModel):
    """
    Condition based on presence of a dosha.
    """
    entity: Literal["dosha"] = "dosha"
    name: str = Field(..., description="Dosha key, e.g. dosha.mangal")
    present: bool = True


class YogaCondition(BaseModel):
    """
    Condition based on presence of a yoga.
    """
    entity: Literal["yoga"] = "yoga"
    name: str = Field(..., description="Yoga key, e.g. yoga.shasha")
    present: bool = True


AtomicCondition = PlanetCondition | HouseCondition | DoshaCondition | YogaCondition


# ─────────────────────────────────────────────
# Logical Combinators
# ─────────────────────────────────────────────

class AllCondition(BaseModel):
    """
    All subconditions must match.
    """
    all: List[AtomicCondition]


class AnyCondition(BaseModel):
    """
    Any one of the subconditions must match.
    """
    any: List[AtomicCondition]


RuleCondition = AllCondition | AnyCondition


# ─────────────────────────────────────────────
# Rule Effects
# ─────────────────────────────────────────────

class RuleEffect(BaseModel):
    """
    Represents the outcome when a rule matches.
    """
    category: str = Field(
        ...,
        description="career, marriage, health, finance, etc."
    )
    impact: str = Field(
        ...,
        description="positive / neutral / negative"
    )
    tags: List[str] = Field(default_factory=list)
    confidence: Optional[str] = Field(
        None,
        description="low / medium / high"
    )
    notes: Optional[str] = None


class CustomRule(BaseModel):
    """
    Caller-supplied declarative rule evaluated alongside the catalog.
    """
    key: str
    label: Optional[str] = None
    conditions: RuleCondition
    effect: Optional[RuleEffect] = None


class RuleMatchResult(BaseModel):
    """
    Represents a successful rule match with explanation data.
    """
    rule: CustomRule
    matched: bool
    triggered_entities: List[Dict[str, Any]] = Field(default_factory=list)
