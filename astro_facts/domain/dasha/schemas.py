from typing import Any, Literal, Optional, Tuple

from astro_facts.domain.kundali.derived.schemas import StrengthBand
from astro_facts.domain.kundali.schemas import Diagnostic, FactModel


DashaLevel = Literal["maha", "antar", "pratyantar", "sookshma"]


class DashaPeriod(FactModel):
    """
    A period lord annotated with its placement, lordship and strength.
    """
    planet: str
    house: int
    lord_of: Tuple[int, ...] = ()
    strength_band: StrengthBand
    themes: Tuple[str, ...] = ()
    start: Any = None
    end: Any = None
    level: DashaLevel


class CurrentDasha(FactModel):
    maha: DashaPeriod
    antar: Optional[DashaPeriod] = None
    pratyantar: Optional[DashaPeriod] = None
    sookshma: Optional[DashaPeriod] = None


class ExpandedDasha(FactModel):
    """
    Current period at every level plus the flat maha-level timeline.
    """
    current: Optional[CurrentDasha] = None
    timeline: Tuple[DashaPeriod, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()
