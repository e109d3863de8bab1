import logging
from typing import List, Optional, Sequence

from astro_facts.config import Settings
from astro_facts.domain.dasha.schemas import CurrentDasha, DashaPeriod, ExpandedDasha
from astro_facts.domain.kundali.derived.strength_calculator import StrengthCalculator
from astro_facts.domain.kundali.errors import DiagnosticCode
from astro_facts.domain.kundali.schemas import DashaEntry, Diagnostic, FactSheet
from astro_facts.domain.kundali.tables import HOUSE_THEMES

logger = logging.getLogger(__name__)


def house_themes(house: int, lord_of: Sequence[int]) -> List[str]:
    """
    Life areas of the placement house, then a "lordship: <area>" tag for
    every owned house. Duplicates removed, first occurrence kept.
    """
    themes = list(HOUSE_THEMES.get(house, ()))
    for owned in lord_of:
        themes.extend(f"lordship: {theme}" for theme in HOUSE_THEMES.get(owned, ()))
    return list(dict.fromkeys(themes))


def describe_period(period: DashaPeriod) -> str:
    """
    One-line human readable summary of a period.
    """
    themes = ", ".join(period.themes)
    lordship = ""
    if period.lord_of:
        lordship = f" (owns houses: {', '.join(str(h) for h in period.lord_of)})"

    return (
        f"{period.planet} in house {period.house}{lordship} - "
        f"{period.strength_band} strength, themes: {themes}"
    )


class DashaExpander:
    """
    Projects vimshottari periods onto the chart.

    Missing data never raises: no periods gives `current=None`, and a
    period lord absent from the fact sheet is skipped with a diagnostic.
    """

    def __init__(self, settings: Settings | None = None):
        self.strength_calculator = StrengthCalculator(settings)

    def expand(self, facts: FactSheet) -> ExpandedDasha:
        diagnostics: List[Diagnostic] = []
        entries = facts.dashas.vimshottari

        current = self._current(facts, entries, diagnostics)

        timeline: List[DashaPeriod] = []
        for entry in entries:
            period = self._period(facts, entry.maha, "maha", diagnostics, entry)
            if period is not None:
                timeline.append(period)

        return ExpandedDasha(
            current=current,
            timeline=tuple(timeline),
            diagnostics=tuple(diagnostics),
        )

    # ─────────────────────────────────────────────
    # Internal helpers
    # ─────────────────────────────────────────────

    def _current(
        self,
        facts: FactSheet,
        entries: Sequence[DashaEntry],
        diagnostics: List[Diagnostic],
    ) -> Optional[CurrentDasha]:
        if not entries:
            logger.info("No vimshottari dasha data available")
            return None

        entry = next((e for e in entries if e.is_current), entries[0])

        maha = self._period(facts, entry.maha, "maha", diagnostics, entry)
        if maha is None:
            return None

        return CurrentDasha(
            maha=maha,
            antar=self._period(facts, entry.antar, "antar", diagnostics),
            pratyantar=self._period(facts, entry.pratyantar, "pratyantar", diagnostics),
            sookshma=self._period(facts, entry.sookshma, "sookshma", diagnostics),
        )

    def _period(
        self,
        facts: FactSheet,
        planet_name: Optional[str],
        level: str,
        diagnostics: List[Diagnostic],
        entry: Optional[DashaEntry] = None,
    ) -> Optional[DashaPeriod]:
        if planet_name is None:
            return None

        planet = facts.get_planet(planet_name)
        if planet is None:
            message = f"{level} lord {planet_name} not found in facts"
            if not any(d.message == message for d in diagnostics):
                logger.warning(f"[{DiagnosticCode.MISSING_DASHA_PLANET.value}] {message}")
                diagnostics.append(Diagnostic(
                    code=DiagnosticCode.MISSING_DASHA_PLANET,
                    message=message,
                    planet=planet_name,
                    field=level,
                ))
            return None

        score = (facts.shadbala or {}).get(planet.planet)
        strength = self.strength_calculator.strength_for(planet, score)

        return DashaPeriod(
            planet=planet.planet,
            house=planet.house,
            lord_of=planet.lord_of,
            strength_band=strength.band,
            themes=tuple(house_themes(planet.house, planet.lord_of)),
            start=entry.start if entry else None,
            end=entry.end if entry else None,
            level=level,
        )
