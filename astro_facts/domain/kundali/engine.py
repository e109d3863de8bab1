import logging
import math
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from astro_facts.config import Settings, settings as default_settings
from astro_facts.domain.kundali.calculator import (
    aspected_houses,
    degree_in_sign,
    house_from_signs,
    sign_from_longitude,
    sign_label,
    wrap_house,
)
from astro_facts.domain.kundali.converters import raw_chart_from_payload
from astro_facts.domain.kundali.dignity import (
    calculate_dignity,
    houses_owned_by,
    sign_lord,
)
from astro_facts.domain.kundali.divisional.divisional_builder import DivisionalBuilder
from astro_facts.domain.kundali.errors import DiagnosticCode
from astro_facts.domain.kundali.names import (
    DEFAULT_SIGN,
    is_node,
    is_out_of_range_sign,
    normalize_sign,
    resolve_planet,
    resolve_sign,
)
from astro_facts.domain.kundali.schemas import (
    AscendantFact,
    AspectFact,
    DashaEntry,
    DashaLists,
    Diagnostic,
    DivisionalPosition,
    FactSheet,
    PlanetFact,
    RawAscendant,
    RawChartInput,
    RawDashas,
    RawPlanet,
    YoginiEntry,
)
from astro_facts.domain.kundali.tables import CLASSICAL_PLANETS

logger = logging.getLogger(__name__)


class FactSheetBuilder:
    """
    Normalizes a provider chart payload into a canonical FactSheet.

    This class:
    - Resolves planet and sign names across naming conventions
    - Derives houses, lordship and dignity from fixed tables
    - Records every recoverable problem as a Diagnostic
    """

    def __init__(
        self,
        settings: Settings | None = None,
        divisional_builder: DivisionalBuilder | None = None,
    ):
        self.settings = settings or default_settings
        self.divisional_builder = divisional_builder or DivisionalBuilder()

    def build(self, payload: Any) -> FactSheet:
        """
        Build the fact sheet for one chart.

        Raises InvalidChartInputError only when the payload has no usable
        structure at all; everything else degrades to diagnostics.
        """
        raw = raw_chart_from_payload(payload)
        diagnostics: List[Diagnostic] = []

        # ─────────────────────────────────────────────
        # Step 1: Ascendant
        # ─────────────────────────────────────────────

        ascendant = self._build_ascendant(raw.ascendant, diagnostics)

        # ─────────────────────────────────────────────
        # Step 2: Planets
        # ─────────────────────────────────────────────

        planets = self._build_planets(raw, ascendant.sign, diagnostics)

        present = {p.planet for p in planets}
        for name in CLASSICAL_PLANETS:
            if name not in present:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.MISSING_REQUIRED_PLANET,
                    f"{name} missing from chart input",
                    planet=name,
                )

        # ─────────────────────────────────────────────
        # Step 3: Aspects
        # ─────────────────────────────────────────────

        aspects = self._build_aspects(planets)

        # ─────────────────────────────────────────────
        # Step 4: Strength scores
        # ─────────────────────────────────────────────

        shadbala = self._build_shadbala(raw.shadbala, diagnostics)

        # ─────────────────────────────────────────────
        # Step 5: Dashas
        # ─────────────────────────────────────────────

        dashas = self._build_dashas(raw.dashas, diagnostics)

        # ─────────────────────────────────────────────
        # Step 6: Assemble Fact Sheet
        # ─────────────────────────────────────────────

        facts = FactSheet(
            ascendant=ascendant,
            planets=tuple(planets),
            aspects=tuple(aspects),
            shadbala=shadbala,
            dashas=dashas,
            yogas_raw=tuple(self._labels(raw.yogas)),
            doshas_raw=tuple(self._labels(raw.doshas)),
            diagnostics=tuple(diagnostics),
        )

        logger.debug(
            f"Built fact sheet: lagna={ascendant.sign_label}, "
            f"{len(planets)} planets, {len(diagnostics)} diagnostics"
        )
        return facts

    # ─────────────────────────────────────────────
    # Ascendant
    # ─────────────────────────────────────────────

    def _build_ascendant(
        self,
        raw: RawAscendant,
        diagnostics: List[Diagnostic],
    ) -> AscendantFact:
        raw_longitude = self._finite(raw.longitude, diagnostics, planet=None, field="ascendant.longitude")
        raw_degree = self._finite(raw.degree, diagnostics, planet=None, field="ascendant.degree")

        longitude = raw_longitude
        if longitude is None and raw.sign is None:
            longitude = raw_degree

        sign = self._resolve_sign_field(
            raw.sign, longitude, diagnostics, planet=None, field="ascendant.sign",
        )
        if sign is None:
            self._diagnose(
                diagnostics,
                DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                "Ascendant has neither sign nor longitude, defaulting to Aries",
                field="ascendant.sign",
            )
            sign = DEFAULT_SIGN

        degree = raw_degree
        if degree is None and raw_longitude is not None:
            degree = round(degree_in_sign(raw_longitude), 4)

        return AscendantFact(
            sign=sign,
            sign_label=sign_label(sign),
            degree=degree,
            lord=sign_lord(sign),
        )

    # ─────────────────────────────────────────────
    # Planets
    # ─────────────────────────────────────────────

    def _build_planets(
        self,
        raw: RawChartInput,
        asc_sign: int,
        diagnostics: List[Diagnostic],
    ) -> List[PlanetFact]:
        planets: List[PlanetFact] = []
        seen = set()

        for index, entry in enumerate(raw.planets):
            try:
                observation = RawPlanet.model_validate(entry)
            except ValidationError as e:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                    f"Malformed planet entry at index {index}: {e.error_count()} error(s)",
                    field=f"planets[{index}]",
                )
                continue

            name = resolve_planet(observation.name)
            if name is None:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.UNKNOWN_NAME,
                    f"Unknown planet name {observation.name!r}, entry skipped",
                    field=f"planets[{index}].name",
                )
                continue

            if name in seen:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.DUPLICATE_PLANET,
                    f"Duplicate entry for {name}, keeping the first one",
                    planet=name,
                )
                continue

            fact = self._build_planet(name, observation, asc_sign, diagnostics)
            if fact is not None:
                seen.add(name)
                planets.append(fact)

        return planets

    def _build_planet(
        self,
        name: str,
        observation: RawPlanet,
        asc_sign: int,
        diagnostics: List[Diagnostic],
    ) -> Optional[PlanetFact]:
        raw_longitude = self._finite(observation.longitude, diagnostics, planet=name, field="longitude")
        raw_degree = self._finite(observation.degree, diagnostics, planet=name, field="degree")

        longitude = raw_longitude
        if longitude is None and observation.sign is None:
            longitude = raw_degree

        sign = self._resolve_sign_field(
            observation.sign, longitude, diagnostics, planet=name, field="sign",
        )
        if sign is None:
            self._diagnose(
                diagnostics,
                DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                f"{name} has neither sign nor longitude, entry skipped",
                planet=name,
                field="sign",
            )
            return None

        house = house_from_signs(sign, asc_sign)
        self._check_provider_house(name, observation.house, house, diagnostics)

        degree = raw_degree
        if degree is None and raw_longitude is not None:
            degree = round(degree_in_sign(raw_longitude), 4)

        return PlanetFact(
            planet=name,
            sign=sign,
            sign_label=sign_label(sign),
            degree=degree,
            longitude=raw_longitude,
            house=house,
            lord_of=() if is_node(name) else tuple(houses_owned_by(name, asc_sign)),
            dignity=calculate_dignity(name, sign),
            is_retro=bool(observation.retrograde),
            divisional=self._build_divisional(name, observation, raw_longitude, diagnostics),
        )

    def _check_provider_house(
        self,
        planet: str,
        provider_house: Any,
        computed: int,
        diagnostics: List[Diagnostic],
    ) -> None:
        if provider_house is None or isinstance(provider_house, bool):
            return

        try:
            number = float(str(provider_house).strip())
        except ValueError:
            number = float("nan")

        if not number.is_integer():
            self._diagnose(
                diagnostics,
                DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                f"Unreadable provider house {provider_house!r} for {planet} ignored",
                planet=planet,
                field="house",
            )
            return

        value = int(number)
        if not 1 <= value <= 12:
            wrapped = wrap_house(value)
            self._diagnose(
                diagnostics,
                DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                f"Provider house {value} for {planet} out of range, wrapped to {wrapped}",
                planet=planet,
                field="house",
            )
            value = wrapped

        if value != computed:
            self._diagnose(
                diagnostics,
                DiagnosticCode.AMBIGUOUS_PROVIDER_HOUSE,
                f"Provider places {planet} in house {value}, "
                f"sign arithmetic gives {computed}; using {computed}",
                planet=planet,
                field="house",
            )

    def _build_divisional(
        self,
        planet: str,
        observation: RawPlanet,
        longitude: Optional[float],
        diagnostics: List[Diagnostic],
    ) -> Dict[str, DivisionalPosition]:
        divisional: Dict[str, DivisionalPosition] = {}

        for chart, value in (("D9", observation.navamsha), ("D10", observation.dashamsha)):
            if value is None:
                continue
            raw_sign = value.get("sign") if isinstance(value, dict) else value
            sign = resolve_sign(raw_sign)
            if sign is None:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.UNKNOWN_NAME,
                    f"Unknown {chart} sign {raw_sign!r} for {planet}, snapshot dropped",
                    planet=planet,
                    field=chart,
                )
                continue
            divisional[chart] = DivisionalPosition(
                sign=sign,
                sign_label=sign_label(sign),
                dignity=calculate_dignity(planet, sign),
            )

        if self.settings.DERIVE_DIVISIONALS and longitude is not None:
            derived = self.divisional_builder.build(planet, longitude)
            for chart, position in derived.items():
                divisional.setdefault(chart, position)

        return divisional

    # ─────────────────────────────────────────────
    # Aspects
    # ─────────────────────────────────────────────

    def _build_aspects(self, planets: List[PlanetFact]) -> List[AspectFact]:
        aspects: List[AspectFact] = []

        for planet in planets:
            for target, kind in aspected_houses(planet.planet, planet.house):
                aspects.append(AspectFact(
                    from_planet=planet.planet,
                    to_house=target,
                    type="aspect",
                    kind=kind,
                ))

            if any(o.house == planet.house and o.planet != planet.planet for o in planets):
                aspects.append(AspectFact(
                    from_planet=planet.planet,
                    to_house=planet.house,
                    type="conjunction",
                    kind="conjunction",
                ))

        return aspects

    # ─────────────────────────────────────────────
    # Strength scores
    # ─────────────────────────────────────────────

    def _build_shadbala(
        self,
        raw: Any,
        diagnostics: List[Diagnostic],
    ) -> Optional[Dict[str, float]]:
        if not raw:
            return None

        if isinstance(raw, dict):
            items = list(raw.items())
        elif isinstance(raw, list):
            items = [
                (entry.get("planet") or entry.get("name"),
                 entry.get("score", entry.get("value")))
                for entry in raw
                if isinstance(entry, dict)
            ]
        else:
            logger.warning(f"Ignoring strength scores of type {type(raw).__name__}")
            return None

        scores: Dict[str, float] = {}
        for name, value in items:
            planet = resolve_planet(name)
            if planet is None:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.UNKNOWN_NAME,
                    f"Strength score for unknown planet {name!r} dropped",
                    field="shadbala",
                )
                continue
            try:
                score = float(value)
            except (TypeError, ValueError):
                logger.warning(f"Non-numeric strength score {value!r} for {planet} dropped")
                continue
            if not math.isfinite(score):
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                    f"Non-finite strength score {value!r} for {planet} dropped",
                    planet=planet,
                    field="shadbala",
                )
                continue
            scores[planet] = score

        return scores or None

    # ─────────────────────────────────────────────
    # Dashas
    # ─────────────────────────────────────────────

    def _build_dashas(
        self,
        raw: RawDashas,
        diagnostics: List[Diagnostic],
    ) -> DashaLists:
        vimshottari: List[DashaEntry] = []

        for index, entry in enumerate(raw.vimshottari):
            maha = resolve_planet(entry.maha)
            if maha is None:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.UNKNOWN_NAME,
                    f"Unknown dasha lord {entry.maha!r}, period skipped",
                    field=f"dashas.vimshottari[{index}]",
                )
                continue

            levels = {}
            for level in ("antar", "pratyantar", "sookshma"):
                value = getattr(entry, level)
                if value is None:
                    continue
                planet = resolve_planet(value)
                if planet is None:
                    self._diagnose(
                        diagnostics,
                        DiagnosticCode.UNKNOWN_NAME,
                        f"Unknown {level} lord {value!r} dropped",
                        field=f"dashas.vimshottari[{index}].{level}",
                    )
                levels[level] = planet

            vimshottari.append(DashaEntry(
                maha=maha,
                start=entry.start,
                end=entry.end,
                is_current=bool(entry.is_current),
                **levels,
            ))

        yogini = [
            YoginiEntry(
                period=str(entry.period),
                lord=resolve_planet(entry.lord),
                start=entry.start,
                end=entry.end,
            )
            for entry in raw.yogini
            if entry.period is not None
        ]

        return DashaLists(vimshottari=tuple(vimshottari), yogini=tuple(yogini))

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    def _resolve_sign_field(
        self,
        value: Any,
        longitude: Optional[float],
        diagnostics: List[Diagnostic],
        *,
        planet: Optional[str],
        field: str,
    ) -> Optional[int]:
        """
        Resolve a sign from a provider value, falling back to longitude.

        An unrecognised name with no longitude defaults to Aries.
        """
        who = planet or "ascendant"

        if value is not None:
            sign = resolve_sign(value)
            if sign is not None:
                if is_out_of_range_sign(value):
                    self._diagnose(
                        diagnostics,
                        DiagnosticCode.INVALID_SIGN_OR_HOUSE,
                        f"Sign id {value!r} for {who} out of range, wrapped to {sign}",
                        planet=planet,
                        field=field,
                    )
                return sign

            if longitude is not None:
                self._diagnose(
                    diagnostics,
                    DiagnosticCode.UNKNOWN_NAME,
                    f"Unknown sign {value!r} for {who}, using longitude instead",
                    planet=planet,
                    field=field,
                )
                return sign_from_longitude(longitude)

            self._diagnose(
                diagnostics,
                DiagnosticCode.UNKNOWN_NAME,
                f"Unknown sign {value!r} for {who}, defaulting to Aries",
                planet=planet,
                field=field,
            )
            return normalize_sign(value)

        if longitude is not None:
            return sign_from_longitude(longitude)

        return None

    def _finite(
        self,
        value: Optional[float],
        diagnostics: List[Diagnostic],
        *,
        planet: Optional[str],
        field: str,
    ) -> Optional[float]:
        """
        Drop NaN/infinite readings so they fall back like missing ones.
        """
        if value is None or math.isfinite(value):
            return value

        self._diagnose(
            diagnostics,
            DiagnosticCode.INVALID_SIGN_OR_HOUSE,
            f"Non-finite {field} {value!r} for {planet or 'ascendant'} ignored",
            planet=planet,
            field=field,
        )
        return None

    @staticmethod
    def _labels(items: List[Any]) -> List[str]:
        labels: List[str] = []
        for item in items:
            if isinstance(item, str):
                label = item
            elif isinstance(item, dict):
                if item.get("present") is False:
                    continue
                label = item.get("label") or item.get("name") or item.get("key")
            else:
                label = None
            if isinstance(label, str) and label.strip():
                labels.append(label.strip())
        return labels

    @staticmethod
    def _diagnose(
        diagnostics: List[Diagnostic],
        code: DiagnosticCode,
        message: str,
        *,
        planet: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        logger.warning(f"[{code.value}] {message}")
        diagnostics.append(
            Diagnostic(code=code, message=message, planet=planet, field=field)
        )
