from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from astro_facts.domain.kundali.errors import DiagnosticCode


Dignity = Literal["Exalted", "Debilitated", "Own", "Neutral"]


# ─────────────────────────────────────────────
# Raw provider input
# ─────────────────────────────────────────────

class RawModel(BaseModel):
    """
    Lenient base for untrusted provider data.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawAscendant(RawModel):
    sign: Any = Field(
        None,
        validation_alias=AliasChoices("sign", "rasi", "rasiId", "rasi_id", "signId", "sign_id"),
    )
    degree: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("degree", "normDegree", "norm_degree"),
    )
    longitude: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("longitude", "fullDegree", "full_degree"),
    )


class RawPlanet(RawModel):
    """
    One planet observation as delivered by a chart provider.

    `longitude` is absolute (0–360). `degree` is passed through as given;
    it is only used as a longitude when neither sign nor longitude exist.
    """
    name: Any = Field(
        None,
        validation_alias=AliasChoices("name", "planet", "graha"),
    )
    sign: Any = Field(
        None,
        validation_alias=AliasChoices("sign", "rasi", "rasiId", "rasi_id", "signId", "sign_id"),
    )
    longitude: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("longitude", "fullDegree", "full_degree"),
    )
    degree: Optional[float] = Field(
        None,
        validation_alias=AliasChoices("degree", "normDegree", "norm_degree"),
    )
    retrograde: Optional[bool] = Field(
        False,
        validation_alias=AliasChoices(
            "retrograde", "isRetro", "isRetrograde", "is_retro", "is_retrograde",
        ),
    )
    house: Any = Field(
        None,
        validation_alias=AliasChoices("house", "bhava"),
    )
    navamsha: Any = Field(
        None,
        validation_alias=AliasChoices("navamsha", "navamsa", "d9", "D9"),
    )
    dashamsha: Any = Field(
        None,
        validation_alias=AliasChoices("dashamsha", "dasamsa", "d10", "D10"),
    )


class RawDashaEntry(RawModel):
    maha: Any = Field(
        None,
        validation_alias=AliasChoices("maha", "planet", "mahadasha", "lord"),
    )
    antar: Any = Field(
        None,
        validation_alias=AliasChoices("antar", "antardasha"),
    )
    pratyantar: Any = Field(
        None,
        validation_alias=AliasChoices("pratyantar", "pratyantardasha"),
    )
    sookshma: Any = Field(
        None,
        validation_alias=AliasChoices("sookshma", "sookshmadasha", "sukshma"),
    )
    start: Any = None
    end: Any = None
    is_current: Optional[bool] = Field(
        False,
        validation_alias=AliasChoices("is_current", "isCurrent", "current"),
    )


class RawYoginiEntry(RawModel):
    period: Any = Field(
        None,
        validation_alias=AliasChoices("period", "yogini", "name"),
    )
    lord: Any = Field(
        None,
        validation_alias=AliasChoices("lord", "planet"),
    )
    start: Any = None
    end: Any = None


class RawDashas(RawModel):
    vimshottari: List[RawDashaEntry] = Field(default_factory=list)
    yogini: List[RawYoginiEntry] = Field(default_factory=list)


class RawChartInput(RawModel):
    """
    Provider chart payload after envelope flattening.

    Planet entries stay untyped here and are validated one at a time by
    the fact sheet builder so that a single bad entry cannot reject the
    whole chart.
    """
    ascendant: RawAscendant = Field(
        ...,
        validation_alias=AliasChoices("ascendant", "lagna"),
    )
    planets: List[Any] = Field(default_factory=list)
    shadbala: Any = None
    yogas: List[Any] = Field(default_factory=list)
    doshas: List[Any] = Field(default_factory=list)
    dashas: RawDashas = Field(default_factory=RawDashas)


# ─────────────────────────────────────────────
# Canonical fact sheet
# ─────────────────────────────────────────────

class FactModel(BaseModel):
    """
    Immutable base for canonical facts. Dumps camelCase with by_alias=True.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Diagnostic(FactModel):
    """
    Non-fatal issue found while normalizing provider data.
    """
    code: DiagnosticCode
    message: str
    planet: Optional[str] = None
    field: Optional[str] = None


class AscendantFact(FactModel):
    sign: int = Field(..., ge=1, le=12)
    sign_label: str
    degree: Optional[float] = None
    lord: str
    house: Literal[1] = 1


class DivisionalPosition(FactModel):
    sign: int = Field(..., ge=1, le=12)
    sign_label: str
    dignity: Optional[Dignity] = None
    source: Literal["provider", "derived"] = "provider"


class PlanetFact(FactModel):
    planet: str
    sign: int = Field(..., ge=1, le=12)
    sign_label: str
    degree: Optional[float] = None
    longitude: Optional[float] = None
    house: int = Field(..., ge=1, le=12)
    lord_of: Tuple[int, ...] = ()
    dignity: Optional[Dignity] = None
    is_retro: bool = False
    divisional: Dict[str, DivisionalPosition] = Field(default_factory=dict)


class AspectFact(FactModel):
    from_planet: str = Field(..., alias="from")
    to_house: int = Field(..., ge=1, le=12)
    type: Literal["aspect", "conjunction"] = "aspect"
    kind: str = "7"


class DashaEntry(FactModel):
    maha: str
    antar: Optional[str] = None
    pratyantar: Optional[str] = None
    sookshma: Optional[str] = None
    start: Any = None
    end: Any = None
    is_current: bool = False


class YoginiEntry(FactModel):
    period: str
    lord: Optional[str] = None
    start: Any = None
    end: Any = None


class DashaLists(FactModel):
    vimshottari: Tuple[DashaEntry, ...] = ()
    yogini: Tuple[YoginiEntry, ...] = ()


class FactSheet(FactModel):
    """
    Canonical, read-only description of one birth chart.
    """
    ascendant: AscendantFact
    planets: Tuple[PlanetFact, ...] = ()
    aspects: Tuple[AspectFact, ...] = ()
    shadbala: Optional[Dict[str, float]] = None
    dashas: DashaLists = Field(default_factory=DashaLists)
    yogas_raw: Tuple[str, ...] = ()
    doshas_raw: Tuple[str, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()

    def get_planet(self, name: str) -> Optional[PlanetFact]:
        for planet in self.planets:
            if planet.planet == name:
                return planet
        return None

    def planets_in_house(self, house: int) -> List[PlanetFact]:
        return [p for p in self.planets if p.house == house]
