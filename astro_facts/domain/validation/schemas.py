from typing import Any, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from astro_facts.domain.kundali.schemas import FactModel


# ─────────────────────────────────────────────
# Outline (externally produced claims)
# ─────────────────────────────────────────────

class OutlineModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class OutlineSummary(OutlineModel):
    lagna: Union[int, str] = Field(
        ..., validation_alias=AliasChoices("lagna", "ascendant"),
    )
    lagna_lord: str = Field(
        ..., validation_alias=AliasChoices("lagna_lord", "lagnaLord", "ascendant_lord"),
    )


class OutlinePosition(OutlineModel):
    planet: str
    sign: Union[int, str]
    house: int
    lord_of: List[int] = Field(
        ..., validation_alias=AliasChoices("lord_of", "lordOf", "lordship"),
    )
    dignity: Optional[str] = None


class OutlineYoga(OutlineModel):
    key: str = Field(..., validation_alias=AliasChoices("key", "name", "yoga"))
    planet: Optional[str] = None
    kendra: Optional[int] = None
    dignity: Optional[str] = None
    lord_of: Optional[int] = Field(
        None, validation_alias=AliasChoices("lord_of", "lordOf"),
    )
    placed_in: Optional[int] = Field(
        None, validation_alias=AliasChoices("placed_in", "placedIn"),
    )


class OutlineDashaClaim(OutlineModel):
    maha: str
    antar: Optional[str] = None
    pratyantar: Optional[str] = None


class OutlineDashas(OutlineModel):
    current: OutlineDashaClaim
    notes: Optional[str] = None


class OutlineStrength(OutlineModel):
    planet: str
    band: str


class Outline(OutlineModel):
    """
    Structured summary proposed for release, checked against the facts.

    `yogas` may be a flat list or grouped by family
    (`{"panchMahapurush": [...], "vipareetaRajyoga": [...], "other": [...]}`).
    """
    summary: OutlineSummary
    positions: List[OutlinePosition] = Field(default_factory=list)
    yogas: List[OutlineYoga] = Field(default_factory=list)
    dashas: Optional[OutlineDashas] = None
    shadbala: List[OutlineStrength] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def flatten_grouped_yogas(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("yogas"), dict):
            grouped = data["yogas"]
            flat = []
            for group in grouped.values():
                if isinstance(group, list):
                    flat.extend(group)
            data = {**data, "yogas": flat}
        return data


# ─────────────────────────────────────────────
# Result
# ─────────────────────────────────────────────

class ValidationResult(FactModel):
    valid: bool
    errors: Tuple[str, ...] = ()
