import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from astro_facts.domain.kundali.errors import InvalidChartInputError
from astro_facts.domain.kundali.schemas import FactSheet, RawChartInput

logger = logging.getLogger(__name__)

ENVELOPE_KEYS = ("astroData", "astro_data", "data", "chart")


# ─────────────────────────────────────────────
# Provider payload → Domain
# ─────────────────────────────────────────────

def raw_chart_from_payload(payload: Any) -> RawChartInput:
    """
    Convert a provider payload into RawChartInput.

    Accepts the flat shape or one wrapped in a provider envelope
    (`{"astroData": {...}}`), planets as a list or a name-keyed mapping,
    and dasha lists either flat or nested under `timelineMaha`/`timeline`.
    """
    if isinstance(payload, RawChartInput):
        return payload

    if not isinstance(payload, dict):
        raise InvalidChartInputError(
            f"Chart payload must be a mapping, got {type(payload).__name__}"
        )

    data = _unwrap_envelope(payload)

    flattened = dict(data)
    flattened["planets"] = _planet_list(data.get("planets"))
    flattened["dashas"] = _dasha_lists(data.get("dashas"))
    flattened["yogas"] = _label_list(data.get("yogas"))
    flattened["doshas"] = _label_list(data.get("doshas"))

    try:
        return RawChartInput.model_validate(flattened)
    except ValidationError as e:
        logger.error(f"Malformed chart payload: {e}")
        raise InvalidChartInputError(f"Malformed chart payload: {e}") from e


def _unwrap_envelope(payload: Dict[str, Any]) -> Dict[str, Any]:
    if "ascendant" in payload or "lagna" in payload:
        return payload

    for key in ENVELOPE_KEYS:
        inner = payload.get(key)
        if isinstance(inner, dict):
            return _unwrap_envelope(inner)

    return payload


def _planet_list(planets: Any) -> List[Any]:
    if planets is None:
        return []

    if isinstance(planets, dict):
        entries = []
        for name, data in planets.items():
            if isinstance(data, dict):
                entry = {"name": name, **data}
                entry["name"] = data.get("name") or data.get("planet") or name
                entry.pop("planet", None)
                entries.append(entry)
            else:
                entries.append(data)
        return entries

    if isinstance(planets, list):
        return planets

    logger.warning(f"Ignoring planets of unexpected type {type(planets).__name__}")
    return []


def _dasha_lists(dashas: Any) -> Dict[str, List[Any]]:
    if not isinstance(dashas, dict):
        return {"vimshottari": [], "yogini": []}

    return {
        "vimshottari": _timeline(
            dashas.get("vimshottari"), ("timelineMaha", "timeline", "periods"),
        ),
        "yogini": _timeline(
            dashas.get("yogini"), ("timeline", "periods"),
        ),
    }


def _timeline(value: Any, nested_keys: tuple) -> List[Any]:
    if isinstance(value, list):
        return [entry for entry in value if isinstance(entry, dict)]

    if isinstance(value, dict):
        for key in nested_keys:
            if isinstance(value.get(key), list):
                return [entry for entry in value[key] if isinstance(entry, dict)]

    return []


def _label_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


# ─────────────────────────────────────────────
# Domain → plain structures
# ─────────────────────────────────────────────

def fact_sheet_to_payload(facts: FactSheet) -> Dict[str, Any]:
    """
    Convert a FactSheet into JSON-ready camelCase structures for
    downstream collaborators.
    """
    return facts.model_dump(by_alias=True, mode="json")
