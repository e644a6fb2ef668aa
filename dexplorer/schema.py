from typing import Any, List, Optional

from .errors import ItemFetchError
from .models import CatalogReference, EntityRecord

REQUIRED_NUMERIC_FIELDS = ["weight", "height"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _type_names(types: Any) -> List[Optional[str]]:
    names = []
    for entry in types:
        inner = entry.get("type") if isinstance(entry, dict) else None
        name = inner.get("name") if isinstance(inner, dict) else None
        names.append(name if _is_non_empty_str(name) else None)
    return names


def validate_detail(data: Any) -> List[str]:
    """
    Returns a list of validation error messages for a detail payload.
    Empty list means the payload can be turned into an EntityRecord.
    """
    if not isinstance(data, dict):
        return ["Detail payload must be a JSON object"]

    errors: List[str] = []

    record_id = data.get("id")
    if "id" not in data:
        errors.append("Missing required field: id")
    elif isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 1:
        errors.append("Field 'id' must be a positive integer")

    if "name" not in data:
        errors.append("Missing required field: name")
    elif not _is_non_empty_str(data["name"]):
        errors.append("Field 'name' must be a non-empty string")

    for f in REQUIRED_NUMERIC_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_number(data[f]):
            errors.append(f"Field '{f}' must be a number")

    types = data.get("types")
    if "types" not in data:
        errors.append("Missing required field: types")
    elif not isinstance(types, list) or not types:
        errors.append("Field 'types' must be a non-empty list")
    elif None in _type_names(types):
        errors.append("Every entry in 'types' needs a type.name string")

    # Thumbnail is optional, but when present it has to be a string
    sprites = data.get("sprites")
    if sprites is not None:
        if not isinstance(sprites, dict):
            errors.append("Field 'sprites' must be an object if provided")
        elif sprites.get("front_default") is not None and not isinstance(sprites["front_default"], str):
            errors.append("Field 'sprites.front_default' must be a string if provided")

    return errors


def record_from_detail(data: Any, location: str = "") -> EntityRecord:
    """Build an EntityRecord from a detail payload.

    Raises:
        ItemFetchError: if required fields are missing or malformed
    """
    errors = validate_detail(data)
    if errors:
        raise ItemFetchError(location, "; ".join(errors))

    sprites = data.get("sprites") or {}
    # Tags keep provider order; duplicates collapse to their first slot
    types = tuple(dict.fromkeys(_type_names(data["types"])))
    return EntityRecord(
        id=data["id"],
        name=data["name"],
        weight=data["weight"],
        height=data["height"],
        types=types,
        thumbnail=sprites.get("front_default"),
    )


def references_from_list(data: Any) -> List[CatalogReference]:
    """Extract references from a list endpoint payload.

    Raises:
        ValueError: if the payload has no usable ``results`` list
    """
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        raise ValueError("List payload has no 'results' array")

    references: List[CatalogReference] = []
    for entry in results:
        if not isinstance(entry, dict):
            raise ValueError("List entries must be objects")
        name, url = entry.get("name"), entry.get("url")
        if not _is_non_empty_str(url):
            raise ValueError(f"List entry {name!r} has no detail url")
        references.append(CatalogReference(name=name if isinstance(name, str) else "", location=url))
    return references

