from dataclasses import dataclass, replace
from numbers import Real
from typing import Tuple

from .config import DEFAULT_HEIGHT_RANGE, DEFAULT_WEIGHT_RANGE
from .errors import InvalidCriteria

Range = Tuple[float, float]


def _check_range(label: str, value) -> Range:
    try:
        low, high = value
    except (TypeError, ValueError):
        raise InvalidCriteria(f"{label} must be a (min, max) pair, got {value!r}")
    for bound in (low, high):
        if isinstance(bound, bool) or not isinstance(bound, Real):
            raise InvalidCriteria(f"{label} bounds must be numbers, got {value!r}")
    if low > high:
        raise InvalidCriteria(f"{label} min {low} is greater than max {high}")
    return (low, high)


@dataclass(frozen=True)
class FilterCriteria:
    """
    Immutable filter state. Empty strings mean "no constraint" on that axis;
    ranges are inclusive at both ends.
    """

    name_substring: str = ""
    weight_range: Range = DEFAULT_WEIGHT_RANGE
    height_range: Range = DEFAULT_HEIGHT_RANGE
    type_selector: str = ""

    def __post_init__(self):
        if not isinstance(self.name_substring, str):
            raise InvalidCriteria("name_substring must be a string")
        if not isinstance(self.type_selector, str):
            raise InvalidCriteria("type_selector must be a string")
        # Lists from sliders are normalised to tuples so equality and hashing hold
        object.__setattr__(self, "weight_range", _check_range("weight_range", self.weight_range))
        object.__setattr__(self, "height_range", _check_range("height_range", self.height_range))

    def updated(self, **changes) -> "FilterCriteria":
        """Return a copy with ``changes`` applied.

        Raises:
            InvalidCriteria: for unknown fields or invalid values
        """
        unknown = set(changes) - {"name_substring", "weight_range", "height_range", "type_selector"}
        if unknown:
            raise InvalidCriteria(f"Unknown criteria fields: {', '.join(sorted(unknown))}")
        return replace(self, **changes)

