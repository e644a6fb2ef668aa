"""
Pure filter pipeline over catalog records.

Predicates combine with AND semantics; survivors are sorted by name,
case-insensitively, with a stable sort so equal names keep input order.
"""

from typing import Iterable, List

from .criteria import FilterCriteria, Range
from .models import EntityRecord
from .normalize import contains_text, name_sort_key


def _in_range(value: float, bounds: Range) -> bool:
    low, high = bounds
    return low <= value <= high


def matches(record: EntityRecord, criteria: FilterCriteria) -> bool:
    """True if ``record`` satisfies every active predicate of ``criteria``."""
    if criteria.name_substring and not contains_text(record.name, criteria.name_substring):
        return False
    if not _in_range(record.weight, criteria.weight_range):
        return False
    if not _in_range(record.height, criteria.height_range):
        return False
    if criteria.type_selector and not record.has_type(criteria.type_selector):
        return False
    return True


def apply_filters(records: Iterable[EntityRecord], criteria: FilterCriteria) -> List[EntityRecord]:
    """Return the records matching ``criteria``, ordered by display name."""
    survivors = [record for record in records if matches(record, criteria)]
    return sorted(survivors, key=lambda record: name_sort_key(record.name))
