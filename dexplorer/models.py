"""
Catalog data model.

Records are immutable once built; a RecordStore is created once per load
cycle and only read afterwards.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class CatalogReference:
    """One entry of the provider's list endpoint."""

    name: str
    location: str


@dataclass(frozen=True)
class EntityRecord:
    """A fully detailed catalog entity."""

    id: int
    name: str
    weight: float
    height: float
    types: Tuple[str, ...]
    thumbnail: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < 1:
            raise ValueError(f"id must be a positive integer, got {self.id!r}")
        if not self.types:
            raise ValueError(f"record {self.id} must carry at least one type")
        # Accept any iterable of tags but store a tuple so the record stays hashable
        object.__setattr__(self, "types", tuple(self.types))

    def has_type(self, type_name: str) -> bool:
        return type_name in self.types


def available_types(records: Iterable[EntityRecord]) -> List[str]:
    """Sorted distinct type tags across all records."""
    return sorted({t for record in records for t in record.types})


class RecordStore:
    """Ordered, read-only collection of records with unique identifiers."""

    def __init__(self, records: Sequence[EntityRecord] = ()):
        self._records: Tuple[EntityRecord, ...] = tuple(records)
        seen = set()
        for record in self._records:
            if record.id in seen:
                raise ValueError(f"Duplicate record id: {record.id}")
            seen.add(record.id)

    @classmethod
    def empty(cls) -> "RecordStore":
        return cls(())

    @property
    def records(self) -> Tuple[EntityRecord, ...]:
        return self._records

    def available_types(self) -> List[str]:
        return available_types(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EntityRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> EntityRecord:
        return self._records[index]

    def __bool__(self) -> bool:
        return bool(self._records)

    def __repr__(self) -> str:
        return f"RecordStore({len(self._records)} records)"
