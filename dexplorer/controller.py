"""
Reactive controller: owns the criteria, the filtered result and the page.

Criteria edits go through a debounce so a burst of edits triggers exactly
one filter run with the final criteria. Page navigation is synchronous and
never touches the criteria.
"""

from enum import Enum
from typing import Callable, List, Optional, Sequence

from .criteria import FilterCriteria
from .debounce import Debouncer, Scheduler
from .filtering import apply_filters
from .logger import StructuredLogger, get_logger
from .models import EntityRecord, RecordStore
from .pagination import Page, clamp_page, paginate, total_pages

FilterFn = Callable[[Sequence[EntityRecord], FilterCriteria], List[EntityRecord]]


class ControllerState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"


class ReactiveController:
    """Read model consumed by the presentation layer."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        page_size: int = 20,
        debounce_seconds: float = 0.3,
        scheduler: Optional[Scheduler] = None,
        criteria: Optional[FilterCriteria] = None,
        engine: FilterFn = apply_filters,
        logger: Optional[StructuredLogger] = None,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.engine = engine
        self.logger = logger or get_logger()
        self._store = store or RecordStore.empty()
        self._criteria = criteria or FilterCriteria()
        self._applied_criteria = self._criteria
        self._results: List[EntityRecord] = list(self.engine(self._store.records, self._criteria))
        self._page_number = 1
        self._closed = False
        self._debouncer = Debouncer(debounce_seconds, self._settle, scheduler)

    @property
    def state(self) -> ControllerState:
        return ControllerState.PENDING if self._debouncer.pending else ControllerState.IDLE

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def results(self) -> List[EntityRecord]:
        return list(self._results)

    @property
    def applied_criteria(self) -> FilterCriteria:
        """Criteria the current result was computed from."""
        return self._applied_criteria

    # Read model

    def available_types(self) -> List[str]:
        return self._store.available_types()

    def current_criteria(self) -> FilterCriteria:
        """Latest requested criteria, settled or not."""
        return self._criteria

    def set_criteria(self, **changes) -> None:
        """
        Merge ``changes`` into the latest criteria and schedule a filter run.

        Raises:
            InvalidCriteria: the change is rejected and the prior criteria kept
        """
        if self._closed:
            return
        criteria = self._criteria.updated(**changes)
        if criteria == self._criteria:
            return
        self._criteria = criteria
        self._debouncer.trigger(criteria)

    def current_page(self) -> Page:
        return paginate(self._results, self._page_number, self.page_size)

    def set_page_number(self, page_number: int) -> None:
        self._page_number = clamp_page(page_number, len(self._results), self.page_size)

    def result_count(self) -> int:
        return len(self._results)

    def total_pages(self) -> int:
        return total_pages(len(self._results), self.page_size)

    # Lifecycle

    def attach_store(self, store: RecordStore) -> None:
        """Swap in a freshly loaded store and recompute at once."""
        if self._closed:
            return
        self._debouncer.cancel()
        self._store = store
        self._recompute(self._criteria)

    def flush(self) -> bool:
        """Settle a pending change immediately."""
        return self._debouncer.flush()

    def close(self) -> None:
        """Drop any pending timer; later callbacks become no-ops."""
        self._closed = True
        self._debouncer.close()

    def _settle(self, criteria: FilterCriteria) -> None:
        if self._closed:
            return
        self._recompute(criteria)

    def _recompute(self, criteria: FilterCriteria) -> None:
        self._results = list(self.engine(self._store.records, criteria))
        self._applied_criteria = criteria
        self._page_number = 1
        self.logger.record_filter_run()
        self.logger.debug(
            "Filters applied",
            criteria=repr(criteria),
            results=len(self._results),
            records=len(self._store),
        )
