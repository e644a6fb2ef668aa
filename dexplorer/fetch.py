"""
Fan-out loader that assembles the full catalog.

One list request, then one detail request per reference, run concurrently
under a semaphore. Detail failures drop the item; list failures and an
empty outcome fail the whole cycle.
"""

import asyncio
from typing import List, Optional

from .client import CatalogClient
from .config import Settings
from .errors import FetchError, FetchFailure, ItemFetchError
from .logger import StructuredLogger, get_logger
from .models import CatalogReference, EntityRecord, RecordStore


class FetchOrchestrator:
    """Builds a RecordStore from the provider, tolerating per-item failures."""

    def __init__(
        self,
        client: CatalogClient,
        settings: Optional[Settings] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.client = client
        self.settings = settings or Settings()
        self.logger = logger or get_logger()

    async def load(self) -> RecordStore:
        """
        Run one full fetch cycle.

        Returns:
            RecordStore with every record whose detail request succeeded,
            in reference order

        Raises:
            FetchError: LIST_UNAVAILABLE if the list request fails,
                EMPTY_RESULT if no detail request succeeded
        """
        references = await asyncio.to_thread(self.client.list_references, self.settings.list_limit)

        semaphore = asyncio.Semaphore(self.settings.max_concurrency)
        outcomes = await asyncio.gather(
            *(self._fetch_one(reference, semaphore) for reference in references)
        )

        records = self._assemble(outcomes)
        if not records:
            self.logger.error("Catalog load produced no records", references=len(references))
            raise FetchError(
                FetchFailure.EMPTY_RESULT,
                f"None of {len(references)} catalog entries could be loaded",
            )

        self.logger.info(
            "Catalog loaded",
            references=len(references),
            records=len(records),
            failed=len(references) - len(records),
        )
        return RecordStore(records)

    async def _fetch_one(
        self, reference: CatalogReference, semaphore: asyncio.Semaphore
    ) -> Optional[EntityRecord]:
        async with semaphore:
            self.logger.record_detail_attempt()
            try:
                record = await asyncio.to_thread(self.client.fetch_detail, reference.location)
            except ItemFetchError as e:
                self.logger.record_detail_failure(e.error_type)
                self.logger.warning(
                    "Skipping catalog entry",
                    name=reference.name,
                    location=reference.location,
                    error_type=e.error_type,
                    error=str(e),
                )
                return None
        self.logger.record_detail_success()
        return record

    def _assemble(self, outcomes: List[Optional[EntityRecord]]) -> List[EntityRecord]:
        records: List[EntityRecord] = []
        seen_ids = set()
        for record in outcomes:
            if record is None:
                continue
            if record.id in seen_ids:
                self.logger.warning("Dropping duplicate record id", id=record.id, name=record.name)
                continue
            seen_ids.add(record.id)
            records.append(record)
        return records
