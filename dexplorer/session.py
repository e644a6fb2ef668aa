"""
Explorer session: drives a load cycle into a controller and tracks status.

A failed load leaves the controller on an empty store with a FAILED status,
which reads differently from a loaded catalog where no entry matches.
"""

import asyncio
from enum import Enum
from typing import Optional

from .controller import ReactiveController
from .errors import FetchError, FetchFailure
from .fetch import FetchOrchestrator
from .logger import StructuredLogger, get_logger
from .models import RecordStore

LOADING_MESSAGE = "Loading catalog..."
NO_MATCHES_MESSAGE = "No entries match the current filters."
FAILURE_MESSAGES = {
    FetchFailure.LIST_UNAVAILABLE: "The catalog could not be loaded. Try again later.",
    FetchFailure.EMPTY_RESULT: "The catalog returned no entries. Try again later.",
}


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ExplorerSession:
    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        controller: ReactiveController,
        logger: Optional[StructuredLogger] = None,
    ):
        self.orchestrator = orchestrator
        self.controller = controller
        self.logger = logger or get_logger()
        self.status = SessionStatus.IDLE
        self.last_error: Optional[FetchError] = None
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    async def load(self) -> bool:
        """
        Run one fetch cycle and install the result.

        Returns:
            True if a store was installed, False if the load failed or the
            session was closed meanwhile
        """
        if self._closed:
            return False
        self.status = SessionStatus.LOADING
        self.last_error = None
        try:
            store = await self.orchestrator.load()
        except asyncio.CancelledError:
            self.status = SessionStatus.IDLE
            raise
        except FetchError as e:
            if self._closed:
                return False
            self.logger.error("Catalog load failed", reason=e.reason.value, error=str(e))
            self.last_error = e
            self.status = SessionStatus.FAILED
            self.controller.attach_store(RecordStore.empty())
            return False

        if self._closed:
            self.logger.debug("Discarding catalog loaded after session close", records=len(store))
            return False
        self.controller.attach_store(store)
        self.status = SessionStatus.READY
        return True

    def start(self) -> asyncio.Task:
        """Schedule ``load()`` on the running loop."""
        self._task = asyncio.get_running_loop().create_task(self.load())
        return self._task

    async def reload(self) -> bool:
        return await self.load()

    def status_message(self) -> str:
        if self.status == SessionStatus.LOADING:
            return LOADING_MESSAGE
        if self.status == SessionStatus.FAILED and self.last_error is not None:
            return FAILURE_MESSAGES[self.last_error.reason]
        if self.status == SessionStatus.READY and self.controller.result_count() == 0:
            return NO_MATCHES_MESSAGE
        if self.status == SessionStatus.READY:
            count = self.controller.result_count()
            return f"{count} {'entry' if count == 1 else 'entries'} found"
        return ""

    def close(self) -> None:
        """Tear down: cancel an outstanding load and the debounce timer."""
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.controller.close()
