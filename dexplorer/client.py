"""HTTP gateway to the remote catalog provider."""

from typing import List, Optional

import requests

from .config import Settings
from .errors import FetchError, FetchFailure, ItemFetchError
from .logger import StructuredLogger, get_logger
from .models import CatalogReference, EntityRecord
from .retry import exponential_backoff, is_retryable_request_error
from .schema import record_from_detail, references_from_list


def _error_type(exc: requests.exceptions.RequestException) -> str:
    if isinstance(exc, requests.exceptions.HTTPError):
        status = exc.response.status_code if exc.response is not None else "unknown"
        return f"HTTPError_{status}"
    if isinstance(exc, requests.exceptions.Timeout):
        return "Timeout"
    if isinstance(exc, requests.exceptions.ConnectionError):
        return "ConnectionError"
    return "RequestException"


class CatalogClient:
    """
    Blocking client for the list and detail endpoints.

    Every call goes through one ``requests.Session``; transport retries
    follow ``settings.http_retries`` (0 by default).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.settings = settings or Settings()
        self.session = session or requests.Session()
        self.logger = logger or get_logger()
        self._get_json = exponential_backoff(
            max_retries=self.settings.http_retries,
            base_delay=0.5,
            max_delay=5.0,
            exceptions=(requests.exceptions.RequestException,),
            retry_if=is_retryable_request_error,
            on_retry=self._log_retry,
        )(self._get_json_once)

    def _log_retry(self, attempt: int, exc: Exception, delay: float):
        self.logger.debug("Retrying request", attempt=attempt, error=str(exc), delay=delay)

    def _get_json_once(self, url: str, params: Optional[dict] = None):
        self.logger.record_api_call()
        resp = self.session.get(url, params=params, timeout=self.settings.http_timeout)
        resp.raise_for_status()
        return resp.json()

    def list_references(self, limit: Optional[int] = None) -> List[CatalogReference]:
        """Fetch the reference list, capped at ``limit`` entries.

        Raises:
            FetchError: LIST_UNAVAILABLE on any transport, HTTP or payload error
        """
        limit = limit if limit is not None else self.settings.list_limit
        url = self.settings.list_url
        try:
            payload = self._get_json(url, params={"limit": limit})
            references = references_from_list(payload)
        except requests.exceptions.RequestException as e:
            self.logger.error("Catalog list request failed", url=url, error_type=_error_type(e), error=str(e))
            raise FetchError(FetchFailure.LIST_UNAVAILABLE, f"Catalog list unavailable: {e}") from e
        except ValueError as e:
            self.logger.error("Catalog list payload invalid", url=url, error=str(e))
            raise FetchError(FetchFailure.LIST_UNAVAILABLE, f"Catalog list payload invalid: {e}") from e

        self.logger.info("Fetched catalog list", url=url, count=len(references))
        return references[:limit]

    def fetch_detail(self, location: str) -> EntityRecord:
        """Fetch and parse one detail record.

        Raises:
            ItemFetchError: on any transport, HTTP or payload error
        """
        try:
            payload = self._get_json(location)
        except requests.exceptions.JSONDecodeError as e:
            raise ItemFetchError(location, f"Invalid JSON: {e}", error_type="InvalidJSON") from e
        except requests.exceptions.RequestException as e:
            raise ItemFetchError(location, str(e), error_type=_error_type(e)) from e
        return record_from_detail(payload, location)

    def close(self):
        self.session.close()
