# deals_catalog/store/postgrest_client.py

"""Client for the hosted catalog store's PostgREST interface."""

import json
import logging
import threading
import time
from typing import Any
from urllib.parse import urlencode

from curl_cffi import requests as curl_requests

from deals_catalog.config.settings import Settings
from deals_catalog.models.errors import FetchFailed
from deals_catalog.store.query import StoreQuery


class PostgrestClient:
    """Read-only query client with retries and a circuit breaker.

    Every failure mode (transport errors, exhausted retries, an open
    breaker, a body that is not a JSON array) raises
    :class:`FetchFailed`.  An empty list always means zero rows.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
    ) -> None:
        self.logger = logging.getLogger("deals_catalog.store")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.SUPABASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else (
            self.settings.SUPABASE_ANON_KEY
        )
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = self.settings.REQUEST_DELAY
        self._consecutive_failures: int = 0
        self._circuit_open: bool = False
        self._circuit_opened_at: float = 0.0
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT
        # Health checks share one client across worker threads
        self._state_lock = threading.Lock()

    # ── Public query interface ───────────────────────────

    def select_many(self, query: StoreQuery) -> list[dict[str, Any]]:
        """Return every row matching *query*."""
        resp = self._fetch(query)
        rows = self._decode_rows(query.collection, resp)
        self.logger.debug(
            "%s returned %d rows", query.describe(), len(rows)
        )
        return rows

    def select_one(self, query: StoreQuery) -> dict[str, Any] | None:
        """Return the first row matching *query*, or ``None``."""
        single = StoreQuery(
            collection=query.collection,
            projection=query.projection,
            equality=dict(query.equality),
            threshold_gte=dict(query.threshold_gte),
            order_by=query.order_by,
            limit=1,
        )
        rows = self.select_many(single)
        return rows[0] if rows else None

    def url_for(self, query: StoreQuery) -> str:
        """Full request URL for *query*."""
        return (
            f"{self.base_url}{self.settings.REST_PATH}/"
            f"{query.collection}?{urlencode(query.to_params())}"
        )

    # ── Transport ────────────────────────────────────────

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    def _check_circuit(self) -> bool:
        """Return True if the circuit breaker blocks this request.

        After CIRCUIT_BREAKER_COOLDOWN seconds the breaker enters
        a half-open state, allowing a single probe request through.
        """
        with self._state_lock:
            if not self._circuit_open:
                return False
            elapsed = time.time() - self._circuit_opened_at
            if elapsed < self.settings.CIRCUIT_BREAKER_COOLDOWN:
                return True
            self._circuit_open = False
        self.logger.info("Circuit breaker half-open after %.0fs", elapsed)
        return False

    def _record_success(self) -> None:
        """Reset failure counters after a successful call."""
        with self._state_lock:
            self._consecutive_failures = 0
            self._circuit_open = False
            self._circuit_opened_at = 0.0
            self._current_delay = self.settings.REQUEST_DELAY

    def _record_failure(self) -> None:
        """Track failure and open the circuit breaker if needed."""
        with self._state_lock:
            self._consecutive_failures += 1
            failures = self._consecutive_failures
            opened = (
                not self._circuit_open
                and failures >= self.settings.CIRCUIT_BREAKER_THRESHOLD
            )
            if opened:
                self._circuit_open = True
                self._circuit_opened_at = time.time()
        if opened:
            self.logger.error(
                "Circuit breaker opened after %d consecutive failures",
                failures,
            )

    def _escalate_delay(self) -> float:
        """Double the current delay up to the configured max and return it."""
        max_delay = (
            self.settings.REQUEST_DELAY
            * self.settings.MAX_DELAY_MULTIPLIER
        )
        with self._state_lock:
            self._current_delay = min(self._current_delay * 2, max_delay)
            delay = self._current_delay
        self.logger.warning("Rate-limited, delay escalated to %.1fs", delay)
        return delay

    def _fetch(self, query: StoreQuery) -> curl_requests.Response:
        """GET with retries, adaptive delay, and circuit breaker."""
        if self._check_circuit():
            raise FetchFailed(query.collection, "circuit breaker open")

        url = self.url_for(query)
        last_error: str = "no attempt made"
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=self._headers(),
                    timeout=self._request_timeout,
                )
                if resp.status_code in (200, 206):
                    self._record_success()
                    return resp
                last_error = f"HTTP {resp.status_code}"
                self.logger.warning(
                    "%s: HTTP %d on attempt %d",
                    query.describe(),
                    resp.status_code,
                    attempt + 1,
                )
                if resp.status_code == 429:
                    time.sleep(self._escalate_delay())
                elif 400 <= resp.status_code < 500:
                    # Client errors will not improve on retry
                    break
            except Exception as exc:
                last_error = str(exc) or type(exc).__name__
                self.logger.warning(
                    "%s: request error on attempt %d: %s",
                    query.describe(),
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                with self._state_lock:
                    delay = self._current_delay
                time.sleep(delay * (attempt + 1))
        self._record_failure()
        raise FetchFailed(query.collection, last_error)

    def _decode_rows(
        self,
        collection: str,
        resp: curl_requests.Response,
    ) -> list[dict[str, Any]]:
        """Parse a response body that must be a JSON array of objects."""
        try:
            payload: Any = json.loads(resp.text)
        except ValueError as exc:
            self.logger.error(
                "Malformed JSON from '%s'", collection, exc_info=True
            )
            raise FetchFailed(collection, exc) from exc
        if not isinstance(payload, list) or not all(
            isinstance(row, dict) for row in payload
        ):
            raise FetchFailed(
                collection,
                f"expected a JSON array of rows, got {type(payload).__name__}",
            )
        return payload
