import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests
import structlog
from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener
from tenacity import retry, retry_if_exception_type, stop_after_attempt

from core.exceptions import TransportError
from infrastructure.observability import metrics

log = structlog.get_logger(__name__)

# only transport failures are retried; HTTP status codes go back to the caller
_TRANSPORT_ERRORS = (requests.exceptions.ConnectionError, requests.exceptions.Timeout)


def status_ok(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def safe_json(response: requests.Response) -> Dict[str, Any]:
    """Body as dict; ``{}`` for empty, non-JSON or non-object bodies."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class BreakerMetricsListener(CircuitBreakerListener):
    def state_changed(self, cb, old_state, new_state):
        if new_state.name == "open":
            log.warning(f"Circuit breaker '{cb.name}' opened.")
            metrics.api_breaker_open_total.labels(breaker=cb.name).inc()
        elif new_state.name == "closed" and old_state.name == "open":
            log.info(f"Circuit breaker '{cb.name}' closed.")


class BaseAPIClient:
    """
    Single outbound request + exactly one retry on transport failure.

    4xx/5xx responses are returned untouched; only a connection-level
    failure on both attempts (or an open breaker) becomes ``TransportError``.
    """

    DEFAULT_TIMEOUT = 30
    MAX_ATTEMPTS = 2

    def __init__(self, session: Optional[requests.Session] = None, name: str = "API"):
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.log = log.bind(client=f"{name}Client")
        self.api_breaker = CircuitBreaker(fail_max=5, reset_timeout=60, name=f"{name}Breaker")
        self.api_breaker.add_listener(BreakerMetricsListener())

    @staticmethod
    def _normalize_endpoint(url: str) -> str:
        path = urlsplit(url).path.strip("/")
        return "/" + path

    @retry(
        stop=stop_after_attempt(MAX_ATTEMPTS),
        retry=retry_if_exception_type(_TRANSPORT_ERRORS),
        reraise=True,
    )
    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        return self.session.request(method, url, timeout=self.DEFAULT_TIMEOUT, **kwargs)

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        method = method.upper()
        endpoint = self._normalize_endpoint(url)
        request_log = self.log.bind(endpoint=endpoint, method=method)
        start_time = time.monotonic()

        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json
        if headers:
            kwargs["headers"] = headers

        try:
            request_log.debug("Making API request", url=url)
            response = self.api_breaker.call(self._send, method, url, **kwargs)
        except CircuitBreakerError as e:
            metrics.hubspot_api_errors_total.labels(endpoint=endpoint, error_type="breaker_open").inc()
            request_log.error("API request refused, circuit open", error=str(e))
            raise TransportError(method, url) from e
        except _TRANSPORT_ERRORS as e:
            error_type = "timeout" if isinstance(e, requests.exceptions.Timeout) else "connection_error"
            metrics.hubspot_api_errors_total.labels(endpoint=endpoint, error_type=error_type).inc()
            request_log.error("API request failed after retry", error=str(e))
            raise TransportError(method, url) from e

        duration = time.monotonic() - start_time
        metrics.hubspot_api_call_total.labels(
            endpoint=endpoint, method=method, status_code=str(response.status_code)
        ).inc()
        metrics.api_request_duration_hist.labels(endpoint=endpoint, method=method).observe(duration)
        request_log.debug("API request done", status_code=response.status_code, duration_sec=f"{duration:.3f}s")
        return response
