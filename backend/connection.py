import logging
from typing import Any, Dict, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from backend.exceptions import AuthError, BackendError, NetworkError, NotFoundError, PayloadError

logger = logging.getLogger(__name__)

RETRY_STATUSES = (502, 503, 504)
RETRY_METHODS = frozenset({"GET", "DELETE"})


def _error_message(response: requests.Response, default: str) -> str:
    """Pull the backend's {"error": "..."} message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


class BackendClient:
    """Manages the HTTP session used to reach the golf backend.

    Timeouts and retries for every collaborator call live here.
    """

    def __init__(self):
        self._session: Optional[requests.Session] = None
        self._base_url: Optional[str] = None
        self._timeout: float = 10.0

    def initialize(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 2,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create the session. Call once at app startup."""
        if self._session is not None:
            return
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(
                max_retries=Retry(
                    total=retries,
                    backoff_factor=0.3,
                    status_forcelist=RETRY_STATUSES,
                    allowed_methods=RETRY_METHODS,
                    raise_on_status=False,
                )
            )
            session.mount("http://", adapter)
            session.mount("https://", adapter)
        session.headers.setdefault("Accept", "application/json")
        self._session = session

    def close(self) -> None:
        """Close pooled connections. Call at app shutdown."""
        if self._session is not None:
            self._session.close()
            self._session = None

    @property
    def session(self) -> requests.Session:
        """Get the session, raising if not initialized."""
        if self._session is None:
            raise RuntimeError(
                "Backend client not initialized. Call backend.initialize() first."
            )
        return self._session

    @property
    def base_url(self) -> str:
        if self._base_url is None:
            raise RuntimeError(
                "Backend client not initialized. Call backend.initialize() first."
            )
        return self._base_url

    def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for empty bodies).

        Raises NetworkError, AuthError, NotFoundError, PayloadError or
        BackendError depending on how the call failed.
        """
        url = f"{self.base_url}{path}"
        clean_params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = self.session.request(
                method,
                url,
                params=clean_params or None,
                json=json,
                headers=dict(headers or {}),
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            raise NetworkError(f"{method} {path} timed out after {self._timeout}s") from e
        except requests.RequestException as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e

        status = response.status_code
        if status in (401, 403):
            raise AuthError(_error_message(response, "Unauthorized"), status)
        if status == 404:
            raise NotFoundError(_error_message(response, f"{path} not found"), status)
        if status >= 400:
            message = _error_message(response, f"{method} {path} returned {status}")
            logger.error("Backend call %s %s failed with %s: %s", method, path, status, message)
            raise BackendError(message, status)

        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PayloadError(f"{method} {path} returned a non-JSON body", status) from e

    def health_check(self) -> bool:
        """Check the backend answers at all."""
        try:
            response = self.session.get(self.base_url, timeout=self._timeout)
        except requests.RequestException:
            return False
        return response.status_code < 500


# Module-level singleton for convenience
backend = BackendClient()
