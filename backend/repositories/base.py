from typing import Any, Dict, Mapping, Optional

from backend.connection import BackendClient


class BackendRepository:
    """Shared plumbing: one client, plus the caller's forwarded auth headers."""

    def __init__(self, client: BackendClient, headers: Optional[Mapping[str, str]] = None):
        self._client = client
        self._headers: Dict[str, str] = dict(headers or {})

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        return self._client.request_json(
            method, path, params=params, json=json, headers=self._headers
        )
