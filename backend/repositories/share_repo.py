"""Shareable links for rounds, goals and stats (/api/share)."""

from typing import List

from models import SharedContent, ShareCreate, ShareLink
from backend.converters import (
    share_link_from_payload,
    shared_content_from_payload,
    shared_list_from_payload,
    to_payload,
)
from backend.repositories.base import BackendRepository


class ShareRepository(BackendRepository):

    def get_shared(self, share_id: str) -> SharedContent:
        """Public snapshot behind a share link. Raises NotFoundError for unknown ids."""
        return shared_content_from_payload(self._request("GET", f"/api/share/{share_id}"))

    def list_shared(self) -> List[SharedContent]:
        """Links the current user created that have not expired."""
        return shared_list_from_payload(self._request("GET", "/api/share"))

    def create_share(self, share: ShareCreate) -> ShareLink:
        return share_link_from_payload(self._request("POST", "/api/share", json=to_payload(share)))

    def delete_share(self, share_id: str) -> None:
        self._request("DELETE", f"/api/share/{share_id}")
