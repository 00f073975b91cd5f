"""Reads and creates the current user's rounds (/api/rounds)."""

import logging
from typing import List

from models import Round
from backend.converters import round_from_payload, rounds_from_payload, to_payload
from backend.repositories.base import BackendRepository

logger = logging.getLogger(__name__)


class RoundRepository(BackendRepository):
    """Round Store Accessor."""

    def get_rounds(self) -> List[Round]:
        """All rounds of the authenticated user, as the backend orders them (newest first).

        An empty list means the user has no rounds yet; failures raise.
        """
        rounds = rounds_from_payload(self._request("GET", "/api/rounds"))
        logger.debug("Fetched %d rounds", len(rounds))
        return rounds

    def create_round(self, round_: Round) -> Round:
        """Log a new round. The backend assigns the id."""
        body = to_payload(round_)
        body.pop("id", None)
        return round_from_payload(self._request("POST", "/api/rounds", json=body))
