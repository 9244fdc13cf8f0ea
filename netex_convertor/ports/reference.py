"""Operator reference port - Lookup of operator records by NOC code."""

from __future__ import annotations

from typing import Protocol

from ..domain.models import OperatorReferenceData


class OperatorRepositoryPort(Protocol):
    """Port for operator reference data.

    Implementations:
    - adapters/reference/redis_repository.py (RedisOperatorRepository) - Production
    - adapters/reference/memory_repository.py (InMemoryOperatorRepository) - Testing
    """

    def get(self, noc_code: str) -> OperatorReferenceData:
        """Look up the operator record for a National Operator Code.

        Raises:
            InputUnavailable: If no record exists or it cannot be read.
        """
        ...
