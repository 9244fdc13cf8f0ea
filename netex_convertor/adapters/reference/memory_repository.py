"""In-memory operator repository for tests and local runs."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable

from ...domain.errors import InputUnavailable
from ...domain.models import OperatorReferenceData


@dataclass
class InMemoryOperatorRepository:
    """Operator records held in a dict keyed by NOC code.

    Implements OperatorRepositoryPort.
    """

    _records: Dict[str, OperatorReferenceData] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @classmethod
    def of(cls, operators: Iterable[OperatorReferenceData]) -> InMemoryOperatorRepository:
        repository = cls()
        for operator in operators:
            repository.add(operator)
        return repository

    def add(self, operator: OperatorReferenceData) -> None:
        with self._lock:
            self._records[operator.noc_code] = operator

    def get(self, noc_code: str) -> OperatorReferenceData:
        with self._lock:
            operator = self._records.get(noc_code)
        if operator is None:
            raise InputUnavailable(f"No operator record for {noc_code}", location=noc_code)
        return operator
