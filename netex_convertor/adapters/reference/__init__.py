"""Operator reference adapters - Implementations of the OperatorRepositoryPort.

Available implementations:
- RedisOperatorRepository: JSON records in Redis keyed by NOC code
- InMemoryOperatorRepository: Dict-backed repository for testing
"""

from .memory_repository import InMemoryOperatorRepository
from .redis_repository import RedisOperatorRepository

__all__ = ["RedisOperatorRepository", "InMemoryOperatorRepository"]
