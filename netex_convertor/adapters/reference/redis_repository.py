"""Redis operator reference repository.

Operator records are stored as JSON strings under ``<prefix><noc>``.
The client is created lazily on first lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import redis

from ...config import ReferenceStoreConfig, get_config
from ...domain.errors import InputUnavailable
from ...domain.models import OperatorReferenceData
from ...io.operator_json import decode_operator_record


@dataclass
class RedisOperatorRepository:
    """Operator lookups against a Redis reference store.

    Implements OperatorRepositoryPort.

    Attributes:
        config: Reference store configuration
        client: Optional pre-built client (tests inject a mock)
    """

    config: ReferenceStoreConfig = field(default_factory=lambda: get_config().reference)
    client: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_client(self) -> Any:
        if self.client is None:
            self._logger.debug(
                "Connecting to reference store",
                extra={"redis_url": self.config.redis_url},
            )
            self.client = redis.Redis.from_url(
                self.config.redis_url,
                decode_responses=True,
                socket_timeout=self.config.socket_timeout_seconds,
                socket_connect_timeout=self.config.connect_timeout_seconds,
            )
        return self.client

    def key_for(self, noc_code: str) -> str:
        return f"{self.config.key_prefix}{noc_code}"

    def get(self, noc_code: str) -> OperatorReferenceData:
        key = self.key_for(noc_code)
        try:
            raw = self._get_client().get(key)
        except redis.RedisError as e:
            raise InputUnavailable(
                f"Reference store lookup failed for {noc_code}",
                location=key,
                cause=e,
            )

        if raw is None:
            raise InputUnavailable(f"No operator record for {noc_code}", location=key)

        operator = decode_operator_record(raw, location=key)
        self._logger.info(
            "Operator record loaded",
            extra={"noc_code": noc_code, "op_id": operator.op_id},
        )
        return operator
