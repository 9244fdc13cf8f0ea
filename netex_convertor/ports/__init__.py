"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the generation/validation services
and the systems they drive: object storage, the operator reference
store, the schema validator, email and alerting.
"""

from .notification import AlertPort, NotifierPort
from .reference import OperatorRepositoryPort
from .storage import ObjectStorePort
from .validation import SchemaValidatorPort

__all__ = [
    # Storage
    "ObjectStorePort",
    # Reference data
    "OperatorRepositoryPort",
    # Validation
    "SchemaValidatorPort",
    # Notification
    "NotifierPort",
    "AlertPort",
]
