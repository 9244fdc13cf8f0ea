"""Services layer - Application orchestration.

This module contains the application services that connect the
generation engine to storage, reference data, validation and email.

Available services:
- NetexGenerationService: Ticket JSON to unvalidated NeTEx artifact
- NetexValidationService: Schema validation, publication and notification
"""

from .generation_service import NetexGenerationService
from .validation_service import NetexValidationService

__all__ = ["NetexGenerationService", "NetexValidationService"]
