"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - services may be resolved from concurrent invocations
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        generation = container.resolve(NetexGenerationService)

        # Testing
        container = Container()
        container.register(OperatorRepositoryPort, lambda: InMemoryOperatorRepository())
        repository = container.resolve(OperatorRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def clear_all(self) -> None:
        """Clear all registrations and singletons.

        Call this to completely reset the container.
        """
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        This creates a fully configured container with all adapters
        registered and ready to use.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.notification import LoggingAlerter, SendGridNotifier
        from .adapters.reference import RedisOperatorRepository
        from .adapters.storage import FileSystemObjectStore
        from .adapters.validation import XsdSchemaValidator
        from .netex.template import TemplateLoader
        from .ports.notification import AlertPort, NotifierPort
        from .ports.reference import OperatorRepositoryPort
        from .ports.storage import ObjectStorePort
        from .ports.validation import SchemaValidatorPort
        from .services import NetexGenerationService, NetexValidationService

        config = config or get_config()
        container = cls(config=config)

        # Storage
        container.register(
            ObjectStorePort,
            lambda: FileSystemObjectStore(config.storage),
        )

        # Reference data
        container.register(
            OperatorRepositoryPort,
            lambda: RedisOperatorRepository(config.reference),
        )

        # Templates
        container.register(
            TemplateLoader,
            lambda: TemplateLoader(config.templates),
        )

        # Validation
        container.register(
            SchemaValidatorPort,
            lambda: XsdSchemaValidator(config.validation),
        )

        # Notification and alerting
        container.register(
            NotifierPort,
            lambda: SendGridNotifier(config.email),
        )
        container.register(AlertPort, lambda: LoggingAlerter())

        # Services
        def create_generation_service() -> NetexGenerationService:
            return NetexGenerationService(
                object_store=container.resolve(ObjectStorePort),
                operator_repository=container.resolve(OperatorRepositoryPort),
                template_loader=container.resolve(TemplateLoader),
                alerter=container.resolve(AlertPort),
                output_bucket=config.storage.unvalidated_bucket,
            )

        def create_validation_service() -> NetexValidationService:
            return NetexValidationService(
                object_store=container.resolve(ObjectStorePort),
                validator=container.resolve(SchemaValidatorPort),
                notifier=container.resolve(NotifierPort),
                alerter=container.resolve(AlertPort),
                validated_bucket=config.storage.validated_bucket,
            )

        container.register(NetexGenerationService, create_generation_service)
        container.register(NetexValidationService, create_validation_service)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
