"""Tests for the entry points and dependency wiring."""

import json
from unittest.mock import MagicMock

import pytest

from netex_convertor.adapters.notification import LoggingAlerter, SendGridNotifier
from netex_convertor.adapters.reference import InMemoryOperatorRepository, RedisOperatorRepository
from netex_convertor.adapters.storage import FileSystemObjectStore
from netex_convertor.config import AppConfig, StorageConfig
from netex_convertor.container import Container
from netex_convertor.domain.models import StorageLocation
from netex_convertor.pipeline import (
    handle_generation_event,
    handle_validation_event,
    main,
    storage_event,
)
from netex_convertor.ports import (
    AlertPort,
    NotifierPort,
    ObjectStorePort,
    OperatorRepositoryPort,
    SchemaValidatorPort,
)
from netex_convertor.services import NetexGenerationService, NetexValidationService


@pytest.fixture
def config(tmp_path):
    return AppConfig(storage=StorageConfig(root_dir=tmp_path))


@pytest.fixture
def container(config, operator):
    container = Container.create_default(config)
    container.register(OperatorRepositoryPort, lambda: InMemoryOperatorRepository.of([operator]))
    container.register(SchemaValidatorPort, lambda: MagicMock())
    container.register(NotifierPort, lambda: MagicMock())
    return container


def test_default_bindings(config):
    container = Container.create_default(config)

    assert isinstance(container.resolve(ObjectStorePort), FileSystemObjectStore)
    assert isinstance(container.resolve(OperatorRepositoryPort), RedisOperatorRepository)
    assert isinstance(container.resolve(NotifierPort), SendGridNotifier)
    assert isinstance(container.resolve(AlertPort), LoggingAlerter)
    assert container.resolve(NetexGenerationService).output_bucket == config.storage.unvalidated_bucket
    assert container.resolve(NetexValidationService).validated_bucket == config.storage.validated_bucket


def test_generation_then_validation(container, config, geo_zone_ticket_json):
    store = container.resolve(ObjectStorePort)
    store.put(
        StorageLocation(config.storage.input_bucket, "BLAC/ticket.json"),
        json.dumps(geo_zone_ticket_json).encode("utf-8"),
    )

    artifact = handle_generation_event(
        storage_event(config.storage.input_bucket, "BLAC/ticket.json"), container
    )
    published = handle_validation_event(storage_event(artifact.bucket, artifact.key), container)

    assert artifact.bucket == config.storage.unvalidated_bucket
    assert published == StorageLocation(config.storage.validated_bucket, artifact.key)
    assert store.get(published).body == store.get(artifact).body
    container.resolve(NotifierPort).notify.assert_called_once()


def test_event_keys_are_decoded(container, config, geo_zone_ticket_json):
    store = container.resolve(ObjectStorePort)
    store.put(
        StorageLocation(config.storage.input_bucket, "BLAC/my ticket.json"),
        json.dumps(geo_zone_ticket_json).encode("utf-8"),
    )

    artifact = handle_generation_event(
        storage_event(config.storage.input_bucket, "BLAC/my+ticket.json"), container
    )

    assert artifact.key == "BLAC/GeoZone/BLAC_GeoZone_my ticket.xml"


class TestCli:
    def test_generate(self, container, config, geo_zone_ticket_json, capsys):
        container.resolve(ObjectStorePort).put(
            StorageLocation(config.storage.input_bucket, "t.json"),
            json.dumps(geo_zone_ticket_json).encode("utf-8"),
        )

        assert main(["generate", "--key", "t.json"], container) == 0
        assert "BLAC/GeoZone/BLAC_GeoZone_t.xml" in capsys.readouterr().out

    def test_failure_exit_code(self, container, capsys):
        assert main(["generate", "--key", "missing.json"], container) == 1
        assert "Error" in capsys.readouterr().err

    def test_stage_is_required(self):
        with pytest.raises(SystemExit):
            main([])


class TestContainer:
    def test_singleton_and_transient_factories(self):
        container = Container(config=AppConfig())
        container.register(ObjectStorePort, object)
        container.register(AlertPort, object, singleton=False)

        assert container.resolve(ObjectStorePort) is container.resolve(ObjectStorePort)
        assert container.resolve(AlertPort) is not container.resolve(AlertPort)

    def test_unregistered_type(self):
        with pytest.raises(KeyError):
            Container(config=AppConfig()).resolve(NotifierPort)

    def test_clear_all_drops_registrations(self):
        container = Container(config=AppConfig())
        container.register(ObjectStorePort, object)

        container.clear_all()

        with pytest.raises(KeyError):
            container.resolve(ObjectStorePort)
