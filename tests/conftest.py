"""Shared fixtures for the NeTEx convertor tests."""

from datetime import datetime, timezone

import pytest

from netex_convertor.config import TemplateConfig, reset_config
from netex_convertor.container import reset_container
from netex_convertor.domain.models import (
    OperatorReferenceData,
    Product,
    SelectedLine,
    Stop,
    TicketDescription,
    TicketVariant,
)
from netex_convertor.netex.template import TemplateLoader


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts from freshly loaded configuration."""
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def generated_at():
    # A leap day, so the tariff end date needs the 28 February fallback
    return datetime(2020, 2, 29, 12, 30, 45, 123456, tzinfo=timezone.utc)


@pytest.fixture
def operator():
    return OperatorReferenceData(
        noc_code="BLAC",
        op_id="135742",
        operator_public_name="Blackpool Transport Services Ltd",
        vosa_psv_license_name="Blackpool Transport",
        fare_enquiry_phone="01253 473001",
        complaints_address="Rigby Road, Blackpool, FY1 5DD",
        timetable_enquiry_email="enquiries@blackpooltransport.com",
        website="Blackpool Transport#https://www.blackpooltransport.com#",
        mode="Bus",
    )


@pytest.fixture
def geo_zone_ticket():
    return TicketDescription(
        noc_code="BLAC",
        operator_name="Blackpool Transport",
        variant=TicketVariant.GEO_ZONE,
        passenger_type="adult",
        products=(Product(name="Weekly", price="10.00"),),
        stops=(
            Stop(
                naptan_code="490000001",
                stop_name="Talbot Road",
                locality_code="E0034964",
                street="Talbot Road",
                locality_name="Blackpool",
                parent_locality_name="Lancashire",
            ),
            Stop(
                naptan_code="490000002",
                stop_name="Promenade",
                locality_code="E0034965",
                locality_name="Blackpool",
            ),
        ),
        zone_name="Town Centre",
        email="submitter@example.com",
    )


@pytest.fixture
def multi_service_ticket():
    return TicketDescription(
        noc_code="BLAC",
        operator_name="Blackpool Transport",
        variant=TicketVariant.MULTI_SERVICE,
        passenger_type="adult",
        products=(Product(name="Weekly", price="15.00", duration="7"),),
        lines=(
            SelectedLine(line_name="L1"),
            SelectedLine(line_name="L2", service_description="Town Centre - Airport"),
        ),
        email="submitter@example.com",
    )


@pytest.fixture
def template_loader():
    return TemplateLoader(TemplateConfig())


@pytest.fixture
def skeleton(template_loader):
    return template_loader.load(TicketVariant.GEO_ZONE)


@pytest.fixture
def geo_zone_ticket_json():
    return {
        "nocCode": "BLAC",
        "operatorName": "Blackpool Transport",
        "variant": "GeoZone",
        "passengerType": "adult",
        "zoneName": "Town Centre",
        "email": "submitter@example.com",
        "uuid": "1e0459b3-082e-4e70-89db-96e8ae173e10",
        "products": [{"productName": "Weekly", "productPrice": "10.00"}],
        "stops": [
            {
                "naptanCode": "490000001",
                "stopName": "Talbot Road",
                "localityCode": "E0034964",
                "street": "Talbot Road",
                "localityName": "Blackpool",
            }
        ],
    }


@pytest.fixture
def multi_service_ticket_json():
    return {
        "nocCode": "BLAC",
        "operatorName": "Blackpool Transport",
        "variant": "MultiService",
        "passengerType": "adult",
        "email": "submitter@example.com",
        "products": [{"productName": "Weekly", "productPrice": "15.00", "productDuration": "7"}],
        "selectedServices": [
            "L1",
            {"lineName": "L2", "serviceDescription": "Town Centre - Airport"},
        ],
    }


@pytest.fixture
def operator_record():
    return {
        "nocCode": "BLAC",
        "opId": "135742",
        "operatorPublicName": "Blackpool Transport Services Ltd",
        "vosaPsvLicenseName": "Blackpool Transport",
        "fareEnq": "01253 473001",
        "complEnq": "Rigby Road, Blackpool, FY1 5DD",
        "ttrteEnq": "enquiries@blackpooltransport.com",
        "website": "Blackpool Transport#https://www.blackpooltransport.com#",
        "mode": "Bus",
    }
