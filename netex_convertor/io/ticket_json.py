"""Ticket JSON decoding.

Ticket submissions are stored as camelCase JSON documents. They are
checked against ``TICKET_SCHEMA`` before being turned into a
``TicketDescription``; the domain model then enforces the per-variant
invariants.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Union

from jsonschema import Draft7Validator

from ..domain.errors import InvalidTicketData
from ..domain.models import Product, SelectedLine, Stop, TicketDescription, TicketVariant

_TEXT = {"type": "string"}
_OPTIONAL_TEXT = {"type": ["string", "null"]}

TICKET_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["nocCode", "operatorName", "variant", "passengerType", "products"],
    "properties": {
        "nocCode": {"type": "string", "minLength": 1},
        "operatorName": _TEXT,
        "variant": _TEXT,
        "passengerType": {"type": "string", "minLength": 1},
        "zoneName": _OPTIONAL_TEXT,
        "email": _OPTIONAL_TEXT,
        "uuid": _OPTIONAL_TEXT,
        "products": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["productName", "productPrice"],
                "properties": {
                    "productName": {"type": "string", "minLength": 1},
                    "productPrice": {"type": ["string", "number"]},
                    "productDuration": {"type": ["string", "integer", "null"]},
                },
            },
        },
        "stops": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["naptanCode", "stopName", "localityCode"],
                "properties": {
                    "naptanCode": {"type": "string", "minLength": 1},
                    "stopName": _TEXT,
                    "localityCode": {"type": "string", "minLength": 1},
                    "atcoCode": _OPTIONAL_TEXT,
                    "street": _OPTIONAL_TEXT,
                    "localityName": _OPTIONAL_TEXT,
                    "parentLocalityName": _OPTIONAL_TEXT,
                    "indicator": _OPTIONAL_TEXT,
                },
            },
        },
        "selectedServices": {
            "type": "array",
            "items": {
                "anyOf": [
                    {"type": "string", "minLength": 1},
                    {
                        "type": "object",
                        "required": ["lineName"],
                        "properties": {
                            "lineName": {"type": "string", "minLength": 1},
                            "serviceDescription": _OPTIONAL_TEXT,
                            "startDate": _OPTIONAL_TEXT,
                        },
                    },
                ]
            },
        },
    },
}

_VALIDATOR = Draft7Validator(TICKET_SCHEMA)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _product(raw: Mapping[str, Any]) -> Product:
    return Product(
        name=raw["productName"],
        price=str(raw["productPrice"]),
        duration=_text(raw.get("productDuration")),
    )


def _stop(raw: Mapping[str, Any]) -> Stop:
    return Stop(
        naptan_code=raw["naptanCode"],
        stop_name=raw["stopName"],
        locality_code=raw["localityCode"],
        atco_code=raw.get("atcoCode"),
        street=raw.get("street"),
        locality_name=raw.get("localityName"),
        parent_locality_name=raw.get("parentLocalityName"),
        indicator=raw.get("indicator"),
    )


def _line(raw: Union[str, Mapping[str, Any]]) -> SelectedLine:
    if isinstance(raw, str):
        return SelectedLine(line_name=raw)
    return SelectedLine(
        line_name=raw["lineName"],
        service_description=raw.get("serviceDescription"),
        start_date=raw.get("startDate"),
    )


def validate_ticket_json(data: Any) -> None:
    """Check a decoded ticket document against the ticket schema.

    Raises:
        InvalidTicketData: Naming the first offending field.
    """
    errors = sorted(_VALIDATOR.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if not errors:
        return
    first = errors[0]
    field_name = ".".join(str(part) for part in first.path) or None
    raise InvalidTicketData(
        f"Ticket data does not match schema: {first.message}",
        field_name=field_name,
    )


def decode_ticket(raw: Union[bytes, str, Mapping[str, Any]]) -> TicketDescription:
    """Decode a ticket submission into a TicketDescription.

    Args:
        raw: JSON bytes or text, or an already-decoded mapping.

    Raises:
        InvalidTicketData: If the document is not JSON, violates the
            schema, or is inconsistent for its variant.
    """
    if isinstance(raw, (bytes, str)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidTicketData("Ticket data is not valid JSON", cause=e)
    else:
        data = raw

    validate_ticket_json(data)

    return TicketDescription(
        noc_code=data["nocCode"],
        operator_name=data["operatorName"],
        variant=TicketVariant.from_tag(data["variant"]),
        passenger_type=data["passengerType"],
        products=tuple(_product(p) for p in data["products"]),
        stops=tuple(_stop(s) for s in data.get("stops") or ()),
        lines=tuple(_line(line) for line in data.get("selectedServices") or ()),
        zone_name=data.get("zoneName"),
        email=data.get("email"),
        uuid=data.get("uuid"),
    )
