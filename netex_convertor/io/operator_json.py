"""Operator reference record decoding.

Records are stored as JSON objects keyed by the field names of the
National Operator Code dataset.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Union

from ..domain.errors import InputUnavailable
from ..domain.models import OperatorReferenceData

# NOC record field -> OperatorReferenceData field
FIELD_MAP = {
    "nocCode": "noc_code",
    "opId": "op_id",
    "operatorPublicName": "operator_public_name",
    "vosaPsvLicenseName": "vosa_psv_license_name",
    "fareEnq": "fare_enquiry_phone",
    "complEnq": "complaints_address",
    "ttrteEnq": "timetable_enquiry_email",
    "website": "website",
    "mode": "mode",
}
REQUIRED_FIELDS = ("nocCode", "opId", "operatorPublicName")


def decode_operator_record(
    raw: Union[bytes, str, Mapping[str, Any]],
    location: str = "",
) -> OperatorReferenceData:
    """Decode one operator record.

    Args:
        raw: JSON bytes or text, or an already-decoded mapping.
        location: Lookup key, reported in errors.

    Raises:
        InputUnavailable: If the record is not a JSON object or lacks a
            required field.
    """
    if isinstance(raw, (bytes, str)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InputUnavailable(
                "Operator record is not valid JSON",
                location=location,
                cause=e,
            )
    else:
        data = raw

    if not isinstance(data, Mapping):
        raise InputUnavailable("Operator record is not an object", location=location)

    missing = [name for name in REQUIRED_FIELDS if not data.get(name)]
    if missing:
        raise InputUnavailable(
            f"Operator record lacks {', '.join(missing)}",
            location=location,
        )

    values = {
        attr: "" if data.get(name) is None else str(data[name])
        for name, attr in FIELD_MAP.items()
    }
    return OperatorReferenceData(**values)
