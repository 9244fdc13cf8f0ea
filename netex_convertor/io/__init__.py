"""Input decoding for the convertor.

- events: storage-event parsing into a StorageLocation
- ticket_json: ticket JSON decoding with JSON-Schema validation
- operator_json: operator reference record decoding
"""

from .events import parse_storage_event
from .operator_json import decode_operator_record
from .ticket_json import TICKET_SCHEMA, decode_ticket

__all__ = [
    "TICKET_SCHEMA",
    "decode_operator_record",
    "decode_ticket",
    "parse_storage_event",
]
