"""Ticket variant predicates."""

from __future__ import annotations

from ..domain.errors import InvalidTicketData
from ..domain.models import TicketDescription, TicketVariant


def _variant_of(ticket: TicketDescription) -> TicketVariant:
    if not isinstance(ticket.variant, TicketVariant):
        raise InvalidTicketData(
            f"Unrecognised ticket variant: {ticket.variant!r}",
            field_name="variant",
        )
    return ticket.variant


def is_geo_zone_ticket(ticket: TicketDescription) -> bool:
    return _variant_of(ticket) is TicketVariant.GEO_ZONE


def is_multi_service_ticket(ticket: TicketDescription) -> bool:
    return _variant_of(ticket) is TicketVariant.MULTI_SERVICE
