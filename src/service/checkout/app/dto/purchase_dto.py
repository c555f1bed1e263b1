"""
Purchase DTOs

Request/Result DTOs for the purchase call against the reservation service.
"""

from typing import Optional

import attrs


@attrs.define
class TicketQuantity:
    ticket_type_id: str
    quantity: int


@attrs.define
class PurchaseRequest:
    """Purchase of exactly the tickets reserved under one lease"""

    event_id: str
    tickets: list[TicketQuantity]
    specific_ticket_ids: list[str]  # reserved ids, never recomputed from quantities

    def to_payload(self) -> dict:
        return {
            'eventId': self.event_id,
            'tickets': [
                {'ticketTypeId': t.ticket_type_id, 'quantity': t.quantity} for t in self.tickets
            ],
            'specificTicketIds': list(self.specific_ticket_ids),
        }


@attrs.define
class PurchaseResult:
    is_free: bool
    checkout_url: Optional[str] = None
    order_id: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> 'PurchaseResult':
        order_id = payload.get('orderId')
        return cls(
            is_free=bool(payload.get('isFree', False)),
            checkout_url=payload.get('checkoutUrl') or None,
            order_id=str(order_id) if order_id is not None else None,
        )
