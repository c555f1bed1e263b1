from decimal import Decimal
from typing import Iterable

import attrs

from src.platform.exception.exceptions import DomainError


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


@attrs.frozen
class LineItem:
    """
    One ticket type of a reservation.

    `reserved_ticket_ids` is what the reservation call handed back. It is the
    set that gets purchased or released, never re-derived from `quantity`.
    """

    ticket_type_id: str
    quantity: int
    unit_price: Decimal = attrs.field(converter=_to_decimal)
    reserved_ticket_ids: frozenset[str] = attrs.field(converter=frozenset)
    name: str = ''

    @classmethod
    def create(
        cls,
        *,
        ticket_type_id: str,
        quantity: int,
        unit_price: Decimal | int | float | str,
        reserved_ticket_ids: Iterable[str],
        name: str = '',
    ) -> 'LineItem':
        if not ticket_type_id:
            raise DomainError('ticket_type_id is required', 400)
        if quantity <= 0:
            raise DomainError('quantity must be positive', 400)

        item = cls(
            ticket_type_id=ticket_type_id,
            quantity=quantity,
            unit_price=unit_price,
            reserved_ticket_ids=reserved_ticket_ids,
            name=name,
        )
        if item.unit_price < 0:
            raise DomainError('unit_price must not be negative', 400)
        if len(item.reserved_ticket_ids) != quantity:
            raise DomainError(
                f'Ticket type {ticket_type_id}: {quantity} requested but '
                f'{len(item.reserved_ticket_ids)} reserved',
                400,
            )
        return item

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity
