from decimal import Decimal
from typing import List
from urllib.parse import unquote

import orjson
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from src.platform.exception.exceptions import DomainError
from src.service.checkout.domain.value_object import LineItem


class SelectedTicket(BaseModel):
    """One entry of the `tickets` query parameter handed over by the event page"""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'example': {
                'id': 'vip',
                'name': 'VIP',
                'price': 50,
                'quantity': 2,
                'reservedTicketIds': ['t-101', 't-102'],
            }
        },
    )

    ticket_type_id: str = Field(alias='id')
    name: str = ''
    price: Decimal = Field(ge=0)
    quantity: int = Field(gt=0)
    reserved_ticket_ids: List[str] = Field(alias='reservedTicketIds')

    def to_line_item(self) -> LineItem:
        return LineItem.create(
            ticket_type_id=self.ticket_type_id,
            name=self.name,
            quantity=self.quantity,
            unit_price=self.price,
            reserved_ticket_ids=self.reserved_ticket_ids,
        )


_selected_tickets_adapter = TypeAdapter(List[SelectedTicket])


def parse_selected_tickets(raw: str | None) -> list[LineItem]:
    """Decode the URL-encoded JSON `tickets` parameter into line items."""
    if not raw:
        return []
    try:
        data = orjson.loads(unquote(raw))
        tickets = _selected_tickets_adapter.validate_python(data)
    except orjson.JSONDecodeError as e:
        raise DomainError(f'Malformed tickets parameter: {e}', 400) from e
    except ValidationError as e:
        raise DomainError(f'Invalid ticket selection: {e.error_count()} error(s)', 400) from e
    return [ticket.to_line_item() for ticket in tickets]
