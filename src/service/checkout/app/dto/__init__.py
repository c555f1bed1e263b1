"""Application layer DTOs"""

from src.service.checkout.app.dto.beacon_data import BeaconData
from src.service.checkout.app.dto.event_summary import EventSummary
from src.service.checkout.app.dto.purchase_dto import (
    PurchaseRequest,
    PurchaseResult,
    TicketQuantity,
)

__all__ = [
    'BeaconData',
    'EventSummary',
    'PurchaseRequest',
    'PurchaseResult',
    'TicketQuantity',
]
