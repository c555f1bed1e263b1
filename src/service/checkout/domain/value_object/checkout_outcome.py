"""Terminal outcomes of a checkout lease"""

from typing import Optional, Union

import attrs

from src.service.checkout.domain.enum import ReleaseReason


@attrs.frozen
class Purchased:
    is_free: bool
    checkout_url: Optional[str] = None
    order_id: Optional[str] = None


@attrs.frozen
class Released:
    reason: ReleaseReason


@attrs.frozen
class Failed:
    error: str


CheckoutOutcome = Union[Purchased, Released, Failed]
