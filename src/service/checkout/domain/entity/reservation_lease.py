from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Sequence

import attrs

from src.platform.exception.exceptions import DomainError, LeaseReleasedError
from src.platform.logging.loguru_io import Logger
from src.service.checkout.domain.enum import ReleaseReason, ReleaseState
from src.service.checkout.domain.value_object import CheckoutOutcome, LineItem, Released


DEFAULT_LEASE_WINDOW_SECONDS = 600


@attrs.define
class ReservationLease:
    """
    In-memory record of a time-bounded ticket reservation held by one checkout page.

    Release state moves only forward:

        active -> release_in_flight -> released
        active | release_in_flight -> suppressed

    At most one release and never both a release and a purchase.
    """

    event_id: str
    line_items: tuple[LineItem, ...]
    created_at: datetime = attrs.field(factory=lambda: datetime.now(timezone.utc))
    expires_in_seconds: int = DEFAULT_LEASE_WINDOW_SECONDS
    release_state: ReleaseState = ReleaseState.ACTIVE
    release_reason: Optional[ReleaseReason] = None
    purchase_ticket_ids: Optional[tuple[str, ...]] = None  # frozen at suppression
    outcome: Optional[CheckoutOutcome] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        event_id: str,
        line_items: Sequence[LineItem],
        expires_in_seconds: int = DEFAULT_LEASE_WINDOW_SECONDS,
    ) -> 'ReservationLease':
        if not event_id:
            raise DomainError('event_id is required', 400)
        if not line_items:
            raise DomainError('No tickets selected for checkout', 400)
        if expires_in_seconds <= 0:
            raise DomainError('expires_in_seconds must be positive', 400)

        seen: set[str] = set()
        for item in line_items:
            if overlap := seen & item.reserved_ticket_ids:
                raise DomainError(f'Ticket ids reserved twice: {sorted(overlap)}', 400)
            seen |= item.reserved_ticket_ids

        return cls(
            event_id=event_id,
            line_items=tuple(line_items),
            expires_in_seconds=expires_in_seconds,
        )

    @property
    def total_amount(self) -> Decimal:
        return sum((item.subtotal for item in self.line_items), Decimal('0'))

    @property
    def is_free_selection(self) -> bool:
        return self.total_amount == 0

    def reserved_ticket_ids(self) -> tuple[str, ...]:
        ids: list[str] = []
        for item in self.line_items:
            ids.extend(sorted(item.reserved_ticket_ids))
        return tuple(dict.fromkeys(ids))

    # Transitions below are driven by ReleaseTriggerArbiter only.
    # Each one checks and writes state without yielding to the event loop.

    def begin_release(self, *, reason: ReleaseReason) -> bool:
        if self.release_state != ReleaseState.ACTIVE:
            return False
        self.release_state = ReleaseState.RELEASE_IN_FLIGHT
        self.release_reason = reason
        return True

    def finish_release(self) -> bool:
        # Suppression may have happened while the release call was in flight
        if self.release_state != ReleaseState.RELEASE_IN_FLIGHT:
            return False
        self.release_state = ReleaseState.RELEASED
        self.outcome = Released(reason=self.release_reason or ReleaseReason.PAGE_UNLOADED)
        return True

    def suppress(self) -> bool:
        if self.release_state == ReleaseState.RELEASED:
            raise LeaseReleasedError()
        if self.release_state == ReleaseState.SUPPRESSED:
            return False
        self.purchase_ticket_ids = self.reserved_ticket_ids()
        self.release_state = ReleaseState.SUPPRESSED
        return True

    def record_outcome(self, outcome: CheckoutOutcome) -> None:
        self.outcome = outcome
