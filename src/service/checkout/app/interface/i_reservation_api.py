"""
Reservation API Interface

The reservation/inventory service owns reservations and their server-side
expiry. This port is the only way the checkout page talks to it.
"""

from abc import ABC, abstractmethod

from src.service.checkout.app.dto import BeaconData, EventSummary, PurchaseRequest, PurchaseResult


class IReservationApi(ABC):
    @abstractmethod
    async def release_reservations(self) -> None:
        """
        Release every ticket reserved for the authenticated session.

        Releasing when nothing is reserved is not an error.

        Raises:
            ReservationApiError: on non-2xx responses or transport failures
        """
        pass

    @abstractmethod
    def get_release_reservations_beacon_data(self) -> BeaconData:
        """
        Build the URL and body for a release sent while the page is tearing down.

        Synchronous on purpose: teardown handlers cannot await.
        """
        pass

    @abstractmethod
    async def purchase(self, request: PurchaseRequest) -> PurchaseResult:
        """
        Purchase the reserved tickets.

        Returns:
            PurchaseResult with is_free=True, or is_free=False and the payment page URL

        Raises:
            ReservationApiError: on non-2xx responses or transport failures
        """
        pass

    @abstractmethod
    async def get_event(self, *, event_id: str) -> EventSummary:
        pass
