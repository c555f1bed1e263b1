"""
Release Trigger Arbiter

Single owner of the lease's release state. Every "user is leaving" signal ends
up here, and at most one of them ever reaches the reservation service.

Guard rules:
- Only an ACTIVE lease can start a release; the check and the write to
  RELEASE_IN_FLIGHT happen before the first await.
- A release already in flight rejects further requests instead of queueing them.
- suppress() is permanent: after it, every release path is a no-op, even if the
  purchase later fails.
"""

import anyio
from opentelemetry import trace

from src.platform.exception.exceptions import ReservationApiError
from src.platform.logging.loguru_io import Logger
from src.service.checkout.app.interface import IBeaconSender, IReservationApi
from src.service.checkout.domain.entity.reservation_lease import ReservationLease
from src.service.checkout.domain.enum import ReleaseReason, ReleaseState


class ReleaseTriggerArbiter:
    def __init__(self, *, lease: ReservationLease, reservation_api: IReservationApi) -> None:
        self.lease = lease
        self.reservation_api = reservation_api
        self.tracer = trace.get_tracer(__name__)

    @property
    def state(self) -> ReleaseState:
        return self.lease.release_state

    @Logger.io
    async def request_release(self, reason: ReleaseReason) -> bool:
        """
        Release the reserved tickets unless the lease is no longer ACTIVE.

        Returns:
            True if this call issued the release request, False if it was a no-op
        """
        if not self.lease.begin_release(reason=reason):
            Logger.base.info(
                f'[RELEASE] Skipped ({reason}) for event {self.lease.event_id}: '
                f'lease is {self.state}'
            )
            return False

        with self.tracer.start_as_current_span(
            'checkout.release_reservations',
            attributes={'event.id': self.lease.event_id, 'release.reason': str(reason)},
        ):
            try:
                # Once issued, a release is never cancelled by page teardown
                with anyio.CancelScope(shield=True):
                    await self.reservation_api.release_reservations()
                Logger.base.info(
                    f'[RELEASE] Released reservations for event {self.lease.event_id} ({reason})'
                )
            except ReservationApiError as e:
                # The server-side lease expires on its own; nothing to retry
                Logger.base.warning(f'[RELEASE] Release failed, waiting out server expiry: {e}')
            except Exception as e:
                Logger.base.exception(f'[RELEASE] Unexpected release error: {e}')
            finally:
                if not self.lease.finish_release():
                    Logger.base.info(
                        '[RELEASE] Lease suppressed while release was in flight, '
                        'late completion ignored'
                    )

        return True

    @Logger.io
    def request_beacon_release(self, beacon_sender: IBeaconSender) -> bool:
        """
        Teardown variant of request_release: nothing can be awaited, so the release
        is handed to a fire-and-forget sender. Same state guard, same reason rules.
        """
        reason = ReleaseReason.PAGE_UNLOADED
        if not self.lease.begin_release(reason=reason):
            Logger.base.info(
                f'[RELEASE] Beacon skipped for event {self.lease.event_id}: lease is {self.state}'
            )
            return False

        try:
            beacon = self.reservation_api.get_release_reservations_beacon_data()
            if not beacon_sender.send(url=beacon.url, payload=beacon.payload):
                Logger.base.warning('[RELEASE] Beacon was not queued by the sender')
        except Exception as e:
            Logger.base.warning(f'[RELEASE] Beacon dispatch failed: {type(e).__name__}: {e}')
        finally:
            self.lease.finish_release()

        return True

    @Logger.io
    def suppress(self) -> None:
        """
        Disable every release path for the rest of the lease.

        Raises:
            LeaseReleasedError: the tickets were already given back
        """
        if self.lease.suppress():
            Logger.base.info(
                f'[SUPPRESS] Release disabled for event {self.lease.event_id}, '
                f'{len(self.lease.purchase_ticket_ids or ())} tickets held for purchase'
            )
