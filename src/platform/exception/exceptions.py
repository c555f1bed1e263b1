class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class ReservationApiError(CustomBaseError):
    """Any failed call to the reservation service (non-2xx or transport failure)."""

    def __init__(self, message: str, status_code: int = 503) -> None:
        super().__init__(message, status_code)


class LeaseReleasedError(ConflictError):
    def __init__(self, message: str = 'Reservation already released') -> None:
        super().__init__(message)


class MissingCheckoutUrlError(DomainError):
    """Paid purchase accepted by the server but no payment redirect was returned."""

    def __init__(self, message: str = 'Payment page URL missing from purchase response') -> None:
        super().__init__(message, 502)
