"""Checkout Domain Enums"""

from src.service.checkout.domain.enum.release_reason import ReleaseReason
from src.service.checkout.domain.enum.release_state import ReleaseState

__all__ = ['ReleaseReason', 'ReleaseState']
