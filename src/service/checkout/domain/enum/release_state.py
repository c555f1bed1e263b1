"""Release State Enum"""

from enum import StrEnum


class ReleaseState(StrEnum):
    ACTIVE = 'active'
    RELEASE_IN_FLIGHT = 'release_in_flight'
    RELEASED = 'released'
    SUPPRESSED = 'suppressed'  # purchase started, release must never fire again
