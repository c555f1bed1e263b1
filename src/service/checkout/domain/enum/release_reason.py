"""Release Reason Enum"""

from enum import StrEnum


class ReleaseReason(StrEnum):
    USER_CANCELLED = 'user_cancelled'
    TIMED_OUT = 'timed_out'
    PAGE_UNLOADED = 'page_unloaded'
