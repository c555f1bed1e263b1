from typing import Optional

import attrs


@attrs.define
class EventSummary:
    id: str
    title: str
    category: str = ''
    start_timestamp: Optional[str] = None
    end_timestamp: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    is_online: bool = False
    cover_image: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> 'EventSummary':
        return cls(
            id=str(payload['id']),
            title=payload.get('title') or payload.get('name') or '',
            category=payload.get('category') or '',
            start_timestamp=payload.get('startTimestamp'),
            end_timestamp=payload.get('endTimestamp'),
            venue=payload.get('venue'),
            address=payload.get('address'),
            is_online=bool(payload.get('isOnline', False)),
            cover_image=payload.get('coverImage'),
        )

    @property
    def location(self) -> str:
        if self.is_online:
            return 'Online Event'
        return self.venue or self.address or ''
