from typing import Protocol


class INavigator(Protocol):
    def push(self, location: str) -> None:
        """Redirect the hosting page to `location` (route path or absolute URL)."""
        ...
