"""Capability protocols implemented by page surfaces.

Pages compose these capabilities instead of inheriting from a base page; a
workflow step depends only on the capability it uses.
"""

from typing import Any, Protocol, runtime_checkable

from staybot.models import GuestType


@runtime_checkable
class Searchable(Protocol):
    """A surface with a location field and a search action."""

    async def set_location(self, location: str) -> None: ...

    async def search(self) -> Any: ...


@runtime_checkable
class DateAdjustable(Protocol):
    """A surface whose stay dates can be changed."""

    async def set_dates(self, checkin_us: str, checkout_us: str) -> None: ...


@runtime_checkable
class GuestAdjustable(Protocol):
    """A surface with per-category guest steppers.

    Implementations raise UnsupportedOperationError immediately for a
    direction their locator section does not define.
    """

    async def increase_guest(self, guest_type: GuestType, count: int) -> None: ...

    async def decrease_guest(self, guest_type: GuestType, count: int) -> None: ...
