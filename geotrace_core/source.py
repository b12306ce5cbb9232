"""
Location Source Contract
========================

Bounded Context: Inbound location delivery.

A location source is the platform side of a session: it owns permission
state and pushes batches of fixes. The session binds two callbacks and
drives the source through the methods below.
"""

from enum import Enum
from typing import Callable, List, Protocol

from geotrace_core.config import SourceSettings
from geotrace_core.samples import LocationFix


class AuthorizationStatus(str, Enum):
    """Permission state reported by the location source."""
    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"

    @property
    def is_authorized(self) -> bool:
        return self in (
            AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
            AuthorizationStatus.AUTHORIZED_ALWAYS,
        )


LocationsHandler = Callable[[List[LocationFix]], object]
AuthorizationHandler = Callable[[AuthorizationStatus], object]


class LocationSource(Protocol):
    """Producer of location fixes and authorization transitions."""

    def bind(
        self,
        on_locations: LocationsHandler,
        on_authorization: AuthorizationHandler,
    ) -> None:
        ...

    def services_enabled(self) -> bool:
        ...

    def authorization_status(self) -> AuthorizationStatus:
        ...

    def request_authorization(self) -> None:
        ...

    def configure(self, settings: SourceSettings) -> None:
        ...

    def start_updates(self) -> None:
        ...

    def stop_updates(self) -> None:
        ...
