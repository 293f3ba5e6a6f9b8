"""Exception types shared across minidash."""

from __future__ import annotations


class MinidashError(Exception):
    """Base class for minidash errors."""


class DashboardInitError(MinidashError):
    """The render surface could not be started."""


class BackendQueryError(MinidashError):
    """A single status backend query failed."""

    def __init__(self, profile: str, query: str, reason: str) -> None:
        super().__init__(f"{query} query for profile {profile!r} failed: {reason}")
        self.profile = profile
        self.query = query
        self.reason = reason


class ProfileStoreError(MinidashError):
    """Listing profiles from the profile store failed."""
