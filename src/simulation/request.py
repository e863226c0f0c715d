from __future__ import annotations

from dataclasses import dataclass

from dispatch import PendingRequest


@dataclass(frozen=True)
class Request:
    """A rider's call from one floor to another."""

    request_id: int
    origin: int
    destination: int
    requested_at: int

    def as_pending(self) -> PendingRequest:
        return PendingRequest(
            request_id=self.request_id,
            origin=self.origin,
            destination=self.destination,
            requested_at=self.requested_at,
        )
