"""Bid model."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from pidro.models.enums import Position


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class BidEntry:
    """One entry of the bidding round (a bid or a pass).

    ``amount`` is None for a pass. The timestamp is informational only and
    never takes part in comparisons: list order is the bidding order.
    """

    position: Position
    amount: int | None
    timestamp: datetime = field(default_factory=_utc_now, compare=False)

    @property
    def is_pass(self) -> bool:
        return self.amount is None
