"""Game event model for the replay system.

Every change to a game's state is expressed as one of these events, so the
event log of a state is enough to rebuild it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pidro.models.enums import GameEventType, Position


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class GameEvent:
    """A single game event.

    ``data`` only holds JSON-compatible values; cards are stored in
    notation form (``"Ah"``) and seats by their value (``"north"``).
    """

    event_type: GameEventType
    hand_number: int = 1
    position: Position | None = None
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utc_now, compare=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for storage/transmission."""
        return {
            "event_type": self.event_type.value,
            "hand_number": self.hand_number,
            "position": self.position.value if self.position else None,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameEvent":
        """Create from dictionary."""
        position = data.get("position")
        timestamp = data.get("timestamp")
        return cls(
            event_type=GameEventType(data["event_type"]),
            hand_number=data.get("hand_number", 1),
            position=Position(position) if position else None,
            data=data.get("data", {}),
            timestamp=datetime.fromisoformat(timestamp) if timestamp else _utc_now(),
        )
