"""Queued substitution record."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .player import new_id
from .position import Position


@dataclass(frozen=True)
class QueuedSwap:
    """
    A staged position change waiting for the next queue apply.

    ``origin`` records where the player stood when the swap was queued. It is
    for display only; apply always reads the player's live position.
    """
    player_id: str
    target: Position
    origin: Optional[Position] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "player_id": self.player_id,
            "target": self.target.value,
            "origin": self.origin.value if self.origin else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> QueuedSwap:
        """
        Raises:
            ValueError: If the player id or target is missing or unknown
        """
        player_id = data.get("player_id")
        target = Position.parse(data.get("target"))
        if not isinstance(player_id, str) or not player_id or target is None:
            raise ValueError("Queued swap record is incomplete")
        swap_id = data.get("id")
        return cls(
            player_id=player_id,
            target=target,
            # older saves have no origin
            origin=Position.parse(data.get("origin")),
            id=swap_id if isinstance(swap_id, str) and swap_id else new_id(),
        )
