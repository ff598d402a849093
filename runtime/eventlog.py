from typing import List, Optional
from engine.model import Event, Unit

class EventLog:
    """Append-only event storage for battle replay and streaming."""

    def __init__(self):
        self._log: List[Event] = []
        self.round = 0

    def log_attack(self, attacker: Unit, target: Optional[Unit]) -> None:
        """Record one unit's turn; target is None when it found nothing to hit."""
        if target is None:
            self._log.append(Event("Idle", self.round, {"attacker": attacker.name}))
            return
        self._log.append(Event("Attack", self.round, {
            "attacker": attacker.name,
            "target": target.name,
            "pos": [attacker.x, attacker.y],
            "target_hp": target.health,
            "killed": not target.alive,
        }))

    def since(self, offset: int, limit: int = 1000) -> tuple[list[Event], int]:
        """Return events starting from offset, up to limit."""
        offset = max(0, offset)
        chunk = self._log[offset: offset + limit]
        return chunk, offset + len(chunk)

    def __len__(self) -> int:
        return len(self._log)
