import asyncio
from typing import List, Optional
from engine.engine import Engine
from engine.model import Army, BattleState, Unit
from .eventlog import EventLog

class _RoundStampedLog:
    """Log sink that stamps each attack with the engine's current round."""

    def __init__(self, events: EventLog):
        self.events = events
        self.engine: Optional[Engine] = None

    def log_attack(self, attacker: Unit, target: Optional[Unit]) -> None:
        if self.engine is not None:
            self.events.round = self.engine.round
        self.events.log_attack(attacker, target)

class BattleRunner:
    """Async driver that plays the battle one round per tick."""

    def __init__(self, army_a: Army, army_b: Army, round_ms: int = 500,
                 time_compression: float = 30.0, max_rounds: Optional[int] = 1000):
        self.round_ms = round_ms
        self.max_rounds = max_rounds
        self.events = EventLog()
        sink = _RoundStampedLog(self.events)
        self.engine = Engine(army_a, army_b, sink)
        sink.engine = self.engine
        self.set_time_compression(time_compression)
        self._task: asyncio.Task | None = None

    async def start(self):
        """Start the round loop."""
        if self._task:
            return
        self._task = asyncio.create_task(self._loop())

    async def stop(self):
        """Stop the round loop gracefully."""
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def wait(self) -> int:
        """Block until the battle is over; returns rounds played."""
        if self._task:
            await self._task
        return self.engine.round

    async def _loop(self):
        """Main round loop - rounds until a side is wiped out or the limit is hit."""
        rounds = await self.engine.simulate(max_rounds=self.max_rounds)
        print(f"[Runner] Battle over after {rounds} rounds, {len(self.events)} events logged")

    @property
    def state(self) -> BattleState:
        return self.engine.state

    async def snapshot(self) -> List[Unit]:
        """Get all units of both armies."""
        return self.engine.army_a.units + self.engine.army_b.units

    def set_time_compression(self, time_compression: float):
        """Update time compression factor (1.0 = real-time, higher = faster)."""
        self.time_compression = max(0.1, min(1000.0, time_compression))
        self.sleep_s = (self.round_ms / 1000.0) / max(1.0, self.time_compression)
        self.engine.round_delay_s = self.sleep_s
        print(f"[Runner] Time compression set to {self.time_compression}x (sleep: {self.sleep_s:.4f}s)")
