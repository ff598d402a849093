import asyncio
from typing import List, Optional, Tuple
from .model import Army, BattleLog, BattleState, Unit

Attack = Tuple[Unit, Optional[Unit]]

def round_order(army_a: Army, army_b: Army) -> Tuple[Unit, ...]:
    """Living units of both armies, strongest attack first; ties keep army order."""
    living = army_a.living() + army_b.living()
    living.sort(key=lambda u: u.base_attack, reverse=True)
    return tuple(living)

class Engine:
    """Round-based turn scheduler for two armies."""

    def __init__(self, army_a: Army, army_b: Army, log: BattleLog):
        self.army_a = army_a
        self.army_b = army_b
        self.log = log
        self.round = 0
        self.round_delay_s = 0.0
        self.stalled = False
        self.state = self._check_state()

    def _check_state(self) -> BattleState:
        if self.army_a.has_living() and self.army_b.has_living():
            return BattleState.ROUND_IN_PROGRESS
        return BattleState.DONE

    def step(self) -> List[Attack]:
        """Play one full round and return the (attacker, target) pairs in acting order."""
        self.state = self._check_state()
        if self.state is BattleState.DONE:
            return []

        self.round += 1
        attacks: List[Attack] = []
        for attacker in round_order(self.army_a, self.army_b):
            # May have been killed earlier in this round
            if not attacker.alive:
                continue
            target = attacker.program.attack() if attacker.program is not None else None
            self.log.log_attack(attacker, target)
            attacks.append((attacker, target))

        self.state = self._check_state()
        return attacks

    async def simulate(self, max_rounds: Optional[int] = None) -> int:
        """Run rounds until one side is wiped out; returns the number of rounds played.

        Yields to the event loop between rounds, so cancelling the task stops the
        battle at a round boundary with CancelledError.
        """
        while self._check_state() is BattleState.ROUND_IN_PROGRESS:
            if max_rounds is not None and self.round >= max_rounds:
                print(f"[Battle] Stopping after {self.round} rounds without a winner")
                self.stalled = True
                break
            await asyncio.sleep(self.round_delay_s)
            self.step()
        self.state = self._check_state()
        return self.round

async def simulate(army_a: Army, army_b: Army, log: BattleLog, max_rounds: Optional[int] = None) -> int:
    """Fight army_a against army_b to the end, reporting every attack to log."""
    return await Engine(army_a, army_b, log).simulate(max_rounds=max_rounds)
