from typing import Callable, Dict, Iterable, List, Optional
from .model import Army, BATTLEFIELD_GRID, Grid, Unit
from .pathfinding import get_target_path, manhattan
from .targeting import get_suitable_units

MAX_LANES = 3

Resolver = Callable[[Unit, Unit], int]

def strike(attacker: Unit, target: Unit) -> int:
    """Apply one hit from attacker to target and return the damage dealt."""
    dmg = attacker.base_attack \
        + attacker.attack_bonuses.get(target.unit_type, 0) \
        - target.defence_bonuses.get(attacker.attack_type, 0)
    dmg = max(1, int(dmg))
    target.health = max(0, target.health - dmg)
    return dmg

def lanes(units: Iterable[Unit], from_left: bool = True,
          max_lanes: int = MAX_LANES) -> List[List[Unit]]:
    """Group living units into rows by x, starting from the column the attacker meets first."""
    by_x: Dict[int, List[Unit]] = {}
    for u in units:
        if u.alive:
            by_x.setdefault(u.x, []).append(u)
    return [by_x[x] for x in sorted(by_x, reverse=not from_left)][:max_lanes]

class FrontLineProgram:
    """Attack the nearest reachable exposed enemy, walking up to it first."""

    def __init__(self, owner: Unit, enemies: Army, battlefield: Callable[[], List[Unit]],
                 attacks_left_to_right: bool, resolver: Resolver = strike,
                 grid: Grid = BATTLEFIELD_GRID):
        self.owner = owner
        self.enemies = enemies
        self.battlefield = battlefield
        self.attacks_left_to_right = attacks_left_to_right
        self.resolver = resolver
        self.grid = grid

    def attack(self) -> Optional[Unit]:
        rows = lanes(self.enemies.units, from_left=self.attacks_left_to_right)
        candidates = get_suitable_units(rows, self.attacks_left_to_right)
        if not candidates:
            return None

        placed = self.battlefield()
        # Nearest first; sorted() keeps input order among equal distances
        for target in sorted(candidates, key=lambda t: manhattan(self.owner.pos, t.pos)):
            path = get_target_path(self.owner, target, placed, self.grid)
            if not path:
                continue
            # Stop on the last cell before the target
            if len(path) > 1:
                self.owner.move_to(path[-2])
            self.resolver(self.owner, target)
            return target
        return None

def arm(army: Army, enemies: Army, battlefield: Callable[[], List[Unit]],
        attacks_left_to_right: bool, resolver: Resolver = strike) -> Army:
    """Give every unit of army a FrontLineProgram against enemies."""
    for u in army.units:
        u.program = FrontLineProgram(u, enemies, battlefield, attacks_left_to_right, resolver)
    return army
