from typing import Dict, Optional, Sequence
from .model import Army, Coordinate, Grid, Occupancy, PLACEMENT_GRID, Unit
from .rng import DRNG

MAX_UNITS_PER_TYPE = 11
RANDOM_SEARCH_ATTEMPTS = 200
SEARCH_THRESHOLD = 50  # occupied cells before random draws give way to a scan

def _rank_key(u: Unit):
    # Negated so an ascending (stable) sort yields descending efficiency
    return (-(u.base_attack / u.cost), -(u.health / u.cost))

class PresetGenerator:
    """Greedy army builder: best attack per point first, then health per point."""

    def __init__(self, rng: Optional[DRNG] = None, grid: Grid = PLACEMENT_GRID):
        self._rng = rng if rng is not None else DRNG()
        self.grid = grid

    def generate(self, prototypes: Optional[Sequence[Unit]], max_points: int) -> Army:
        """Build an army from prototypes without spending more than max_points."""
        army = Army()
        if not prototypes or max_points <= 0:
            return army

        ranked = sorted(prototypes, key=_rank_key)
        occupied = Occupancy(self.grid)
        counts: Dict[str, int] = {}
        remaining = max_points

        for proto in ranked:
            if remaining <= 0:
                break
            count = counts.get(proto.unit_type, 0)
            while count < MAX_UNITS_PER_TYPE and remaining >= proto.cost:
                cell = self._find_free_cell(occupied)
                if cell is None:
                    break
                occupied.add(cell)
                count += 1
                army.units.append(proto.copy(f"{proto.unit_type} {count}", cell))
                remaining -= proto.cost
            counts[proto.unit_type] = count

        print(f"[Preset] Placed {len(army.units)} units for {max_points - remaining}/{max_points} points")
        return army

    def _find_free_cell(self, occupied: Occupancy) -> Optional[Coordinate]:
        """Random free cell while the grid is sparse, first free cell in scan order otherwise."""
        if occupied.is_full():
            return None
        if len(occupied) <= SEARCH_THRESHOLD:
            for _ in range(RANDOM_SEARCH_ATTEMPTS):
                c = Coordinate(self._rng.randint(self.grid.width), self._rng.randint(self.grid.height))
                if c not in occupied:
                    return c
        return self._scan_free_cell(occupied)

    def _scan_free_cell(self, occupied: Occupancy) -> Optional[Coordinate]:
        for x in range(self.grid.width):
            for y in range(self.grid.height):
                c = Coordinate(x, y)
                if c not in occupied:
                    return c
        return None

def generate(prototypes: Optional[Sequence[Unit]], max_points: int, seed: Optional[int] = None) -> Army:
    """Convenience wrapper around PresetGenerator."""
    return PresetGenerator(DRNG(seed)).generate(prototypes, max_points)

def deploy(army: Army, grid: Grid, mirror: bool = False) -> Army:
    """Move a placed army onto the battlefield; the right-hand army is mirrored to the far columns."""
    for u in army.units:
        x = grid.width - 1 - u.x if mirror else u.x
        u.move_to(grid.require(Coordinate(x, u.y)))
    return army
