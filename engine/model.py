from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Protocol, Set

class Coordinate(NamedTuple):
    x: int
    y: int

class GridBoundsError(RuntimeError):
    """Raised when the core produces or receives a cell outside its grid."""

@dataclass(frozen=True)
class Grid:
    width: int
    height: int

    def contains(self, c: Coordinate) -> bool:
        return 0 <= c.x < self.width and 0 <= c.y < self.height

    def require(self, c: Coordinate) -> Coordinate:
        """Return c, or raise GridBoundsError if it lies outside the grid."""
        if not self.contains(c):
            raise GridBoundsError(f"{tuple(c)} outside {self.width}x{self.height} grid")
        return c

    @property
    def cells(self) -> int:
        return self.width * self.height

# Armies are assembled on the narrow placement grid, battles are fought on the wide one
PLACEMENT_GRID = Grid(width=3, height=21)
BATTLEFIELD_GRID = Grid(width=27, height=21)

class Occupancy:
    """Set of occupied cells on one grid."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self._cells: Set[Coordinate] = set()

    def add(self, c: Coordinate) -> None:
        self._cells.add(self.grid.require(c))

    def remove(self, c: Coordinate) -> None:
        self._cells.discard(c)

    def __contains__(self, c: Coordinate) -> bool:
        return c in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def is_full(self) -> bool:
        return len(self._cells) >= self.grid.cells

class AttackProgram(Protocol):
    """Capability a unit uses to pick a target and hit it."""

    def attack(self) -> Optional["Unit"]: ...

class BattleLog(Protocol):
    """Sink for attack outcomes; must accept target=None."""

    def log_attack(self, attacker: "Unit", target: Optional["Unit"]) -> None: ...

@dataclass(eq=False)
class Unit:
    name: str
    unit_type: str
    health: int
    base_attack: int
    cost: int
    attack_type: str
    attack_bonuses: Dict[str, float] = field(default_factory=dict)
    defence_bonuses: Dict[str, float] = field(default_factory=dict)
    x: int = 0
    y: int = 0
    program: Optional[AttackProgram] = field(default=None, repr=False)

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def pos(self) -> Coordinate:
        return Coordinate(self.x, self.y)

    def move_to(self, c: Coordinate) -> None:
        self.x, self.y = c.x, c.y

    def copy(self, name: str, pos: Coordinate) -> "Unit":
        """Fresh unit built from this prototype, with its own bonus tables."""
        return Unit(
            name=name,
            unit_type=self.unit_type,
            health=self.health,
            base_attack=self.base_attack,
            cost=self.cost,
            attack_type=self.attack_type,
            attack_bonuses=dict(self.attack_bonuses),
            defence_bonuses=dict(self.defence_bonuses),
            x=pos.x,
            y=pos.y,
        )

@dataclass(eq=False)
class Army:
    units: List[Unit] = field(default_factory=list)

    def living(self) -> List[Unit]:
        return [u for u in self.units if u.alive]

    def has_living(self) -> bool:
        return any(u.alive for u in self.units)

    def total_cost(self) -> int:
        return sum(u.cost for u in self.units)

class BattleState(Enum):
    ROUND_IN_PROGRESS = "ROUND_IN_PROGRESS"
    DONE = "DONE"

@dataclass
class Event:
    kind: str
    round: int
    data: Dict

# Predefined unit prototypes
UNIT_PROTOTYPES = [
    Unit(name="Swordsman", unit_type="Swordsman", health=60, base_attack=22, cost=15,
         attack_type="melee",
         attack_bonuses={"Archer": 4},  # Archers don't last in close combat
         defence_bonuses={"ranged": 2}),
    Unit(name="Pikeman", unit_type="Pikeman", health=55, base_attack=20, cost=14,
         attack_type="pierce",
         attack_bonuses={"Knight": 10},  # Long reach against cavalry
         defence_bonuses={"melee": 1}),
    Unit(name="Archer", unit_type="Archer", health=40, base_attack=18, cost=12,
         attack_type="ranged",
         attack_bonuses={"Pikeman": 3},
         defence_bonuses={}),
    Unit(name="Knight", unit_type="Knight", health=90, base_attack=30, cost=25,
         attack_type="melee",
         attack_bonuses={"Archer": 6, "Swordsman": 2},
         defence_bonuses={"melee": 3, "ranged": 4}),
]
