"""A* search on the battlefield grid.

Moves go to any of the 8 neighbouring cells; orthogonal steps cost 1 and
diagonal steps cost 2, so Manhattan distance never overestimates and serves as
the heuristic. Frontier entries are (f, seq, cell): equal f-scores pop in
insertion order. Among several shortest paths the one returned therefore
depends on that order and on the neighbour sweep (dx outer, dy inner).
"""
import heapq
import itertools
from typing import Dict, Iterable, List, Set, Tuple
from .model import BATTLEFIELD_GRID, Coordinate, Grid, Unit

ORTHOGONAL_COST = 1
DIAGONAL_COST = 2

def manhattan(a: Coordinate, b: Coordinate) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)

def neighbors_8(c: Coordinate, grid: Grid) -> Iterable[Tuple[Coordinate, int]]:
    """Yield in-bounds neighbours of c with their step cost."""
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            n = Coordinate(c.x + dx, c.y + dy)
            if grid.contains(n):
                yield n, DIAGONAL_COST if dx and dy else ORTHOGONAL_COST

def path_cost(start: Coordinate, path: List[Coordinate]) -> int:
    """Total movement cost of walking path from start."""
    cost = 0
    prev = start
    for c in path:
        cost += DIAGONAL_COST if c.x != prev.x and c.y != prev.y else ORTHOGONAL_COST
        prev = c
    return cost

def a_star(start: Coordinate, goal: Coordinate, blocked: Set[Coordinate],
           grid: Grid = BATTLEFIELD_GRID) -> List[Coordinate]:
    """Shortest path from start (excluded) to goal (included); [] if unreachable."""
    grid.require(start)
    grid.require(goal)
    if start == goal:
        return []

    seq = itertools.count()
    openq: List[Tuple[int, int, Coordinate]] = [(manhattan(start, goal), next(seq), start)]
    g: Dict[Coordinate, int] = {start: 0}
    came_from: Dict[Coordinate, Coordinate] = {}
    closed: Set[Coordinate] = set()

    while openq:
        _, _, current = heapq.heappop(openq)
        if current in closed:
            continue  # stale entry
        if current == goal:
            return _reconstruct(came_from, start, goal)
        closed.add(current)

        for n, step in neighbors_8(current, grid):
            if n in closed or n in blocked:
                continue
            tentative = g[current] + step
            if tentative < g.get(n, float("inf")):
                g[n] = tentative
                came_from[n] = current
                heapq.heappush(openq, (tentative + manhattan(n, goal), next(seq), n))

    return []

def _reconstruct(came_from: Dict[Coordinate, Coordinate], start: Coordinate,
                 goal: Coordinate) -> List[Coordinate]:
    path: List[Coordinate] = []
    node = goal
    while node != start:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path

def get_target_path(attacker: Unit, target: Unit, all_units: Iterable[Unit],
                    grid: Grid = BATTLEFIELD_GRID) -> List[Coordinate]:
    """Route for attacker to reach target, walking around every other placed unit."""
    start, goal = attacker.pos, target.pos
    blocked = {u.pos for u in all_units}
    blocked.discard(start)
    blocked.discard(goal)
    return a_star(start, goal, blocked, grid)
