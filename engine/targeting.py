from typing import List, Optional, Sequence, Set
from .model import Unit

def get_suitable_units(rows: Optional[Sequence[Optional[Sequence[Optional[Unit]]]]],
                       attacking_left_to_right: bool) -> List[Unit]:
    """Return the units not shielded from the attacking side.

    Each row (lane) is judged on its own. A unit is shielded when a living unit of
    the same row sits on the adjacent lateral cell facing the attacker: y + 1 when
    attacking left to right, y - 1 otherwise. Output keeps row order, then the
    order inside each row.
    """
    suitable: List[Unit] = []
    step = 1 if attacking_left_to_right else -1
    for row in rows or ():
        if not row:
            continue
        present = [u for u in row if u is not None and u.alive]
        occupied_y: Set[int] = {u.y for u in present}
        for u in present:
            if u.y + step not in occupied_y:
                suitable.append(u)
    return suitable
