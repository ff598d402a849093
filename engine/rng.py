from typing import Optional
import numpy as np

class DRNG:
    """Deterministic Random Number Generator wrapper.

    seed=None pulls fresh entropy from the OS, so only seeded instances repeat.
    """

    def __init__(self, seed: Optional[int] = None):
        self.g = np.random.Generator(np.random.PCG64(seed))

    def randint(self, n: int) -> int:
        """Return a random int in [0, n)."""
        return int(self.g.integers(0, n))
