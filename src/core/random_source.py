# core/random_source.py
from typing import List, Optional, Union

import numpy as np

from core.vector import Vector3

SeedLike = Union[None, int, np.random.SeedSequence]

# Number of uniforms pulled from numpy per refill.
BLOCK_SIZE = 4096

class RandomSource:
    """
    Per-thread pseudorandom generator.

    Wraps a numpy Generator and hands out uniform doubles one at a time from
    blocks drawn in bulk, since a scalar numpy call per sample is slow compared
    with indexing a list. Instances are not thread-safe: every render worker
    owns its own.
    """
    def __init__(self, seed: SeedLike = None, block_size: int = BLOCK_SIZE):
        self._generator = np.random.default_rng(seed)
        self._block_size = block_size
        self._block: List[float] = []
        self._index = 0

    def _refill(self) -> None:
        self._block = self._generator.random(self._block_size).tolist()
        self._index = 0

    def uniform(self) -> float:
        """
        Returns a uniform double in [0, 1).
        """
        if self._index >= len(self._block):
            self._refill()
        value = self._block[self._index]
        self._index += 1
        return value

    def uniform_in(self, lo: float, hi: float) -> float:
        """
        Returns a uniform double in [lo, hi).
        """
        return lo + (hi - lo) * self.uniform()

    def in_unit_disk(self) -> Vector3:
        """
        Returns a random point inside the unit disk in the z=0 plane.
        """
        while True:
            p = Vector3(2.0 * self.uniform() - 1.0, 2.0 * self.uniform() - 1.0, 0.0)
            if p.length_squared() < 1.0:
                return p

    def unit_vector(self) -> Vector3:
        """
        Returns a random unit vector, uniformly distributed over the sphere.
        """
        while True:
            p = Vector3(2.0 * self.uniform() - 1.0,
                        2.0 * self.uniform() - 1.0,
                        2.0 * self.uniform() - 1.0)
            lensq = p.length_squared()
            if 0.0 < lensq < 1.0:
                return p / lensq ** 0.5

def spawn_sources(count: int, seed: SeedLike = None) -> List[RandomSource]:
    """
    Create `count` statistically independent sources.

    With seed=None the root entropy comes from the OS, so separate runs differ.
    Passing a seed makes the whole set reproducible.
    """
    root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    return [RandomSource(child) for child in root.spawn(count)]
