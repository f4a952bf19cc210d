"""
Food index for nearest-food queries.

Built once per tick after food has sunk and off-screen particles were
pruned, then queried by every hungry fish in the fish pass.

Two backends with identical results:
- scipy.cKDTree (default, USE_CKDTREE = True)
- O(n) numpy scan

Tie-breaking:
    Equal distances resolve to the particle that comes first in the food
    collection (insertion order), matching a plain first-wins scan.
"""

import numpy as np
import time
from typing import List, Optional, Set, Tuple
from scipy.spatial import cKDTree

from .entity import Food
from .constants import USE_CKDTREE, CKDTREE_LEAFSIZE


class FoodIndex:
    """
    Nearest-unclaimed-food queries over a per-tick snapshot of food positions.

    Positions are copied at build() time; the index does not follow later
    mutation of the Food objects.
    """

    def __init__(self, use_ckdtree: bool = USE_CKDTREE, leafsize: int = CKDTREE_LEAFSIZE):
        """
        Args:
            use_ckdtree: Use scipy.cKDTree (True) or a linear numpy scan (False)
            leafsize: cKDTree leaf size
        """
        self.use_ckdtree = use_ckdtree
        self.leafsize = leafsize

        self._food: List[Food] = []
        self._positions: np.ndarray = np.empty((0, 2), dtype=np.float64)
        self._ids: np.ndarray = np.empty(0, dtype=np.int64)
        self._tree: Optional[cKDTree] = None

        self.last_build_ms: float = 0.0

    def __len__(self) -> int:
        return len(self._food)

    def build(self, food: List[Food]):
        """
        Index the given food particles (in collection order).

        Args:
            food: Live food particles after sinking and pruning
        """
        start = time.perf_counter()

        self._food = list(food)
        if self._food:
            self._positions = np.array([f.position for f in self._food], dtype=np.float64)
            self._ids = np.array([f.food_id for f in self._food], dtype=np.int64)
        else:
            self._positions = np.empty((0, 2), dtype=np.float64)
            self._ids = np.empty(0, dtype=np.int64)

        if self.use_ckdtree and self._food:
            self._tree = cKDTree(self._positions, leafsize=self.leafsize)
        else:
            self._tree = None

        self.last_build_ms = (time.perf_counter() - start) * 1000.0

    def nearest_unclaimed(self, position: np.ndarray, claimed: Set[int]) -> Tuple[Optional[Food], float]:
        """
        Find the nearest food particle whose id is not in claimed.

        Args:
            position: Query position [x, y]
            claimed: food_ids already eaten this tick

        Returns:
            (food, distance), or (None, inf) when every particle is claimed
        """
        n = len(self._food)
        if n == 0:
            return None, float('inf')

        if self._tree is not None:
            row, distance = self._nearest_ckdtree(position, claimed)
        else:
            row, distance = self._nearest_linear(position, claimed)

        if row is None:
            return None, float('inf')
        return self._food[row], distance

    def _unclaimed_mask(self, rows: np.ndarray, claimed: Set[int]) -> np.ndarray:
        if not claimed:
            return np.ones(len(rows), dtype=bool)
        return np.array([int(self._ids[r]) not in claimed for r in rows], dtype=bool)

    def _nearest_linear(self, position: np.ndarray, claimed: Set[int]) -> Tuple[Optional[int], float]:
        """O(n) scan; argmin returns the first minimum, which is the tie-break rule."""
        diff = self._positions - position
        distances = np.hypot(diff[:, 0], diff[:, 1])

        mask = self._unclaimed_mask(np.arange(len(self._food)), claimed)
        if not mask.any():
            return None, float('inf')

        distances = np.where(mask, distances, np.inf)
        row = int(np.argmin(distances))
        return row, float(distances[row])

    def _nearest_ckdtree(self, position: np.ndarray, claimed: Set[int]) -> Tuple[Optional[int], float]:
        """
        cKDTree query for the k nearest, widened until an unclaimed particle
        and all particles tied with it are inside the result.
        """
        n = len(self._food)
        k = min(n, len(claimed) + 1)

        while True:
            distances, rows = self._tree.query(position, k=k)
            distances = np.atleast_1d(distances)
            rows = np.atleast_1d(rows)

            mask = self._unclaimed_mask(rows, claimed)
            if not mask.any():
                if k == n:
                    return None, float('inf')
                k = min(n, 2 * k)
                continue

            best = float(distances[mask][0])
            # A tie may continue past the k-th result
            if k < n and distances[-1] <= best:
                k = min(n, 2 * k)
                continue

            tied = rows[mask & (distances == best)]
            return int(tied.min()), best
