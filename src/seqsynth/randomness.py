"""
Seedable Random Source.

Every component that samples (the synthesizer's pool choice, the fuzzer's
noise, strategy, index and character draws) takes an explicit `Randomness`
instance. One instance is a single ordered stream: given the same seed and the
same sequence of calls, it yields the same values.

Backed by a NumPy `Generator` (PCG64).
"""

from typing import Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class Randomness:
  """
  Injectable random number source.

  Attributes:
      seed (Optional[int]): The seed used to initialize the stream.
  """

  def __init__(self, seed: Optional[int] = None) -> None:
    """
    Initializes the stream.

    Args:
        seed: Seed for reproducible streams. None draws fresh OS entropy.
    """
    self.seed = seed
    self._rng = np.random.default_rng(seed)

  def reseed(self, seed: Optional[int]) -> None:
    """Restarts the stream from `seed`."""
    self.seed = seed
    self._rng = np.random.default_rng(seed)

  def next_int(self, bound: int) -> int:
    """
    Draws an integer uniformly from ``[0, bound)``.

    Args:
        bound (int): Exclusive upper bound, must be positive.

    Returns:
        int: The sampled integer.
    """
    if bound <= 0:
      raise ValueError(f"bound must be positive, got {bound}")
    return int(self._rng.integers(bound))

  def next_gaussian(self, mean: float = 0.0, stdev: float = 1.0) -> float:
    """Draws a float from a normal distribution."""
    return float(self._rng.normal(mean, stdev))

  def random_member(self, items: Sequence[T]) -> T:
    """
    Picks one element uniformly at random.

    Args:
        items: A non-empty indexable collection.

    Returns:
        The chosen element.
    """
    if not items:
      raise ValueError("Cannot choose from an empty collection")
    return items[self.next_int(len(items))]
