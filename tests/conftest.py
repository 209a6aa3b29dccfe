"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports (the package and the sample domain).
- Seeded and scripted random sources.
- Pools preloaded with literal values.
- Console capture for user-facing log output.
"""

import io
import sys
from pathlib import Path
from typing import Iterable, List

import pytest

# Add src to path so we can import 'seqsynth' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
# The sample domain lives beside this file
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console

from seqsynth.core.sequence import Sequence
from seqsynth.generation.pool import ObjectPool
from seqsynth.randomness import Randomness
from seqsynth.utils.console import reset_console, set_console


class ScriptedRandomness(Randomness):
  """
  Random source replaying fixed draws.

  `next_int` values are checked against the requested bound so a script that
  drifts out of sync with the code fails loudly.
  """

  def __init__(self, ints: Iterable[int] = (), gaussians: Iterable[float] = ()) -> None:
    super().__init__(0)
    self.ints: List[int] = list(ints)
    self.gaussians: List[float] = list(gaussians)

  def next_int(self, bound: int) -> int:
    value = self.ints.pop(0)
    assert 0 <= value < bound, f"scripted {value} outside [0, {bound})"
    return value

  def next_gaussian(self, mean: float = 0.0, stdev: float = 1.0) -> float:
    return mean + self.gaussians.pop(0)


@pytest.fixture
def randomness():
  """A deterministic random source."""
  return Randomness(42)


@pytest.fixture
def scripted():
  """Factory for `ScriptedRandomness` instances."""
  return ScriptedRandomness


def literal_pool(*values) -> ObjectPool:
  """Builds a pool holding one literal sequence per value."""
  pool = ObjectPool()
  for value in values:
    pool.put(Sequence.for_literal(value), value)
  return pool


@pytest.fixture
def make_pool():
  """Factory for pools of literal values."""
  return literal_pool


@pytest.fixture
def captured_console():
  """
  Redirects the package console to an in-memory recorder.

  Yields:
      Console: The recording console (read it with `export_text`).
  """
  recorder = Console(record=True, file=io.StringIO(), width=200)
  set_console(recorder)
  yield recorder
  reset_console()
