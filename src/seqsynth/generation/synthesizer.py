"""
Sequence Synthesizer.

Builds one executable sequence ending in a call to a given operation, drawing
the inputs from already-populated object pools.

For each input position (left to right) the pools are queried in priority
order; a sequence is drawn uniformly from the first non-empty compatible
sub-pool. Every statement of every chosen sub-sequence is recorded against
its global index in the eventual concatenation.

Input indices are then resolved per input type: the compatible global indices
are consumed in ascending order through a per-type counter, so a slot is only
reused for another occurrence of the same type when enough compatible slots
exist. Any empty query or exhausted supply yields None.
"""

import logging
from typing import Dict, List, Optional, Sequence as SequenceT

from seqsynth.core.operations import TypedOperation
from seqsynth.core.sequence import Sequence
from seqsynth.core.types import Compatibility, Type, is_assignable
from seqsynth.generation.pool import ObjectPool
from seqsynth.randomness import Randomness

logger = logging.getLogger(__name__)


class SequenceSynthesizer:
  """
  Assembles input sequences for an operation from pools.

  Attributes:
      randomness (Randomness): Shared random source used to pick sub-sequences.
      is_compatible (Compatibility): Type relation used for pool queries, slot
          resolution and the final sequence check. Usually a catalog's `is_compatible`.
  """

  def __init__(self, randomness: Randomness, is_compatible: Compatibility = is_assignable) -> None:
    self.randomness = randomness
    self.is_compatible = is_compatible

  def synthesize(self, operation: TypedOperation, pools: SequenceT[ObjectPool]) -> Optional[Sequence]:
    """
    Creates a sequence ending in a call to `operation`.

    Args:
        operation: The operation to call.
        pools: Candidate pools, highest priority first.

    Returns:
        Optional[Sequence]: The sequence, or None if the inputs cannot be satisfied.
    """
    chosen: List[Sequence] = []
    type_to_indices: Dict[Type, List[int]] = {}
    index = 0

    for position, input_type in enumerate(operation.input_types):
      candidates = _first_compatible(pools, input_type, self.is_compatible)
      if candidates is None:
        logger.debug("No pooled value of %s for input %d of %s", input_type, position, operation)
        return None

      seq = self.randomness.random_member(candidates.sequences())
      chosen.append(seq)
      for stmt in seq:
        type_to_indices.setdefault(stmt.output_type, []).append(index)
        index += 1

    input_indices = _resolve_indices(operation.input_types, type_to_indices, self.is_compatible)
    if input_indices is None:
      logger.debug("Not enough compatible slots for %s", operation)
      return None

    return Sequence.create(operation, chosen, input_indices, self.is_compatible)


def _first_compatible(
  pools: SequenceT[ObjectPool], type_: Type, is_compatible: Compatibility
) -> Optional[ObjectPool]:
  for pool in pools:
    sub_pool = pool.sub_pool_of_type(type_, is_compatible)
    if not sub_pool.is_empty:
      return sub_pool
  return None


def _resolve_indices(
  input_types: SequenceT[Type], type_to_indices: Dict[Type, List[int]], is_compatible: Compatibility
) -> Optional[List[int]]:
  """
  Picks one statement index per input, or None if some type runs out of slots.
  """
  consumed: Dict[Type, int] = {}
  resolved: List[int] = []

  for input_type in input_types:
    compatible = sorted(
      i for produced, indices in type_to_indices.items() if is_compatible(input_type, produced) for i in indices
    )
    count = consumed.get(input_type, 0)
    if count >= len(compatible):
      return None
    resolved.append(compatible[count])
    consumed[input_type] = count + 1

  return resolved
