"""
Object Pool.

Stores runtime values produced by executed sequences, keyed by the value, and
answers type-filtered queries.

Keys combine the value with its runtime class, so ``1``, ``1.0`` and ``True``
occupy distinct entries even though they compare equal in Python. Unhashable
values are matched by ``==`` against entries of the same class.

At most one sequence is kept per distinct value: storing a value that is
already present replaces its sequence in place (last write wins).

An empty query result is the pool's only "not found" signal.
"""

import logging
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

from seqsynth.core.execution import SequenceExecutor, final_value
from seqsynth.core.sequence import Sequence
from seqsynth.core.types import Compatibility, Type, is_assignable

logger = logging.getLogger(__name__)

Entry = Tuple[Any, Sequence]


class ObjectPool:
  """
  Insertion-ordered mapping from produced value to the sequence that produced it.
  """

  def __init__(self, entries: Iterable[Entry] = ()) -> None:
    """
    Initializes the pool.

    Args:
        entries: Initial ``(value, sequence)`` pairs.
    """
    self._entries: List[Entry] = []
    self._index: Dict[Hashable, int] = {}
    for value, sequence in entries:
      self.put(sequence, value)

  # --- Mutation ---

  def put(self, sequence: Sequence, value: Any) -> None:
    """
    Records that `sequence` produces `value`, replacing any earlier sequence for an equal value.

    Args:
        sequence: The producing sequence.
        value: The runtime value.
    """
    position = self._find(value)
    if position is None:
      key = _value_key(value)
      if key is not None:
        self._index[key] = len(self._entries)
      self._entries.append((value, sequence))
    else:
      self._entries[position] = (value, sequence)

  add = put

  def add_sequence(self, sequence: Sequence, executor: SequenceExecutor) -> Optional[Any]:
    """
    Executes a sequence and stores its value when it completes normally with a non-None result.

    Args:
        sequence: The sequence to run.
        executor: The executor to run it with.

    Returns:
        The stored value, or None if nothing was stored.
    """
    value = final_value(executor.execute(sequence))
    if value is None:
      logger.debug("Sequence of %d statements produced no value", len(sequence))
      return None
    self.put(sequence, value)
    return value

  def remove(self, value: Any) -> bool:
    """
    Evicts the entry for `value`.

    Args:
        value: The value to evict.

    Returns:
        bool: True if an entry was removed.
    """
    position = self._find(value)
    if position is None:
      return False
    del self._entries[position]
    self._reindex()
    return True

  # --- Queries ---

  def get(self, value: Any) -> Optional[Sequence]:
    """Returns the sequence stored for `value`, or None."""
    position = self._find(value)
    return None if position is None else self._entries[position][1]

  def sub_pool_of_type(self, type_: Type, is_compatible: Compatibility = is_assignable) -> "ObjectPool":
    """
    Filters entries whose runtime value type is compatible with `type_`.

    Args:
        type_: The required type.
        is_compatible: Compatibility relation, called as ``is_compatible(type_, value_type)``.

    Returns:
        ObjectPool: A new pool (possibly empty) holding the matching entries.
    """
    sub_pool = ObjectPool()
    sub_pool._entries = [(value, seq) for value, seq in self._entries if is_compatible(type_, Type.for_value(value))]
    sub_pool._reindex()
    return sub_pool

  def sequences_of_type(self, type_: Type, is_compatible: Compatibility = is_assignable) -> List[Sequence]:
    """
    Lists the distinct sequences whose value is compatible with `type_`.

    Args:
        type_: The required type.
        is_compatible: Compatibility relation (see `sub_pool_of_type`).

    Returns:
        List[Sequence]: Deduplicated sequences in insertion order.
    """
    seen = set()
    result: List[Sequence] = []
    for _, seq in self.sub_pool_of_type(type_, is_compatible):
      if seq not in seen:
        seen.add(seq)
        result.append(seq)
    return result

  def values(self) -> List[Any]:
    return [value for value, _ in self._entries]

  def sequences(self) -> List[Sequence]:
    return [seq for _, seq in self._entries]

  @property
  def is_empty(self) -> bool:
    return not self._entries

  def __len__(self) -> int:
    return len(self._entries)

  def __iter__(self) -> Iterator[Entry]:
    return iter(list(self._entries))

  def __contains__(self, value: Any) -> bool:
    return self._find(value) is not None

  def __repr__(self) -> str:
    return f"ObjectPool(size={len(self._entries)})"

  # --- Internals ---

  def _find(self, value: Any) -> Optional[int]:
    key = _value_key(value)
    if key is not None:
      return self._index.get(key)
    for position, (existing, _) in enumerate(self._entries):
      if type(existing) is type(value) and _value_key(existing) is None and _same_value(existing, value):
        return position
    return None

  def _reindex(self) -> None:
    self._index = {}
    for position, (value, _) in enumerate(self._entries):
      key = _value_key(value)
      if key is not None:
        self._index[key] = position


def _value_key(value: Any) -> Optional[Hashable]:
  """Returns a hashable key for `value`, or None if the value is unhashable."""
  key = (type(value), value)
  try:
    hash(key)
  except TypeError:
    return None
  return key


def _same_value(a: Any, b: Any) -> bool:
  # Element-wise comparisons (e.g. arrays) do not count as equality.
  result = a == b
  return isinstance(result, bool) and result
