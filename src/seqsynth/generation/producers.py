"""
Producer Graph Search.

Discovers every operation that can, directly or transitively, produce a value
of a target type.

Algorithm (breadth-first worklist):

1.  Seed a FIFO worklist with the target type.
2.  Pop a type. Skip it if it is terminal or already visited.
3.  Enumerate its accessible constructors, and its methods whose declared
    return type is exactly the type. Record each as a producer (deduplicated,
    discovery order kept) and push its input types.
4.  Mark the type visited and repeat until the worklist is empty.

The visited guard bounds enumeration to once per distinct type, so the search
terminates for any finite catalog.
"""

import logging
from collections import deque
from typing import Deque, Dict, FrozenSet, Iterable, List, Optional, Set

from seqsynth.catalog.base import OperationCatalog
from seqsynth.config import SynthesisConfig
from seqsynth.core.operations import TypedOperation
from seqsynth.core.types import Type
from seqsynth.utils.console import log_warning

logger = logging.getLogger(__name__)


class ProducerSearch:
  """
  Worklist search over the producer graph of an operation catalog.

  Attributes:
      catalog (OperationCatalog): Source of operations and type relations.
      considered_types (FrozenSet[str]): Qualified names of the classes under test.
      restrict (bool): If True, reference types outside `considered_types` are not expanded.
  """

  def __init__(
    self,
    catalog: OperationCatalog,
    considered_types: Iterable[str] = (),
    restrict: bool = False,
  ) -> None:
    self.catalog = catalog
    self.considered_types: FrozenSet[str] = frozenset(considered_types)
    self.restrict = restrict

  @classmethod
  def from_config(cls, catalog: OperationCatalog, config: Optional[SynthesisConfig] = None) -> "ProducerSearch":
    """Builds a search using the considered-types settings of `config`."""
    config = config or SynthesisConfig()
    return cls(catalog, config.considered_types, config.restrict_to_considered_types)

  def find(self, target: Type) -> List[TypedOperation]:
    """
    Collects all producer operations reachable from `target`.

    Args:
        target: The type a value is needed for.

    Returns:
        List[TypedOperation]: Producers in discovery order, without duplicates.
    """
    visited: Set[Type] = set()
    worklist: Deque[Type] = deque([target])
    producers: Dict[TypedOperation, None] = {}

    while worklist:
      current = worklist.popleft()
      if current in visited or self.catalog.is_terminal(current):
        continue
      visited.add(current)

      if not self._is_considered(current):
        log_warning(f"Type [type]{current}[/type] is not among the considered types.")
        if self.restrict:
          continue

      for op in self.catalog.operations_for(current):
        if not (op.is_constructor or op.output_type == current):
          continue
        if op not in producers:
          logger.debug("Producer for %s: %s", current, op)
          producers[op] = None
        worklist.extend(t for t in op.input_types if t not in visited)

    logger.debug("Search for %s visited %d types, found %d producers", target, len(visited), len(producers))
    return list(producers)

  def _is_considered(self, type_: Type) -> bool:
    if not self.considered_types:
      return True
    return type_.qualified_name in self.considered_types or type_.name in self.considered_types


def find_producers(catalog: OperationCatalog, target: Type, config: Optional[SynthesisConfig] = None) -> List[TypedOperation]:
  """
  Convenience wrapper around `ProducerSearch.find`.

  Args:
      catalog: The operation catalog.
      target: The type to produce.
      config: Optional configuration (considered types).

  Returns:
      List[TypedOperation]: Producers in discovery order.
  """
  return ProducerSearch.from_config(catalog, config).find(target)
