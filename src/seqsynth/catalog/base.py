"""
Operation Catalog Interface.

The catalog is the only component that knows how operations are discovered.
Search and synthesis talk to it through three capabilities:

1.  `operations_for(type)`: the accessible constructors and methods of a type,
    each with its resolved parameter and return types.
2.  `is_terminal(type)`: whether producer search must stop at the type.
3.  `is_compatible(required, provided)`: the assignability relation. The
    orchestrator hands it to the synthesizer and to pool queries, so a
    catalog may override it.

`TableCatalog` is an explicit, in-memory implementation used to describe
systems by hand (and in tests). `ReflectiveCatalog` discovers operations from
live Python classes.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from seqsynth.core.operations import TypedOperation
from seqsynth.core.types import Type


class OperationCatalog(ABC):
  """
  Abstract capability interface over a host type system.
  """

  @abstractmethod
  def operations_for(self, type_: Type) -> List[TypedOperation]:
    """
    Enumerates the accessible constructors and methods declared by a type.

    Args:
        type_: The type to enumerate.

    Returns:
        List[TypedOperation]: Operations in a deterministic order. Constructors
        produce `type_`; methods carry their declared return type.
    """

  def is_terminal(self, type_: Type) -> bool:
    """True if the type is supplied by literals rather than producer operations."""
    return type_.terminal

  def is_compatible(self, required: Type, provided: Type) -> bool:
    """True if a value of `provided` may be passed where `required` is expected."""
    return required.is_assignable_from(provided)


class TableCatalog(OperationCatalog):
  """
  Catalog backed by an explicit table of operations per owning type.
  """

  def __init__(self, operations: Iterable[TypedOperation] = ()) -> None:
    """
    Initializes the table.

    Args:
        operations: Operations to register under their declaring type.
    """
    self._table: Dict[Type, List[TypedOperation]] = {}
    for op in operations:
      self.register(op)

  def register(self, operation: TypedOperation, owner: Optional[Type] = None) -> None:
    """
    Adds an operation to the table.

    Args:
        operation: The operation.
        owner: Type to list it under. Defaults to `operation.declaring_type`.
    """
    bucket = self._table.setdefault(owner or operation.declaring_type, [])
    if operation not in bucket:
      bucket.append(operation)

  def operations_for(self, type_: Type) -> List[TypedOperation]:
    return list(self._table.get(type_, ()))
