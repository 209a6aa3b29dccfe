"""
Sequence Model.

A `Sequence` is an immutable, ordered list of `Statement` objects. Each
statement calls one `TypedOperation` on values produced by *earlier*
statements of the same sequence, referenced by absolute index. The value of
the last statement is the value the sequence produces.

Invariant (checked on every `extend`): every input index of a statement points
to an earlier statement whose output type is compatible with the matching
operation input type. A violation is a programming error and raises
`ValueError`.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Sequence as SequenceT, Tuple

from seqsynth.core.operations import TypedOperation
from seqsynth.core.types import Compatibility, Type, is_assignable


@dataclass(frozen=True)
class Statement:
  """
  One call inside a sequence.

  Attributes:
      operation (TypedOperation): The operation called.
      inputs (Tuple[int, ...]): Absolute indices of the statements supplying each input.
  """

  operation: TypedOperation
  inputs: Tuple[int, ...] = ()

  @property
  def output_type(self) -> Type:
    return self.operation.output_type

  @property
  def is_literal(self) -> bool:
    return self.operation.is_literal

  @property
  def value(self) -> Any:
    """
    The constant held by a literal statement.

    Raises:
        ValueError: If the statement is not a literal.
    """
    if not self.operation.is_literal:
      raise ValueError(f"Statement {self.operation} is not a literal")
    return self.operation.value

  def shifted(self, offset: int) -> "Statement":
    """Returns a copy whose input indices are moved by `offset`."""
    if not offset or not self.inputs:
      return self
    return Statement(self.operation, tuple(i + offset for i in self.inputs))


@dataclass(frozen=True)
class Variable:
  """
  A reference to the value produced by one statement of a sequence.

  Attributes:
      sequence (Sequence): Owning sequence.
      index (int): Statement index.
  """

  sequence: "Sequence"
  index: int

  @property
  def type(self) -> Type:
    return self.sequence.statement(self.index).output_type

  @property
  def name(self) -> str:
    """Variable name used in rendered code (e.g. ``int3``, ``point0``)."""
    base = self.type.name.rsplit(".", 1)[-1].lower()
    base = "".join(ch if ch.isalnum() else "_" for ch in base)
    return f"{base}{self.index}"


class Sequence:
  """
  Immutable ordered list of statements whose last statement produces its value.
  """

  __slots__ = ("_statements", "_hash")

  def __init__(self, statements: Iterable[Statement] = ()) -> None:
    """
    Initializes the sequence.

    Statements are trusted as-is; use `extend` or `create` to build checked
    sequences.

    Args:
        statements: Ordered statements.
    """
    self._statements: Tuple[Statement, ...] = tuple(statements)
    self._hash: Optional[int] = None

  # --- Construction ---

  @classmethod
  def for_literal(cls, value: Any, type_: Optional[Type] = None) -> "Sequence":
    """
    Builds a one-statement sequence producing a constant.

    Args:
        value: The literal value.
        type_: Declared type (defaults to the runtime type of `value`).

    Returns:
        Sequence: The literal sequence.
    """
    return cls((Statement(TypedOperation.literal(value, type_)),))

  @classmethod
  def concatenate(cls, sequences: Iterable["Sequence"]) -> "Sequence":
    """
    Joins sequences, renumbering input indices so each part stays self-consistent.

    Args:
        sequences: The parts, in order.

    Returns:
        Sequence: A new sequence containing all statements.
    """
    statements: List[Statement] = []
    for seq in sequences:
      offset = len(statements)
      statements.extend(stmt.shifted(offset) for stmt in seq)
    return cls(statements)

  @classmethod
  def create(
    cls,
    operation: TypedOperation,
    input_sequences: Iterable["Sequence"],
    input_indices: SequenceT[int],
    is_compatible: Compatibility = is_assignable,
  ) -> "Sequence":
    """
    Concatenates `input_sequences` and appends a call to `operation`.

    Args:
        operation: The operation to call last.
        input_sequences: Sub-sequences supplying the inputs.
        input_indices: Indices, into the concatenation, of the call's inputs.
        is_compatible: Compatibility relation checked for each input.

    Returns:
        Sequence: The combined sequence.
    """
    return cls.concatenate(input_sequences).extend(operation, input_indices, is_compatible)

  def extend(
    self, operation: TypedOperation, inputs: SequenceT[int] = (), is_compatible: Compatibility = is_assignable
  ) -> "Sequence":
    """
    Appends one statement calling `operation` on existing variables.

    Args:
        operation: The operation to call.
        inputs: Indices of the statements supplying each input.
        is_compatible: Compatibility relation, called as ``is_compatible(required, provided)``.
            Defaults to `Type.is_assignable_from`.

    Returns:
        Sequence: A new, longer sequence.

    Raises:
        ValueError: If an index is out of range, not earlier than the new
            statement, or of an incompatible type.
    """
    inputs = tuple(inputs)
    expected = operation.input_types
    if len(inputs) != len(expected):
      raise ValueError(f"{operation} expects {len(expected)} inputs, got {len(inputs)}")

    for position, (index, required) in enumerate(zip(inputs, expected)):
      if not 0 <= index < len(self._statements):
        raise ValueError(f"Input {position} of {operation} refers to missing statement {index}")
      provided = self._statements[index].output_type
      if not is_compatible(required, provided):
        raise ValueError(f"Input {position} of {operation} requires {required}, statement {index} produces {provided}")

    return Sequence(self._statements + (Statement(operation, inputs),))

  # --- Access ---

  @property
  def statements(self) -> Tuple[Statement, ...]:
    return self._statements

  def statement(self, index: int) -> Statement:
    return self._statements[index]

  def variable(self, index: int) -> Variable:
    if not 0 <= index < len(self._statements):
      raise IndexError(f"No statement {index} in a sequence of {len(self._statements)}")
    return Variable(self, index)

  @property
  def last_variable(self) -> Variable:
    """
    The variable holding the sequence's overall value.

    Raises:
        ValueError: If the sequence is empty.
    """
    if not self._statements:
      raise ValueError("An empty sequence has no last variable")
    return Variable(self, len(self._statements) - 1)

  def types(self) -> List[Type]:
    """Output types of every statement, in order."""
    return [stmt.output_type for stmt in self._statements]

  def to_code(self) -> str:
    """Renders the sequence as Python source (see `seqsynth.core.rendering`)."""
    from seqsynth.core.rendering import render_sequence

    return render_sequence(self)

  # --- Protocols ---

  def __len__(self) -> int:
    return len(self._statements)

  def __iter__(self) -> Iterator[Statement]:
    return iter(self._statements)

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, Sequence):
      return NotImplemented
    return self._statements == other._statements

  def __hash__(self) -> int:
    if self._hash is None:
      self._hash = hash(self._statements)
    return self._hash

  def __repr__(self) -> str:
    last = self._statements[-1].operation if self._statements else None
    return f"Sequence(len={len(self._statements)}, last={last})"
