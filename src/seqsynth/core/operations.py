"""
Operation Model.

A `TypedOperation` is an immutable descriptor of something a sequence can
call: a constructor, an instance method, a static method / free function, or
a literal value. Every flavour exposes the same contract: an ordered tuple of
input types (receiver first for instance methods), a single output type, and
`invoke(*args)`.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Tuple

from seqsynth.core.types import Type, VOID
from seqsynth.enums import OperationKind


@dataclass(frozen=True, eq=False)
class TypedOperation:
  """
  Immutable callable descriptor with a resolved type signature.

  Attributes:
      kind (OperationKind): Constructor, method, static method or literal.
      name (str): Short name used when rendering method calls.
      path (str): Dotted path used when rendering constructor / static calls.
      declaring_type (Type): The type that owns the callable.
      input_types (Tuple[Type, ...]): Parameter types (receiver first for methods).
      output_type (Type): Result type.
      function (Optional[Callable]): The underlying callable (None for literals).
      value (Any): The constant produced by a literal operation.
  """

  kind: OperationKind
  name: str
  path: str
  declaring_type: Type
  input_types: Tuple[Type, ...]
  output_type: Type
  function: Optional[Callable[..., Any]] = None
  value: Any = None

  @classmethod
  def constructor(cls, klass: type, parameter_types: Sequence[Type], output_type: Optional[Type] = None) -> "TypedOperation":
    """
    Builds a constructor operation.

    Args:
        klass: The class to instantiate.
        parameter_types: Types of the constructor parameters, in declaration order.
        output_type: Produced type. Defaults to the type of `klass`.

    Returns:
        TypedOperation: The constructor descriptor.
    """
    declaring = Type.for_class(klass)
    return cls(
      kind=OperationKind.CONSTRUCTOR,
      name=klass.__name__,
      path=declaring.qualified_name,
      declaring_type=declaring,
      input_types=tuple(parameter_types),
      output_type=output_type or declaring,
      function=klass,
    )

  @classmethod
  def method(
    cls, owner: Type, name: str, function: Callable[..., Any], parameter_types: Sequence[Type], output_type: Type
  ) -> "TypedOperation":
    """
    Builds an instance-method operation. The receiver type is prepended to the inputs.

    Args:
        owner: The receiver type.
        name: Method name.
        function: The unbound function, called as ``function(receiver, *args)``.
        parameter_types: Types of the non-receiver parameters.
        output_type: Declared return type.

    Returns:
        TypedOperation: The method descriptor.
    """
    return cls(
      kind=OperationKind.METHOD,
      name=name,
      path=f"{owner.qualified_name}.{name}",
      declaring_type=owner,
      input_types=(owner,) + tuple(parameter_types),
      output_type=output_type,
      function=function,
    )

  @classmethod
  def static(
    cls,
    path: str,
    function: Callable[..., Any],
    parameter_types: Sequence[Type],
    output_type: Type,
    declaring_type: Optional[Type] = None,
  ) -> "TypedOperation":
    """
    Builds a receiver-less call (static method, class method or module function).

    Args:
        path: Dotted path used to render the call (e.g. ``operator.add``).
        function: The callable.
        parameter_types: Parameter types in declaration order.
        output_type: Declared return type.
        declaring_type: Owning type, defaults to the output type.

    Returns:
        TypedOperation: The static-call descriptor.
    """
    return cls(
      kind=OperationKind.STATIC_METHOD,
      name=path.rsplit(".", 1)[-1],
      path=path,
      declaring_type=declaring_type or output_type,
      input_types=tuple(parameter_types),
      output_type=output_type,
      function=function,
    )

  @classmethod
  def literal(cls, value: Any, type_: Optional[Type] = None) -> "TypedOperation":
    """
    Builds a literal operation producing a constant.

    Args:
        value: The constant.
        type_: Its type. Defaults to the runtime type of `value`.

    Returns:
        TypedOperation: The literal descriptor.
    """
    out = type_ or Type.for_value(value)
    return cls(
      kind=OperationKind.LITERAL,
      name=out.name,
      path=out.name,
      declaring_type=out,
      input_types=(),
      output_type=out,
      value=value,
    )

  @property
  def is_literal(self) -> bool:
    return self.kind is OperationKind.LITERAL

  @property
  def is_constructor(self) -> bool:
    return self.kind is OperationKind.CONSTRUCTOR

  @property
  def returns_void(self) -> bool:
    return self.output_type == VOID

  def invoke(self, *args: Any) -> Any:
    """
    Calls the underlying callable with already-computed input values.

    Args:
        *args: Input values, in `input_types` order (receiver first for methods).

    Returns:
        Any: The produced value.
    """
    if self.kind is OperationKind.LITERAL:
      return self.value
    return self.function(*args)

  def _key(self) -> Tuple[Any, ...]:
    if self.kind is OperationKind.LITERAL:
      return (self.kind, self.output_type, type(self.value), self.value)
    return (self.kind, self.function, self.input_types, self.output_type)

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, TypedOperation):
      return NotImplemented
    return self._key() == other._key()

  def __hash__(self) -> int:
    return hash(self._key())

  def __str__(self) -> str:
    if self.kind is OperationKind.LITERAL:
      return f"{self.output_type}:{self.value!r}"
    params = ", ".join(str(t) for t in self.input_types)
    return f"{self.path}({params}) -> {self.output_type}"

  def __repr__(self) -> str:
    return f"TypedOperation({self})"
