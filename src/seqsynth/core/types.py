"""
Type Model.

Defines `Type`, the semantic identifier for a kind of value handled by the
generator. Types come in two flavours:

1.  **Terminal** types are never decomposed into producer operations. They are
    supplied by literals or by fuzzing. This covers the primitive family
    (``void``, ``boolean``, ``byte``, ``char``, ``short``, ``int``, ``long``,
    ``float``, ``double``) and the exact textual type ``str``.
2.  **Reference** types wrap any other Python class and can be produced by
    its constructors and factory methods.

The primitive family is mapped onto Python and NumPy runtime classes so that
fixed-width numeric behaviour (e.g. 16-bit ``short``) is preserved when values
are computed.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

import numpy as np

NoneType = type(None)


@dataclass(frozen=True)
class Type:
  """
  An immutable, hashable type descriptor.

  Attributes:
      name (str): Display name (``int``, ``str``, ``shapes.Point``).
      runtime_class (type): The Python class values of this type belong to.
      terminal (bool): True if producer search must not decompose the type.
      primitive (bool): True for members of the primitive family.
  """

  name: str
  runtime_class: type
  terminal: bool = False
  primitive: bool = False

  def __str__(self) -> str:
    return self.name

  def __repr__(self) -> str:
    return f"Type({self.name})"

  @property
  def is_void(self) -> bool:
    return self == VOID

  @property
  def is_string(self) -> bool:
    """True only for the exact textual type (subclasses of `str` excluded)."""
    return self == STRING

  @property
  def qualified_name(self) -> str:
    """Fully qualified name of the runtime class (e.g. ``shapes.Point``)."""
    return _qualified_name(self.runtime_class)

  def is_assignable_from(self, other: "Type") -> bool:
    """
    Checks whether a value of type `other` may be used where `self` is required.

    Rules:

    1.  ``void`` is compatible with nothing but itself.
    2.  A primitive accepts itself and the narrower numeric primitives it
        widens from (``int`` -> ``long`` -> ``float`` -> ``double``).
    3.  A reference type accepts any type whose runtime class is a subclass,
        primitives included (``numbers.Integral`` accepts ``int``, ``object``
        accepts everything but ``void``).

    Args:
        other (Type): The provided type.

    Returns:
        bool: True if the types are compatible.
    """
    if self == other:
      return True
    if self.is_void or other.is_void:
      return False
    if self.primitive:
      return other in _WIDENING.get(self, ())
    try:
      return issubclass(other.runtime_class, self.runtime_class)
    except TypeError:
      # Protocols that are not runtime-checkable reject issubclass.
      return False

  @staticmethod
  def for_class(cls: Any) -> "Type":
    """
    Maps a Python class (or ``None``) to its `Type`.

    Args:
        cls: A class, or ``None`` for the void type.

    Returns:
        Type: The primitive type registered for the class, or a reference type.
    """
    if cls is None:
      return VOID
    known = _BY_CLASS.get(cls)
    if known is not None:
      return known
    return Type(_qualified_name(cls), cls)

  @staticmethod
  def for_value(value: Any) -> "Type":
    """Returns the runtime type of a value."""
    return Type.for_class(type(value))


def _qualified_name(cls: type) -> str:
  module = getattr(cls, "__module__", None)
  qualname = getattr(cls, "__qualname__", repr(cls))
  if module in (None, "builtins"):
    return qualname
  return f"{module}.{qualname}"


def _primitive(name: str, runtime_class: type) -> Type:
  return Type(name, runtime_class, terminal=True, primitive=True)


VOID = _primitive("void", NoneType)
BOOLEAN = _primitive("boolean", bool)
BYTE = _primitive("byte", np.int8)
CHAR = _primitive("char", str)
SHORT = _primitive("short", np.int16)
INT = _primitive("int", int)
LONG = _primitive("long", np.int64)
FLOAT = _primitive("float", np.float32)
DOUBLE = _primitive("double", float)

STRING = Type("str", str, terminal=True)
OBJECT = Type("object", object)

PRIMITIVE_TYPES = (VOID, BOOLEAN, BYTE, CHAR, SHORT, INT, LONG, FLOAT, DOUBLE)

# No CHAR entry: a `str` class always maps to STRING.
_BY_CLASS: Dict[Any, Type] = {
  NoneType: VOID,
  bool: BOOLEAN,
  np.bool_: BOOLEAN,
  np.int8: BYTE,
  np.int16: SHORT,
  int: INT,
  np.int64: LONG,
  np.float32: FLOAT,
  float: DOUBLE,
  np.float64: DOUBLE,
  str: STRING,
  object: OBJECT,
}

# Primitive widening: each type accepts the narrower numeric types listed.
_WIDENING: Dict[Type, Tuple[Type, ...]] = {
  SHORT: (BYTE,),
  INT: (BYTE, SHORT),
  LONG: (BYTE, SHORT, INT),
  FLOAT: (BYTE, SHORT, INT, LONG),
  DOUBLE: (BYTE, SHORT, INT, LONG, FLOAT),
}

# A compatibility relation, called as relation(required, provided).
Compatibility = Callable[[Type, Type], bool]


def is_assignable(required: Type, provided: Type) -> bool:
  """Default compatibility relation: `required.is_assignable_from(provided)`."""
  return required.is_assignable_from(provided)
