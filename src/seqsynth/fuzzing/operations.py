"""
Runtime Operations used by the Value Fuzzer.

Resolves the library callables the fuzzer appends to sequences:

1.  **Sum combinators**: ``operator.add`` for ``int`` / ``double``,
    ``numpy.add`` for the fixed-width ``long`` / ``float`` types, and the
    widening `int_sum` for ``short``.
2.  **Short conversions**: the 32-bit wrapper ``numpy.int32`` (boxing) and
    ``numpy.int16`` (narrowing).
3.  **Text builder**: construction from a string, the four mutations, and
    ``to_string``.

These callables are assumed to exist. A missing one is a broken installation,
reported as `RuntimeError` rather than handled.
"""

import operator
from types import ModuleType
from typing import Any, Callable, Dict, Union

import numpy as np

from seqsynth.core.operations import TypedOperation
from seqsynth.core.types import CHAR, DOUBLE, FLOAT, INT, LONG, SHORT, STRING, Type
from seqsynth.enums import StringFuzzStrategy
from seqsynth.fuzzing.text_builder import TextBuilder

INT32_BOX = Type.for_class(np.int32)
TEXT_BUILDER = Type.for_class(TextBuilder)

_INT32_SPAN = 1 << 32
_INT32_MIN = -(1 << 31)


def require(owner: Union[type, ModuleType], name: str) -> Callable[..., Any]:
  """
  Looks up a callable that the fuzzer cannot work without.

  Args:
      owner: Class or module expected to define `name`.
      name: Attribute name.

  Returns:
      The callable.

  Raises:
      RuntimeError: If the attribute is missing or not callable.
  """
  func = getattr(owner, name, None)
  if not callable(func):
    owner_name = getattr(owner, "__name__", repr(owner))
    raise RuntimeError(f"Initialization failed due to missing method {owner_name}.{name}")
  return func


def int_sum(left: Any, right: Any) -> int:
  """
  Adds two integers with 32-bit wrap-around and returns a plain `int`.

  Operands are widened to `int` first, so a `numpy.int16` operand never
  overflows its own width.

  Args:
      left: First addend (e.g. a short).
      right: Second addend.

  Returns:
      int: The sum, wrapped into the signed 32-bit range.
  """
  return (int(left) + int(right) - _INT32_MIN) % _INT32_SPAN + _INT32_MIN


def sum_operation(numeric_type: Type) -> TypedOperation:
  """
  Returns the binary sum combinator for a numeric primitive type.

  ``short`` values are widened and summed with an ``int`` noise term through
  `int_sum`, yielding ``int``.

  Args:
      numeric_type: One of short, int, long, float, double.

  Returns:
      TypedOperation: A receiver-less call taking (original, noise).

  Raises:
      ValueError: If the type has no sum combinator.
  """
  if numeric_type in (INT, DOUBLE):
    return TypedOperation.static("operator.add", require(operator, "add"), (numeric_type, numeric_type), numeric_type)
  if numeric_type == SHORT:
    return TypedOperation.static(f"{__name__}.int_sum", int_sum, (SHORT, INT), INT)
  if numeric_type in (LONG, FLOAT):
    return TypedOperation.static("numpy.add", require(np, "add"), (numeric_type, numeric_type), numeric_type)
  raise ValueError(f"No sum combinator for {numeric_type}")


def box_int_operation() -> TypedOperation:
  """``numpy.int32(int)``: wraps an int into the 32-bit box."""
  return TypedOperation.constructor(require(np, "int32"), (INT,), output_type=INT32_BOX)


def narrow_to_short_operation() -> TypedOperation:
  """``numpy.int16(box)``: narrows the 32-bit box to short."""
  return TypedOperation.constructor(require(np, "int16"), (INT32_BOX,), output_type=SHORT)


def text_builder_constructor() -> TypedOperation:
  return TypedOperation.constructor(TextBuilder, (STRING,), output_type=TEXT_BUILDER)


def to_string_operation() -> TypedOperation:
  return TypedOperation.method(TEXT_BUILDER, "to_string", require(TextBuilder, "to_string"), (), STRING)


def mutation_operation(strategy: StringFuzzStrategy) -> TypedOperation:
  """
  Returns the builder call implementing a string fuzzing strategy.

  Args:
      strategy: The strategy.

  Returns:
      TypedOperation: An instance-method call on the builder.
  """
  name, params, output = _MUTATIONS[strategy]
  return TypedOperation.method(TEXT_BUILDER, name, require(TextBuilder, name), params, output)


_MUTATIONS: Dict[StringFuzzStrategy, tuple] = {
  StringFuzzStrategy.INSERT: ("insert", (INT, CHAR), TEXT_BUILDER),
  StringFuzzStrategy.DELETE: ("delete_char_at", (INT,), TEXT_BUILDER),
  StringFuzzStrategy.REPLACE: ("replace", (INT, INT, STRING), TEXT_BUILDER),
  StringFuzzStrategy.SUBSTRING: ("substring", (INT, INT), STRING),
}
