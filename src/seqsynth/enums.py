"""
Enumerations for seqsynth.

This module defines the enumerations shared by the operation model and the
value fuzzer.
"""

from enum import Enum


class OperationKind(str, Enum):
  """
  The callable flavours a `TypedOperation` can wrap.

  Determines both how the operation is invoked and how it is rendered as code.
  """

  CONSTRUCTOR = "constructor"  # Cls(*args)
  METHOD = "method"  # receiver.name(*args)
  STATIC_METHOD = "static_method"  # Owner.name(*args) / module.func(*args)
  LITERAL = "literal"  # a constant value, no inputs


class StringFuzzStrategy(int, Enum):
  """
  Mutation strategies applied to string values by the `ValueFuzzer`.

  The integer value is the index drawn from the random source.
  """

  INSERT = 0  # insert a random character at a random index
  DELETE = 1  # delete the character at a random index
  REPLACE = 2  # replace a random span with one random character
  SUBSTRING = 3  # extract a random span

  @property
  def needs_non_empty(self) -> bool:
    """Whether the strategy can only be applied to a non-empty string."""
    return self is not StringFuzzStrategy.INSERT
