"""
Core Engine of the Value Fuzzer.

Given a finished sequence, appends statements that compute a perturbed variant
of its final value. The original construction is kept as a prefix, so the
history that produced the value survives in generated tests.

Dispatch on the type of the last variable:

1.  ``void`` / ``boolean`` / ``byte`` / ``char``: unsupported, returned unchanged.
2.  ``int`` / ``long`` / ``float`` / ``double``: a Gaussian noise literal of
    the same type, then ``sum(original, noise)``.
3.  ``short``: fuzzed as ``int``, then boxed to ``numpy.int32`` and narrowed
    back with ``numpy.int16``.
4.  ``str`` (exact type only): one of four `TextBuilder` mutations.

Every random draw comes from the injected `Randomness`, so a fixed seed
reproduces the same output.
"""

import logging
import math
from typing import List, NamedTuple, Optional

import numpy as np

from seqsynth.config import DEFAULT_GAUSSIAN_STDEV, SynthesisConfig
from seqsynth.core.operations import TypedOperation
from seqsynth.core.sequence import Sequence
from seqsynth.core.types import BOOLEAN, BYTE, CHAR, DOUBLE, FLOAT, INT, LONG, SHORT, STRING, VOID, Type
from seqsynth.enums import StringFuzzStrategy
from seqsynth.fuzzing.operations import (
  box_int_operation,
  mutation_operation,
  narrow_to_short_operation,
  sum_operation,
  text_builder_constructor,
  to_string_operation,
)
from seqsynth.randomness import Randomness

logger = logging.getLogger(__name__)

UNSUPPORTED_TYPES = (VOID, BOOLEAN, BYTE, CHAR)
NUMERIC_TYPES = (INT, LONG, FLOAT, DOUBLE)

# Printable ASCII range [32, 126].
_FIRST_PRINTABLE = 32
_PRINTABLE_COUNT = 95


class FuzzResult(NamedTuple):
  """The (possibly extended) sequence and the number of appended statements."""

  sequence: Sequence
  appended: int


class ValueFuzzer:
  """
  Appends perturbation statements to sequences producing primitives or strings.

  Attributes:
      randomness (Randomness): Shared random source.
      gaussian_stdev (float): Standard deviation of numeric noise.
  """

  def __init__(self, randomness: Randomness, gaussian_stdev: float = DEFAULT_GAUSSIAN_STDEV) -> None:
    self.randomness = randomness
    self.gaussian_stdev = gaussian_stdev

  @classmethod
  def from_config(cls, config: SynthesisConfig, randomness: Optional[Randomness] = None) -> "ValueFuzzer":
    """Builds a fuzzer with the noise settings of `config`."""
    return cls(randomness or config.make_randomness(), config.gaussian_stdev)

  def fuzz(self, sequence: Sequence) -> FuzzResult:
    """
    Perturbs the value produced by `sequence`.

    Args:
        sequence: The sequence whose last value is fuzzed.

    Returns:
        FuzzResult: The extended sequence and the count of appended statements,
        or the original sequence and 0 when the value cannot be fuzzed.
    """
    if not len(sequence):
      return FuzzResult(sequence, 0)

    output_type = sequence.last_variable.type
    if output_type in UNSUPPORTED_TYPES:
      return FuzzResult(sequence, 0)

    if output_type == SHORT:
      fuzzed = self._fuzz_number(sequence, SHORT)
      fuzzed = _call(fuzzed, box_int_operation(), len(fuzzed) - 1)
      fuzzed = _call(fuzzed, narrow_to_short_operation(), len(fuzzed) - 1)
    elif output_type in NUMERIC_TYPES:
      fuzzed = self._fuzz_number(sequence, output_type)
    elif output_type.is_string:
      fuzzed = self._fuzz_string(sequence)
    else:
      return FuzzResult(sequence, 0)

    if fuzzed is None:
      return FuzzResult(sequence, 0)
    return FuzzResult(fuzzed, len(fuzzed) - len(sequence))

  # --- Numbers ---

  def _fuzz_number(self, sequence: Sequence, numeric_type: Type) -> Sequence:
    original = len(sequence) - 1
    noise = self.randomness.next_gaussian(0.0, self.gaussian_stdev)
    noise_type = INT if numeric_type == SHORT else numeric_type

    extended = sequence.extend(TypedOperation.literal(_coerce_noise(noise, noise_type), noise_type))
    return _call(extended, sum_operation(numeric_type), original, len(extended) - 1)

  # --- Strings ---

  def _fuzz_string(self, sequence: Sequence) -> Optional[Sequence]:
    strategy = StringFuzzStrategy(self.randomness.next_int(len(StringFuzzStrategy)))

    last = sequence.statement(len(sequence) - 1)
    if not last.is_literal:
      logger.debug("String value of %s is not a literal; skipping fuzzing", last.operation)
      return None
    text = last.value
    if strategy.needs_non_empty and not text:
      logger.debug("Cannot apply %s to an empty string", strategy.name)
      return None

    extended = _call(sequence, text_builder_constructor(), len(sequence) - 1)
    builder = len(extended) - 1

    arguments = self._strategy_arguments(strategy, len(text))
    argument_indices: List[int] = []
    for value, type_ in arguments:
      extended = extended.extend(TypedOperation.literal(value, type_))
      argument_indices.append(len(extended) - 1)

    extended = _call(extended, mutation_operation(strategy), builder, *argument_indices)
    if strategy is not StringFuzzStrategy.SUBSTRING:
      extended = _call(extended, to_string_operation(), len(extended) - 1)
    return extended

  def _strategy_arguments(self, strategy: StringFuzzStrategy, length: int) -> List[tuple]:
    """Draws the (value, type) literal arguments of a mutation."""
    if strategy is StringFuzzStrategy.INSERT:
      index = self.randomness.next_int(length) if length else 0
      return [(index, INT), (self._random_char(), CHAR)]

    if strategy is StringFuzzStrategy.DELETE:
      return [(self.randomness.next_int(length), INT)]

    first = self.randomness.next_int(length)
    second = self.randomness.next_int(length)
    start, end = min(first, second), max(first, second)
    if strategy is StringFuzzStrategy.REPLACE:
      return [(start, INT), (end, INT), (self._random_char(), STRING)]
    return [(start, INT), (end, INT)]

  def _random_char(self) -> str:
    return chr(_FIRST_PRINTABLE + self.randomness.next_int(_PRINTABLE_COUNT))


def _call(sequence: Sequence, operation: TypedOperation, *inputs: int) -> Sequence:
  return sequence.extend(operation, inputs)


def _coerce_noise(noise: float, numeric_type: Type):
  """Converts raw Gaussian noise to a value of `numeric_type`; integral types round half up."""
  if numeric_type == INT:
    return int(math.floor(noise + 0.5))
  if numeric_type == LONG:
    return np.int64(math.floor(noise + 0.5))
  if numeric_type == FLOAT:
    return np.float32(noise)
  return float(noise)


def fuzz(sequence: Sequence, randomness: Randomness, gaussian_stdev: float = DEFAULT_GAUSSIAN_STDEV) -> FuzzResult:
  """
  Convenience wrapper around `ValueFuzzer.fuzz`.

  Args:
      sequence: The sequence to fuzz.
      randomness: Shared random source.
      gaussian_stdev: Noise standard deviation for numbers.

  Returns:
      FuzzResult: The fuzzed sequence and appended statement count.
  """
  return ValueFuzzer(randomness, gaussian_stdev).fuzz(sequence)
