"""
Tests for Sequence Execution.
"""

from seqsynth.core.execution import (
  ExceptionalExecution,
  NormalExecution,
  NotExecuted,
  ReflectiveExecutor,
  final_value,
)
from seqsynth.core.operations import TypedOperation
from seqsynth.core.sequence import Sequence
from seqsynth.core.types import INT, Type
from sample_domain import Fragile, Point


def test_normal_execution_feeds_later_statements():
  ctor = TypedOperation.constructor(Point, (INT, INT))
  seq = Sequence.create(ctor, [Sequence.for_literal(3), Sequence.for_literal(4)], [0, 1])

  outcomes = ReflectiveExecutor().execute(seq)

  assert outcomes == [NormalExecution(3), NormalExecution(4), NormalExecution(Point(3, 4))]
  assert final_value(outcomes) == Point(3, 4)


def test_exception_stops_execution():
  fragile = Type.for_class(Fragile)
  ctor = TypedOperation.constructor(Fragile, (INT,))
  size = TypedOperation.static("builtins.vars", vars, (fragile,), Type.for_class(dict))
  seq = Sequence.create(ctor, [Sequence.for_literal(-1)], [0]).extend(size, [1])

  outcomes = ReflectiveExecutor().execute(seq)

  assert len(outcomes) == 3
  assert isinstance(outcomes[0], NormalExecution)
  assert isinstance(outcomes[1], ExceptionalExecution)
  assert isinstance(outcomes[1].error, ValueError)
  assert isinstance(outcomes[2], NotExecuted)
  assert final_value(outcomes) is None


def test_final_value_of_nothing():
  assert final_value([]) is None
  assert final_value([NormalExecution(None)]) is None
