"""
Tests for Sequences, Statements and Variables.

Verifies:
1. Concatenation renumbers input indices.
2. `extend` rejects bad arity, out-of-range and incompatible inputs, under the
   default or an injected compatibility relation.
3. Variable naming and access rules.
"""

import numpy as np
import pytest

from seqsynth.core.operations import TypedOperation
from seqsynth.core.sequence import Sequence, Statement
from seqsynth.core.types import INT, OBJECT, STRING, Type
from sample_domain import Point

POINT = Type.for_class(Point)


@pytest.fixture
def point_ctor():
  return TypedOperation.constructor(Point, (INT, INT))


def _point_sequence(ctor, x, y):
  return Sequence.create(ctor, [Sequence.for_literal(x), Sequence.for_literal(y)], [0, 1])


def test_for_literal():
  seq = Sequence.for_literal(7)
  assert len(seq) == 1
  assert seq.statement(0).is_literal
  assert seq.statement(0).value == 7
  assert seq.last_variable.type == INT


def test_create_builds_call_over_inputs(point_ctor):
  seq = _point_sequence(point_ctor, 1, 2)
  assert len(seq) == 3
  assert seq.statement(2).operation == point_ctor
  assert seq.statement(2).inputs == (0, 1)
  assert seq.types() == [INT, INT, POINT]


def test_concatenate_renumbers_inputs(point_ctor):
  first = _point_sequence(point_ctor, 1, 2)
  second = _point_sequence(point_ctor, 3, 4)

  joined = Sequence.concatenate([first, second])

  assert len(joined) == 6
  assert joined.statement(2).inputs == (0, 1)
  assert joined.statement(5).inputs == (3, 4)
  assert joined.statement(3).value == 3


def test_extend_rejects_wrong_arity(point_ctor):
  with pytest.raises(ValueError, match="expects 2 inputs"):
    Sequence.for_literal(1).extend(point_ctor, [0])


def test_extend_rejects_missing_statement(point_ctor):
  with pytest.raises(ValueError, match="missing statement"):
    Sequence.for_literal(1).extend(point_ctor, [0, 1])


def test_extend_rejects_incompatible_type(point_ctor):
  seq = Sequence.concatenate([Sequence.for_literal(1), Sequence.for_literal("a")])
  with pytest.raises(ValueError, match="requires int"):
    seq.extend(point_ctor, [1, 0])


def test_extend_accepts_object_parameter():
  identity = TypedOperation.static("builtins.id", id, (OBJECT,), INT)
  seq = Sequence.for_literal("text").extend(identity, [0])
  assert seq.statement(1).inputs == (0,)


def test_extend_with_custom_relation(point_ctor):
  seq = Sequence.concatenate([Sequence.for_literal(1), Sequence.for_literal("a")])
  extended = seq.extend(point_ctor, [1, 0], lambda required, provided: True)
  assert extended.statement(2).inputs == (1, 0)


def test_create_honours_custom_relation(point_ctor):
  def exact(required, provided):
    return required == provided

  with pytest.raises(ValueError, match="requires int"):
    Sequence.create(point_ctor, [Sequence.for_literal(np.int16(1)), Sequence.for_literal(2)], [0, 1], exact)
  assert len(Sequence.create(point_ctor, [Sequence.for_literal(np.int16(1)), Sequence.for_literal(2)], [0, 1])) == 3


def test_extend_returns_new_sequence(point_ctor):
  base = Sequence.concatenate([Sequence.for_literal(1), Sequence.for_literal(2)])
  longer = base.extend(point_ctor, [0, 1])
  assert len(base) == 2
  assert len(longer) == 3


def test_variable_names(point_ctor):
  seq = _point_sequence(point_ctor, 1, 2)
  assert [seq.variable(i).name for i in range(3)] == ["int0", "int1", "point2"]
  assert seq.last_variable.name == "point2"


def test_variable_out_of_range():
  with pytest.raises(IndexError):
    Sequence.for_literal(1).variable(1)


def test_empty_sequence_has_no_last_variable():
  with pytest.raises(ValueError):
    _ = Sequence().last_variable


def test_statement_value_requires_literal(point_ctor):
  stmt = Statement(point_ctor, (0, 1))
  with pytest.raises(ValueError, match="not a literal"):
    _ = stmt.value


def test_equality_and_hash(point_ctor):
  a = _point_sequence(point_ctor, 1, 2)
  b = _point_sequence(point_ctor, 1, 2)
  c = _point_sequence(point_ctor, 2, 1)
  assert a == b
  assert hash(a) == hash(b)
  assert a != c


def test_literals_of_equal_value_but_different_type_differ():
  assert Sequence.for_literal(1) != Sequence.for_literal(True)
  assert Sequence.for_literal(1) != Sequence.for_literal(1.0)


def test_string_literal_type():
  assert Sequence.for_literal("hi").last_variable.type == STRING
