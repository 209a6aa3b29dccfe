"""
Tests for the Sequence Synthesizer.

Verifies:
1. The two-int Point scenario yields ``Point(3, 3)`` from a single pooled ``3``.
2. Pool priority: the first pool with a compatible value wins.
3. Failure modes: empty queries and exhausted slots return None.
4. Injected compatibility relations replace the default one.
5. Soundness: every synthesized sequence is well-typed, refers only to earlier
   statements, and ends in the operation.
"""

from hypothesis import given, settings, strategies as st

from seqsynth.core.execution import NormalExecution, ReflectiveExecutor, final_value
from seqsynth.core.operations import TypedOperation
from seqsynth.core.sequence import Sequence
from seqsynth.core.types import INT, OBJECT, STRING, Type
from seqsynth.generation.pool import ObjectPool
from seqsynth.generation.synthesizer import SequenceSynthesizer
from seqsynth.randomness import Randomness
from sample_domain import Box, Point, Segment

POINT = Type.for_class(Point)
POINT_CTOR = TypedOperation.constructor(Point, (INT, INT))
SEGMENT_CTOR = TypedOperation.constructor(Segment, (POINT, POINT))


def _value(sequence):
  return final_value(ReflectiveExecutor().execute(sequence))


def test_single_int_fills_both_slots(make_pool, randomness):
  seq = SequenceSynthesizer(randomness).synthesize(POINT_CTOR, [make_pool(3)])

  assert seq is not None
  assert len(seq) == 3
  assert seq.statement(2).inputs == (0, 1)
  assert seq.to_code() == "int0 = 3\nint1 = 3\npoint2 = sample_domain.Point(int0, int1)\n"
  assert _value(seq) == Point(3, 3)


def test_empty_pool_fails(randomness):
  assert SequenceSynthesizer(randomness).synthesize(POINT_CTOR, [ObjectPool()]) is None


def test_incompatible_values_fail(make_pool, randomness):
  assert SequenceSynthesizer(randomness).synthesize(POINT_CTOR, [make_pool("3", 3.0, True)]) is None


def test_no_input_operation_needs_no_pool(randomness):
  make_list = TypedOperation.constructor(list, ())
  seq = SequenceSynthesizer(randomness).synthesize(make_list, [])
  assert len(seq) == 1
  assert _value(seq) == []


def test_first_pool_with_a_match_wins(make_pool, randomness):
  main, secondary = make_pool(1), make_pool(2)
  synthesizer = SequenceSynthesizer(randomness)

  for _ in range(5):
    assert _value(synthesizer.synthesize(POINT_CTOR, [main, secondary])) == Point(1, 1)


def test_falls_back_to_later_pools(make_pool, randomness):
  main, secondary = make_pool("a"), make_pool(2)
  seq = SequenceSynthesizer(randomness).synthesize(POINT_CTOR, [main, secondary])
  assert _value(seq) == Point(2, 2)


def test_reference_inputs_use_distinct_slots(make_pool, randomness):
  point_seq = Sequence.create(POINT_CTOR, [Sequence.for_literal(1), Sequence.for_literal(2)], [0, 1])
  pool = make_pool()
  pool.put(point_seq, Point(1, 2))

  seq = SequenceSynthesizer(randomness).synthesize(SEGMENT_CTOR, [pool])

  assert len(seq) == 7
  assert seq.statement(6).inputs == (2, 5)


def test_declared_type_governs_slot_resolution(randomness):
  """A value that is an int at runtime but declared as object cannot fill an int slot."""
  pool = ObjectPool()
  pool.put(Sequence.for_literal(7, OBJECT), 7)

  assert SequenceSynthesizer(randomness).synthesize(POINT_CTOR, [pool]) is None


def test_custom_relation_admits_otherwise_incompatible_values(make_pool, randomness):
  box_ctor = TypedOperation.constructor(Box, (INT,))
  pool = make_pool("x")

  assert SequenceSynthesizer(randomness).synthesize(box_ctor, [pool]) is None

  seq = SequenceSynthesizer(randomness, lambda required, provided: True).synthesize(box_ctor, [pool])
  assert seq.statement(1).inputs == (0,)
  assert _value(seq).content == "x"


def test_custom_relation_restricts_widening(make_pool, randomness):
  def exact(required, provided):
    return required == provided

  to_float = TypedOperation.static("builtins.float", float, (Type.for_class(float),), Type.for_class(float))
  assert SequenceSynthesizer(randomness).synthesize(to_float, [make_pool(3)]) is not None
  assert SequenceSynthesizer(randomness, exact).synthesize(to_float, [make_pool(3)]) is None


def test_same_seed_same_choice(make_pool):
  pool = make_pool(1, 2, 3, 4, 5)
  first = SequenceSynthesizer(Randomness(9)).synthesize(POINT_CTOR, [pool])
  second = SequenceSynthesizer(Randomness(9)).synthesize(POINT_CTOR, [pool])
  assert first == second


@settings(max_examples=60, deadline=None)
@given(
  ints=st.lists(st.integers(-5, 5), max_size=4),
  texts=st.lists(st.text(max_size=3), max_size=4),
  points=st.lists(st.tuples(st.integers(-3, 3), st.integers(-3, 3)), max_size=3),
  signature=st.lists(st.sampled_from([INT, STRING, POINT]), max_size=4),
  seed=st.integers(0, 2**32 - 1),
)
def test_synthesized_sequences_are_well_typed(ints, texts, points, signature, seed):
  pool = ObjectPool()
  for value in ints + texts:
    pool.put(Sequence.for_literal(value), value)
  for x, y in points:
    pool.put(Sequence.create(POINT_CTOR, [Sequence.for_literal(x), Sequence.for_literal(y)], [0, 1]), Point(x, y))
  operation = TypedOperation.static("builtins.print", lambda *args: args, signature, Type.for_class(tuple))

  seq = SequenceSynthesizer(Randomness(seed)).synthesize(operation, [pool])

  available = {INT: bool(ints), STRING: bool(texts), POINT: bool(points)}
  if not all(available[t] for t in signature):
    assert seq is None
    return

  assert seq is not None
  last = seq.statement(len(seq) - 1)
  assert last.operation == operation
  for position, stmt in enumerate(seq):
    for index, required in zip(stmt.inputs, stmt.operation.input_types):
      assert 0 <= index < position
      assert required.is_assignable_from(seq.statement(index).output_type)
  assert len(last.inputs) == len(signature)

  outcomes = ReflectiveExecutor().execute(seq)
  assert all(isinstance(o, NormalExecution) for o in outcomes)
