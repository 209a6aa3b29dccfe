"""
Sequence Rendering.

Converts a `Sequence` into Python source code using LibCST. Each statement
becomes one assignment ``<var> = <expr>``; statements producing ``void`` are
emitted as bare expression statements.

Example output::

    int0 = 3
    int1 = 4
    point2 = shapes.Point(int0, int1)
    point3 = point2.translated(int0)
"""

import math
from typing import Any, List

import libcst as cst
import numpy as np

from seqsynth.core.sequence import Sequence, Statement
from seqsynth.enums import OperationKind


def render_sequence(sequence: Sequence) -> str:
  """
  Renders a sequence as a block of Python statements.

  Args:
      sequence: The sequence to render.

  Returns:
      str: Source code, one line per statement.
  """
  body: List[cst.SimpleStatementLine] = []
  for index, stmt in enumerate(sequence):
    body.append(_render_statement(sequence, index, stmt))
  return cst.Module(body=body).code


def _render_statement(sequence: Sequence, index: int, stmt: Statement) -> cst.SimpleStatementLine:
  expr = _render_expression(sequence, stmt)
  if stmt.operation.returns_void:
    return cst.SimpleStatementLine(body=[cst.Expr(value=expr)])

  target = cst.Name(sequence.variable(index).name)
  return cst.SimpleStatementLine(body=[cst.Assign(targets=[cst.AssignTarget(target=target)], value=expr)])


def _render_expression(sequence: Sequence, stmt: Statement) -> cst.BaseExpression:
  op = stmt.operation
  if op.kind is OperationKind.LITERAL:
    return render_literal(op.value)

  names = [cst.Name(sequence.variable(i).name) for i in stmt.inputs]

  if op.kind is OperationKind.METHOD:
    receiver, rest = names[0], names[1:]
    func: cst.BaseExpression = cst.Attribute(value=receiver, attr=cst.Name(op.name))
    return cst.Call(func=func, args=[cst.Arg(value=n) for n in rest])

  return cst.Call(func=_callee(op.path, op.name), args=[cst.Arg(value=n) for n in names])


def _callee(path: str, short_name: str) -> cst.BaseExpression:
  """Parses a dotted path, falling back to the short name for unreachable (local) classes."""
  try:
    return cst.parse_expression(path)
  except cst.ParserSyntaxError:
    return cst.Name(short_name)


def render_literal(value: Any) -> cst.BaseExpression:
  """
  Renders a constant as a LibCST expression.

  NumPy scalars are wrapped in their constructor (``numpy.int16(5)``) so that
  fixed-width types survive a round trip through source code. Non-finite
  floats use ``float('nan')`` style calls.

  Args:
      value: The constant.

  Returns:
      cst.BaseExpression: The expression node.

  Raises:
      ValueError: If the value has no source representation.
  """
  if isinstance(value, np.generic):
    ctor = cst.parse_expression(f"numpy.{type(value).__name__}")
    return cst.Call(func=ctor, args=[cst.Arg(value=render_literal(value.item()))])

  if isinstance(value, float) and not math.isfinite(value):
    return cst.parse_expression(f"float({str(value)!r})")

  try:
    return cst.parse_expression(repr(value))
  except cst.ParserSyntaxError as e:
    raise ValueError(f"Cannot render literal {value!r} as source code") from e
