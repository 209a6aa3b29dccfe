"""
Sequence Execution.

Defines the per-statement `ExecutionOutcome` variants and the
`SequenceExecutor` adapter consumed by the demand-driven orchestrator.

`ReflectiveExecutor` is the default in-process implementation: it evaluates
statements in order, feeding earlier results into later calls. An exception
raised by the code under test is captured as `ExceptionalExecution` for that
statement, and every later statement is reported as `NotExecuted`.
Sandboxing and isolation are the responsibility of alternative executors.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional

from seqsynth.core.sequence import Sequence

logger = logging.getLogger(__name__)


class ExecutionOutcome:
  """Base class of the outcome of running one statement."""


@dataclass(frozen=True)
class NormalExecution(ExecutionOutcome):
  """The statement returned normally with `value`."""

  value: Any


@dataclass(frozen=True)
class ExceptionalExecution(ExecutionOutcome):
  """The statement raised `error`."""

  error: BaseException


@dataclass(frozen=True)
class NotExecuted(ExecutionOutcome):
  """The statement was skipped because an earlier statement failed."""


class SequenceExecutor(ABC):
  """
  Abstract executor interface.

  Implementations must return exactly one outcome per statement.
  """

  @abstractmethod
  def execute(self, sequence: Sequence) -> List[ExecutionOutcome]:
    """
    Runs a sequence.

    Args:
        sequence: The sequence to run.

    Returns:
        List[ExecutionOutcome]: One outcome per statement, in order.
    """


class ReflectiveExecutor(SequenceExecutor):
  """
  Executes sequences in the current process by invoking each operation directly.
  """

  def execute(self, sequence: Sequence) -> List[ExecutionOutcome]:
    values: List[Any] = []
    outcomes: List[ExecutionOutcome] = []

    for index, stmt in enumerate(sequence):
      try:
        value = stmt.operation.invoke(*(values[i] for i in stmt.inputs))
      except Exception as e:
        logger.debug("Statement %d (%s) raised %r", index, stmt.operation, e)
        outcomes.append(ExceptionalExecution(e))
        outcomes.extend(NotExecuted() for _ in range(index + 1, len(sequence)))
        break
      values.append(value)
      outcomes.append(NormalExecution(value))

    return outcomes


def final_value(outcomes: List[ExecutionOutcome]) -> Optional[Any]:
  """
  Extracts the value produced by the last statement.

  Args:
      outcomes: Outcomes returned by an executor.

  Returns:
      The last value if the final statement executed normally, else None.
  """
  if not outcomes:
    return None
  last = outcomes[-1]
  if isinstance(last, NormalExecution):
    return last.value
  return None
