"""
Core Package.

Contains the value model shared by search, synthesis and fuzzing:
- Types and primitive constants
- Typed operations
- Sequences, statements and variables
- Execution outcomes and executors
- Source rendering
"""

from seqsynth.core.execution import (
  ExceptionalExecution,
  ExecutionOutcome,
  NormalExecution,
  NotExecuted,
  ReflectiveExecutor,
  SequenceExecutor,
)
from seqsynth.core.operations import TypedOperation
from seqsynth.core.sequence import Sequence, Statement, Variable
from seqsynth.core.types import Type

__all__ = [
  "ExceptionalExecution",
  "ExecutionOutcome",
  "NormalExecution",
  "NotExecuted",
  "ReflectiveExecutor",
  "Sequence",
  "SequenceExecutor",
  "Statement",
  "Type",
  "TypedOperation",
  "Variable",
]
