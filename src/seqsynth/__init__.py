"""
seqsynth Package.

Demand-driven input synthesis and value fuzzing for feedback-directed test
generation.

When a test generator needs a value of some type and has none, seqsynth finds
the constructors and methods that can produce it, builds call sequences for
them from values already in a pool, executes those sequences, and pools the
results. Separately, it perturbs primitive and string values by appending
statements to the sequences that built them.

Usage
-----

Creating Inputs on Demand
^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import seqsynth as ss

    pool = ss.ObjectPool()
    pool.put(ss.Sequence.for_literal(3), 3)

    sequences = ss.create_inputs_for_type(pool, ss.Type.for_class(Point), seed=0)
    print(sequences[0].to_code())
    # int0 = 3
    # int1 = 3
    # point2 = shapes.Point(int0, int1)

Fuzzing a Value
^^^^^^^^^^^^^^^

.. code-block:: python

    result = ss.fuzz(ss.Sequence.for_literal(5), seed=0)
    print(result.appended)  # 2 (noise literal, sum call)
"""

from typing import List, Optional

from seqsynth.catalog import OperationCatalog, ReflectiveCatalog, TableCatalog
from seqsynth.config import SynthesisConfig
from seqsynth.core import (
  ExceptionalExecution,
  ExecutionOutcome,
  NormalExecution,
  NotExecuted,
  ReflectiveExecutor,
  Sequence,
  SequenceExecutor,
  Statement,
  Type,
  TypedOperation,
  Variable,
)
from seqsynth.fuzzing import FuzzResult, TextBuilder, ValueFuzzer
from seqsynth.generation import DemandDrivenInputCreator, ObjectPool, ProducerSearch, SequenceSynthesizer
from seqsynth.randomness import Randomness

__version__ = "0.1.0"


def create_inputs_for_type(
  main_pool: ObjectPool,
  target: Type,
  secondary_pool: Optional[ObjectPool] = None,
  catalog: Optional[OperationCatalog] = None,
  seed: Optional[int] = None,
  config: Optional[SynthesisConfig] = None,
) -> List[Sequence]:
  """
  Creates sequences producing `target` from the values available in the pools.

  This is a convenience wrapper around `DemandDrivenInputCreator`. Keep a
  creator instance around when making repeated requests, so the random
  stream continues instead of restarting.

  Args:
      main_pool (ObjectPool): Values built by the outer generator.
      target (Type): The type a value is needed for.
      secondary_pool (ObjectPool, optional): Destination for new values. If
          omitted, new values are stored in `main_pool`.
      catalog (OperationCatalog, optional): Operation source. Defaults to
          runtime introspection (`ReflectiveCatalog`).
      seed (int, optional): Seed overriding `config.seed`.
      config (SynthesisConfig, optional): Settings. Defaults to `SynthesisConfig()`.

  Returns:
      List[Sequence]: Sequences producing `target` (may be empty).
  """
  config = config or SynthesisConfig()
  if seed is not None:
    config = config.model_copy(update={"seed": seed})
  creator = DemandDrivenInputCreator(catalog or ReflectiveCatalog(), config=config)
  return creator.create_inputs_for_type(main_pool, target, secondary_pool)


def fuzz(sequence: Sequence, seed: Optional[int] = None, config: Optional[SynthesisConfig] = None) -> FuzzResult:
  """
  Appends statements computing a perturbed variant of the sequence's value.

  Args:
      sequence (Sequence): The sequence to fuzz.
      seed (int, optional): Seed overriding `config.seed`.
      config (SynthesisConfig, optional): Settings (noise standard deviation).

  Returns:
      FuzzResult: ``(sequence, appended)``. Unsupported values come back unchanged with 0.
  """
  config = config or SynthesisConfig()
  if seed is not None:
    config = config.model_copy(update={"seed": seed})
  return ValueFuzzer.from_config(config).fuzz(sequence)


__all__ = [
  "DemandDrivenInputCreator",
  "ExceptionalExecution",
  "ExecutionOutcome",
  "FuzzResult",
  "NormalExecution",
  "NotExecuted",
  "ObjectPool",
  "OperationCatalog",
  "ProducerSearch",
  "Randomness",
  "ReflectiveCatalog",
  "ReflectiveExecutor",
  "Sequence",
  "SequenceExecutor",
  "SequenceSynthesizer",
  "Statement",
  "SynthesisConfig",
  "TableCatalog",
  "TextBuilder",
  "Type",
  "TypedOperation",
  "ValueFuzzer",
  "Variable",
  "__version__",
  "create_inputs_for_type",
  "fuzz",
]
