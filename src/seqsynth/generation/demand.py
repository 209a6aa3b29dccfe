"""
Demand-Driven Input Creation.

A feedback-directed generator normally builds inputs bottom-up from values it
already has. When it needs a value of type ``T`` and none exists, this module
works top-down instead:

1.  Find every operation that can (transitively) produce ``T``
    (`ProducerSearch`).
2.  For each producer, in discovery order, synthesize a sequence from pooled
    values (`SequenceSynthesizer`), execute it, and store a normal, non-None
    result in the secondary pool.
3.  Return the secondary pool's sequences of type ``T``.

Each producer is attempted exactly once per call. Producers discovered for
intermediate types populate the pool for later calls, so a type that needs a
chain of constructions may become available only after repeated requests.
An empty result means "still unsatisfiable this round".

Pools: the main pool is queried first, then the secondary pool. Passing no
secondary pool (or setting ``merge_pools``) makes the main pool both source
and destination.
"""

import logging
from typing import List, Optional

from seqsynth.catalog.base import OperationCatalog
from seqsynth.config import SynthesisConfig
from seqsynth.core.execution import ReflectiveExecutor, SequenceExecutor
from seqsynth.core.sequence import Sequence
from seqsynth.core.types import Type
from seqsynth.generation.pool import ObjectPool
from seqsynth.generation.producers import ProducerSearch
from seqsynth.generation.synthesizer import SequenceSynthesizer
from seqsynth.randomness import Randomness

logger = logging.getLogger(__name__)


class DemandDrivenInputCreator:
  """
  Orchestrates producer search, synthesis, execution and pooling.

  Attributes:
      catalog (OperationCatalog): Operation source and compatibility relation.
      config (SynthesisConfig): Active configuration.
      randomness (Randomness): Shared random source.
      executor (SequenceExecutor): Runs synthesized sequences.
      search (ProducerSearch): Producer discovery.
      synthesizer (SequenceSynthesizer): Sequence assembly.
  """

  def __init__(
    self,
    catalog: OperationCatalog,
    executor: Optional[SequenceExecutor] = None,
    randomness: Optional[Randomness] = None,
    config: Optional[SynthesisConfig] = None,
  ) -> None:
    """
    Initializes the orchestrator.

    Args:
        catalog: Operation catalog of the system under test.
        executor: Sequence executor. Defaults to in-process reflective execution.
        randomness: Shared random source. Defaults to one seeded from `config`.
        config: Configuration. Defaults to `SynthesisConfig()`.
    """
    self.catalog = catalog
    self.config = config or SynthesisConfig()
    self.randomness = randomness or self.config.make_randomness()
    self.executor = executor or ReflectiveExecutor()
    self.search = ProducerSearch.from_config(catalog, self.config)
    self.synthesizer = SequenceSynthesizer(self.randomness, catalog.is_compatible)

  def create_inputs_for_type(
    self,
    main_pool: ObjectPool,
    target: Type,
    secondary_pool: Optional[ObjectPool] = None,
  ) -> List[Sequence]:
    """
    Creates fresh sequences producing `target`.

    Args:
        main_pool: Pool of values built by the outer generator.
        target: The type a value is needed for.
        secondary_pool: Pool receiving demand-driven values.

    Returns:
        List[Sequence]: Sequences of the destination pool producing `target` (may be empty).
    """
    if secondary_pool is None or self.config.merge_pools:
      destination = main_pool
      sources = [main_pool]
    else:
      destination = secondary_pool
      sources = [main_pool, secondary_pool]

    producers = self.search.find(target)
    stored = 0
    for producer in producers:
      sequence = self.synthesizer.synthesize(producer, sources)
      if sequence is None:
        continue
      if destination.add_sequence(sequence, self.executor) is not None:
        stored += 1

    result = destination.sequences_of_type(target, self.catalog.is_compatible)
    logger.debug(
      "Demand for %s: %d producers, %d values stored, %d sequences available",
      target,
      len(producers),
      stored,
      len(result),
    )
    return result
