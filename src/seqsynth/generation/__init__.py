"""
Generation Package.

Demand-driven input creation: object pools, producer search, sequence
synthesis and the orchestrator tying them together.
"""

from seqsynth.generation.demand import DemandDrivenInputCreator
from seqsynth.generation.pool import ObjectPool
from seqsynth.generation.producers import ProducerSearch, find_producers
from seqsynth.generation.synthesizer import SequenceSynthesizer

__all__ = [
  "DemandDrivenInputCreator",
  "ObjectPool",
  "ProducerSearch",
  "SequenceSynthesizer",
  "find_producers",
]
