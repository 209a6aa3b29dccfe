"""
Fuzzer Package.

Perturbs already-synthesized primitive and string values by appending
statements to their sequences. Exposes the `ValueFuzzer` engine, its
`FuzzResult`, and the `TextBuilder` runtime type used for string mutations.
"""

from seqsynth.fuzzing.core import FuzzResult, ValueFuzzer, fuzz
from seqsynth.fuzzing.text_builder import TextBuilder

__all__ = ["FuzzResult", "TextBuilder", "ValueFuzzer", "fuzz"]
