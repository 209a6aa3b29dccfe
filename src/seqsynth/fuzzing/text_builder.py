"""
Mutable Text Builder.

Python strings are immutable, so string fuzzing constructs a `TextBuilder`
from the original value, mutates it, and converts it back with `to_string`.
Mutating methods return the builder itself so calls can be chained (and so
each mutation is a statement producing a builder).

Index rules: `insert` accepts ``0 <= index <= len``; `delete_char_at` requires
``0 <= index < len``; `replace` requires ``0 <= start <= len`` and
``start <= end`` (an `end` past the text is clipped); `substring` requires
``0 <= start <= end <= len``. Violations raise `IndexError`.
"""


class TextBuilder:
  """A growable, mutable sequence of characters."""

  def __init__(self, text: str = "") -> None:
    self._chars = list(text)

  def insert(self, index: int, char: str) -> "TextBuilder":
    if not 0 <= index <= len(self._chars):
      raise IndexError(f"insert index {index} out of range for length {len(self._chars)}")
    self._chars[index:index] = list(char)
    return self

  def delete_char_at(self, index: int) -> "TextBuilder":
    if not 0 <= index < len(self._chars):
      raise IndexError(f"delete index {index} out of range for length {len(self._chars)}")
    del self._chars[index]
    return self

  def replace(self, start: int, end: int, text: str) -> "TextBuilder":
    if not 0 <= start <= len(self._chars) or start > end:
      raise IndexError(f"replace span [{start}, {end}) invalid for length {len(self._chars)}")
    self._chars[start : min(end, len(self._chars))] = list(text)
    return self

  def substring(self, start: int, end: int) -> str:
    if not 0 <= start <= end <= len(self._chars):
      raise IndexError(f"substring span [{start}, {end}) invalid for length {len(self._chars)}")
    return "".join(self._chars[start:end])

  def to_string(self) -> str:
    return "".join(self._chars)

  def __len__(self) -> int:
    return len(self._chars)

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"TextBuilder({self.to_string()!r})"
