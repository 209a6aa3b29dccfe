"""
Sample classes under test.

Small geometry and registry types exercising constructors, producer methods,
factories, failing constructors and classes the reflective catalog must skip.
"""

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Point:
  x: int
  y: int

  def translated(self, dx: int) -> "Point":
    return Point(self.x + dx, self.y)

  def norm_squared(self) -> int:
    return self.x * self.x + self.y * self.y


class Segment:
  def __init__(self, start: Point, end: Point) -> None:
    self.start = start
    self.end = end

  def length_squared(self) -> int:
    dx = self.end.x - self.start.x
    dy = self.end.y - self.start.y
    return dx * dx + dy * dy


class Fragile:
  """Rejects negative sizes."""

  def __init__(self, size: int) -> None:
    if size < 0:
      raise ValueError(f"size must be non-negative, got {size}")
    self.size = size


class Registry:
  def __init__(self) -> None:
    self.names = []

  @staticmethod
  def empty() -> "Registry":
    return Registry()

  @classmethod
  def of(cls, name: str) -> "Registry":
    registry = cls()
    registry.names.append(name)
    return registry

  def register(self, name: str) -> None:
    self.names.append(name)

  def lookup(self, name: str, default: Optional[int] = None) -> Optional[int]:
    return self.names.index(name) if name in self.names else default

  def _hidden(self) -> "Registry":
    return self

  @property
  def size(self) -> int:
    return len(self.names)


class Circle:
  def __init__(self, radius: float) -> None:
    self.radius = radius


class Scaled:
  """Accepts any integral factor (int, numpy integers)."""

  def __init__(self, factor: numbers.Integral) -> None:
    self.factor = factor


class Box:
  """Stores its content without checking it."""

  def __init__(self, content: int) -> None:
    self.content = content


class Shape(ABC):
  @abstractmethod
  def area(self) -> float:
    pass


class Untyped:
  def __init__(self, value):
    self.value = value

  def scaled(self, factor) -> "Untyped":
    return Untyped(self.value * factor)


class Labelled:
  def __init__(self, label: str, *, strict: bool) -> None:
    self.label = label
    self.strict = strict


class Counter:
  def __init__(self, start: int, step=1) -> None:
    self.value = start
    self.step = step

  def increment(self) -> None:
    self.value += self.step
