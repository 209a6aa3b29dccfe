"""
Synthesis Configuration Store.

Holds the settings threaded through search, synthesis and fuzzing. Values
come from the ``[tool.seqsynth]`` table of the nearest ``pyproject.toml`` and
are overridden by explicit arguments to `SynthesisConfig.load`.

Example::

    [tool.seqsynth]
    seed = 42
    gaussian_stdev = 30.0
    considered_types = ["shapes.Point", "shapes.Segment"]
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from seqsynth.randomness import Randomness
from seqsynth.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_GAUSSIAN_STDEV = 30.0


class SynthesisConfig(BaseModel):
  """
  Configuration container for demand-driven input creation and value fuzzing.
  """

  seed: Optional[int] = Field(None, description="Seed for the shared random source. None means nondeterministic.")
  gaussian_stdev: float = Field(
    DEFAULT_GAUSSIAN_STDEV, description="Standard deviation of the noise added when fuzzing numbers."
  )
  considered_types: List[str] = Field(
    default_factory=list, description="Qualified names of the classes under test (e.g. 'shapes.Point')."
  )
  restrict_to_considered_types: bool = Field(
    False, description="If True, producer search skips reference types outside `considered_types`."
  )
  merge_pools: bool = Field(
    False, description="If True, new values go to the main pool instead of a separate secondary pool."
  )

  @field_validator("gaussian_stdev")
  @classmethod
  def validate_stdev(cls, v: float) -> float:
    """
    Ensures the noise distribution is well defined.

    Args:
        v (float): The configured standard deviation.

    Returns:
        float: The validated value.

    Raises:
        ValueError: If the value is not strictly positive.
    """
    if v <= 0:
      raise ValueError(f"gaussian_stdev must be positive, got {v}")
    return v

  @field_validator("considered_types")
  @classmethod
  def strip_names(cls, v: List[str]) -> List[str]:
    return [name.strip() for name in v if name.strip()]

  def make_randomness(self) -> Randomness:
    """Builds a random source seeded with `seed`."""
    return Randomness(self.seed)

  @classmethod
  def load(
    cls,
    seed: Optional[int] = None,
    gaussian_stdev: Optional[float] = None,
    considered_types: Optional[List[str]] = None,
    restrict_to_considered_types: Optional[bool] = None,
    merge_pools: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "SynthesisConfig":
    """
    Loads configuration from pyproject.toml and applies explicit overrides.

    Args:
        seed (Optional[int]): Override for the random seed.
        gaussian_stdev (Optional[float]): Override for the fuzzing noise.
        considered_types (Optional[List[str]]): Override for the classes under test.
        restrict_to_considered_types (Optional[bool]): Override for search restriction.
        merge_pools (Optional[bool]): Override for the pool policy.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        SynthesisConfig: The fully resolved configuration object.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    overrides = {
      "seed": seed,
      "gaussian_stdev": gaussian_stdev,
      "considered_types": considered_types,
      "restrict_to_considered_types": restrict_to_considered_types,
      "merge_pools": merge_pools,
    }
    merged: Dict[str, Any] = {k: v for k, v in toml_config.items() if k in cls.model_fields}
    merged.update({k: v for k, v in overrides.items() if v is not None})

    return cls(**merged)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the ``[tool.seqsynth]`` table.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {e}")
        return {}, None

      return data.get("tool", {}).get("seqsynth", {}), parent

  return {}, None
