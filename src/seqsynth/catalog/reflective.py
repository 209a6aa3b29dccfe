"""
Reflective Operation Catalog.

Discovers operations from live Python classes via runtime introspection
(`inspect` and `typing.get_type_hints`).

Rules:

1.  **Accessibility**: names starting with ``_`` are skipped, as are abstract
    classes' constructors.
2.  **Constructors**: the class signature (``__init__`` minus ``self``).
3.  **Methods**: plain functions become instance methods (receiver first),
    ``staticmethod`` / ``classmethod`` members become receiver-less calls.
    Properties and other descriptors are ignored.
4.  **Signatures**: every required positional parameter must carry a
    resolvable annotation, otherwise the callable is skipped. Trailing
    unannotated parameters with defaults are left to their defaults.
    ``Optional[X]`` resolves to ``X`` and generic aliases to their origin.
    Methods without a return annotation are skipped.
"""

import inspect
import logging
import types
import typing
from typing import Any, Callable, Dict, List, Optional

from seqsynth.catalog.base import OperationCatalog
from seqsynth.core.operations import TypedOperation
from seqsynth.core.types import OBJECT, VOID, NoneType, Type

logger = logging.getLogger(__name__)

_SELF = getattr(typing, "Self", None)
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class ReflectiveCatalog(OperationCatalog):
  """
  Catalog that introspects runtime classes.

  Attributes:
      _cache (Dict[Type, List[TypedOperation]]): Memoized results per type.
  """

  def __init__(self) -> None:
    self._cache: Dict[Type, List[TypedOperation]] = {}

  def operations_for(self, type_: Type) -> List[TypedOperation]:
    if type_.primitive or type_.is_void:
      return []
    if type_ not in self._cache:
      self._cache[type_] = self._discover(type_)
    return list(self._cache[type_])

  def _discover(self, type_: Type) -> List[TypedOperation]:
    cls = type_.runtime_class
    operations: List[TypedOperation] = []

    ctor = self._constructor(type_)
    if ctor is not None:
      operations.append(ctor)

    for name in sorted(dir(cls)):
      if name.startswith("_"):
        continue
      try:
        static_attr = inspect.getattr_static(cls, name)
      except AttributeError:
        continue
      op = self._method(type_, name, static_attr)
      if op is not None:
        operations.append(op)

    logger.debug("Discovered %d operations on %s", len(operations), type_)
    return operations

  def _constructor(self, type_: Type) -> Optional[TypedOperation]:
    cls = type_.runtime_class
    if inspect.isabstract(cls):
      return None
    try:
      signature = inspect.signature(cls)
    except (TypeError, ValueError):
      logger.debug("No introspectable constructor on %s", type_)
      return None

    hints = _type_hints(cls.__init__)
    if not hints:
      # dataclass-style classes annotate fields on the class body
      hints = _type_hints(cls)
    params = _parameter_types(signature, hints, owner=type_)
    if params is None:
      return None
    return TypedOperation.constructor(cls, params, output_type=type_)

  def _method(self, type_: Type, name: str, static_attr: Any) -> Optional[TypedOperation]:
    cls = type_.runtime_class
    if isinstance(static_attr, (staticmethod, classmethod)):
      func = getattr(cls, name)
      receiver = False
    elif inspect.isfunction(static_attr):
      func = static_attr
      receiver = True
    else:
      return None

    try:
      signature = inspect.signature(func)
    except (TypeError, ValueError):
      return None

    hints = _type_hints(func)
    if "return" not in hints:
      return None
    output = _annotation_to_type(hints["return"], owner=type_)
    if output is None:
      return None

    if receiver:
      parameters = list(signature.parameters.values())[1:]
      params = _parameter_types(signature.replace(parameters=parameters), hints, owner=type_)
      if params is None:
        return None
      return TypedOperation.method(type_, name, func, params, output)

    params = _parameter_types(signature, hints, owner=type_)
    if params is None:
      return None
    return TypedOperation.static(f"{type_.qualified_name}.{name}", func, params, output, declaring_type=type_)


def _type_hints(obj: Callable[..., Any]) -> Dict[str, Any]:
  try:
    return typing.get_type_hints(obj)
  except Exception as e:
    # Unresolvable forward references or C-level callables.
    logger.debug("Cannot resolve annotations of %r: %s", obj, e)
    return {}


def _parameter_types(signature: inspect.Signature, hints: Dict[str, Any], owner: Type) -> Optional[List[Type]]:
  """
  Resolves positional parameter types, or None if the callable is unusable.
  """
  resolved_types: List[Type] = []
  for param in signature.parameters.values():
    if param.kind in _POSITIONAL:
      if param.name not in hints:
        if param.default is inspect.Parameter.empty:
          return None
        break
      resolved = _annotation_to_type(hints[param.name], owner)
      if resolved is None or resolved.is_void:
        return None
      resolved_types.append(resolved)
    elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
      return None
  return resolved_types


def _annotation_to_type(annotation: Any, owner: Type) -> Optional[Type]:
  """
  Maps a resolved annotation to a `Type`, or None if unsupported.
  """
  if annotation is None or annotation is NoneType:
    return VOID
  if annotation is Any:
    return OBJECT
  if _SELF is not None and annotation is _SELF:
    return owner

  origin = typing.get_origin(annotation)
  if origin is typing.Union or origin is types.UnionType:
    members = [a for a in typing.get_args(annotation) if a is not NoneType]
    if len(members) == 1:
      return _annotation_to_type(members[0], owner)
    return None
  if origin is not None:
    return Type.for_class(origin) if isinstance(origin, type) else None

  if isinstance(annotation, type):
    return Type.for_class(annotation)
  return None
