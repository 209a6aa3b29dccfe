"""
Catalog Package.

Provides the operation catalog abstraction and its implementations.
"""

from seqsynth.catalog.base import OperationCatalog, TableCatalog
from seqsynth.catalog.reflective import ReflectiveCatalog

__all__ = ["OperationCatalog", "ReflectiveCatalog", "TableCatalog"]
