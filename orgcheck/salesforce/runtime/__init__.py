"""Runtime orchestration: quota watchdog and the batching engines."""

from .calls import GuardedCaller
from .composite import CompositeFetcher, build_composite_batches
from .dependencies import DependencyEnricher, dependency_query
from .metadata import MetadataReader
from .queries import QueryEngine
from .watchdog import QuotaWatchdog

__all__ = [
    "QuotaWatchdog",
    "GuardedCaller",
    "QueryEngine",
    "DependencyEnricher",
    "dependency_query",
    "MetadataReader",
    "CompositeFetcher",
    "build_composite_batches",
]
