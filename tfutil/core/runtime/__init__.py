"""
Runtime: configuración resuelta del provider y contratos de estado.
"""

from tfutil.core.runtime.config import ProviderConfig, resolve_provider_config
from tfutil.core.runtime.state import StateDiff, StateStore, MemoryStateStore, JsonStateStore

__all__ = [
    "ProviderConfig",
    "resolve_provider_config",
    "StateDiff",
    "StateStore",
    "MemoryStateStore",
    "JsonStateStore",
]
