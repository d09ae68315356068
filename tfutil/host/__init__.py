"""
Host: sesión local que despacha los verbos de los recursos y persiste el estado.
"""

from tfutil.host.config import SessionConfig, ResourceBlock, load_config, parse_config
from tfutil.host.session import ProviderSession, ApplyReport, PlannedChange, ResourceOutcome

__all__ = [
    "SessionConfig",
    "ResourceBlock",
    "load_config",
    "parse_config",
    "ProviderSession",
    "ApplyReport",
    "PlannedChange",
    "ResourceOutcome",
]
