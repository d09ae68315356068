"""
Resolución de la configuración del provider.

- ProviderConfig: valor inmutable compartido (solo lectura) por todas las instancias.
- resolve_provider_config(): precedencia atributo explícito > variable de entorno > False.

Se resuelve una sola vez, en el Configure del provider, antes de cualquier
llamada a recursos; después solo se lee.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tfutil.core.guard.policy import BYPASS_ENV_VAR


@dataclass(frozen=True)
class ProviderConfig:
    """Configuración resuelta del provider"""
    bypass_indestructible: bool = False


def bypass_from_env(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Solo el valor exacto "true" activa el bypass por defecto."""
    env = os.environ if environ is None else environ
    return env.get(BYPASS_ENV_VAR, "") == "true"


def resolve_provider_config(
    bypass_indestructible: Optional[bool] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProviderConfig:
    """
    Resuelve ProviderConfig.

    Args:
        bypass_indestructible: Atributo del bloque provider (None = no configurado)
        environ: Entorno a consultar (por defecto os.environ)

    Returns:
        ProviderConfig inmutable
    """
    bypass = bypass_from_env(environ)
    if bypass_indestructible is not None:
        bypass = bypass_indestructible
    return ProviderConfig(bypass_indestructible=bypass)
