"""
Core: lógica de negocio pura.

ENFORCEMENT (arquitectura limpia):
- Este paquete NO debe importar: tfutil.cli, tfutil.host ni tfutil.providers.*.
- Permitido: typing, dataclasses, pydantic, tfutil.core.* (errors, diagnostics, guard,
  runtime, infra/contracts).
- Los providers, el host y la CLI importan desde core; nunca al revés.
"""

from tfutil.core.errors import UtilError, ValidationError, ConfigError, StateError

__all__ = ["UtilError", "ValidationError", "ConfigError", "StateError"]
