"""
Loader de la configuración declarativa (YAML) que consume la sesión local.
Carga YAML y lo convierte a modelos Pydantic.

Formato:

    provider:
      bypass_indestructible: true
    resources:
      guard:
        type: util_indestructible
        allow_destroy: false
"""

from pathlib import Path
from typing import Any, Dict, Optional

import pydantic
import yaml
from pydantic import BaseModel, Field

from tfutil.core.errors import ConfigError


class ResourceBlock(BaseModel):
    """Bloque de recurso: tipo + atributos (el resto de claves)"""
    type: str = Field(..., description="Tipo de recurso (ej: util_indestructible)")
    attributes: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_yaml(cls, data: Any) -> "ResourceBlock":
        if not isinstance(data, dict):
            raise ConfigError(f"Cada recurso debe ser un mapa, no {type(data).__name__}")
        attrs = dict(data)
        type_name = attrs.pop("type", None)
        return cls(type=type_name, attributes=attrs)

    def address(self, name: str) -> str:
        return f"{self.type}.{name}"


class SessionConfig(BaseModel):
    """Configuración completa: bloque provider + recursos por nombre"""
    provider: Optional[Dict[str, Any]] = Field(None, description="Atributos del bloque provider")
    resources: Dict[str, ResourceBlock] = Field(default_factory=dict)

    def desired(self) -> Dict[str, ResourceBlock]:
        """Recursos indexados por dirección (tipo.nombre), en orden de declaración"""
        return {block.address(name): block for name, block in self.resources.items()}


def parse_config(data: Any) -> SessionConfig:
    """Valida el contenido ya parseado de un archivo de configuración."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("La configuración debe ser un mapa con 'provider' y/o 'resources'")

    unknown = set(data) - {"provider", "resources"}
    if unknown:
        raise ConfigError(f"Claves desconocidas en la configuración: {', '.join(sorted(unknown))}")

    resources = data.get("resources") or {}
    if not isinstance(resources, dict):
        raise ConfigError("'resources' debe ser un mapa nombre → bloque")

    try:
        return SessionConfig(
            provider=data.get("provider"),
            resources={name: ResourceBlock.from_yaml(block) for name, block in resources.items()},
        )
    except pydantic.ValidationError as e:
        raise ConfigError(f"Configuración inválida: {e}") from e


def load_config(path: Path) -> SessionConfig:
    """Carga y valida un archivo YAML de configuración"""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"No existe el archivo de configuración: {path}")
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML inválido en {path}: {e}") from e
    return parse_config(data)
