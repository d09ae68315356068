"""
Declaración de schemas: atributos, defaults y modificadores de plan.

Metadatos estáticos que el orquestador lee antes de planificar. La única
lógica aquí es aplicar defaults y evaluar los modificadores de reemplazo.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


def values_equal(a: Any, b: Any) -> bool:
    """Igualdad estricta por tipo: True no equivale a 1, ni False a 0, tampoco anidados."""
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    return a == b


class AttributeType(str, Enum):
    """Tipo de un atributo"""
    BOOL = "bool"
    STRING = "string"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class RequiresReplaceIf:
    """
    Modificador de plan: si el valor propuesto difiere del persistido y
    predicate(state_value, plan_value) es True, la instancia se reemplaza
    (destroy + create) en lugar de actualizarse.
    """
    predicate: Callable[[Any, Any], bool]
    description: str = ""

    def requires_replace(self, state_value: Any, plan_value: Any) -> bool:
        if values_equal(state_value, plan_value):
            return False
        return bool(self.predicate(state_value, plan_value))


@dataclass(frozen=True)
class Attribute:
    """Atributo de un schema"""
    name: str
    type: AttributeType
    description: str = ""
    optional: bool = False
    required: bool = False
    computed: bool = False
    default: Any = None
    plan_modifiers: tuple = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "description": self.description,
            "optional": self.optional,
            "required": self.required,
            "computed": self.computed,
        }
        if self.default is not None:
            data["default"] = self.default
        if self.plan_modifiers:
            data["requires_replace_if"] = [m.description for m in self.plan_modifiers]
        return data


@dataclass(frozen=True)
class Schema:
    """Schema de un recurso o provider"""
    attributes: List[Attribute] = field(default_factory=list)
    description: str = ""

    def attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    def names(self) -> List[str]:
        return [a.name for a in self.attributes]

    def apply_defaults(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Completa atributos ausentes o nulos con su default (solo si tienen uno)."""
        out = dict(values)
        for attr in self.attributes:
            if out.get(attr.name) is None:
                out[attr.name] = attr.default
        return out

    def requires_replace(self, state: Optional[Dict[str, Any]], plan: Dict[str, Any]) -> List[str]:
        """Atributos cuyo cambio fuerza reemplazo. Sin estado previo nunca hay reemplazo."""
        if state is None:
            return []
        paths: List[str] = []
        for attr in self.attributes:
            for modifier in attr.plan_modifiers:
                if modifier.requires_replace(state.get(attr.name), plan.get(attr.name)):
                    paths.append(attr.name)
                    break
        return paths

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "attributes": {a.name: a.to_dict() for a in self.attributes},
        }
