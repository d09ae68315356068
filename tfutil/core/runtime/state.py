"""
Contratos de estado (State): lectura/escritura del estado persistido.

El core no decide cuándo se escribe; el host (sesión/CLI) persiste o elimina
lo que devuelven los verbos del recurso. Aquí viven los protocolos, la noción
de diff y dos stores concretos (memoria y archivo JSON).
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from tfutil.core.errors import StateError

STATE_FORMAT_VERSION = 1


class StateDiff:
    """Diferencia entre el valor propuesto (desired) y el persistido (actual) de un atributo."""
    def __init__(
        self,
        resource_id: str,
        field: str,
        desired: Any,
        actual: Any,
        severity: str = "info"
    ):
        self.resource_id = resource_id
        self.field = field
        self.desired = desired
        self.actual = actual
        self.severity = severity  # "error", "warning", "info"

    def __repr__(self) -> str:
        return f"StateDiff({self.resource_id}.{self.field}: {self.actual!r} -> {self.desired!r})"


class StateReader(Protocol):
    """Protocolo: quien lee el estado persistido."""
    def get(self, address: str) -> Optional[Dict[str, Any]]:
        ...

    def addresses(self) -> List[str]:
        ...


class StateWriter(Protocol):
    """Protocolo: quien persiste o elimina el estado de una instancia."""
    def put(self, address: str, type_name: str, attributes: Dict[str, Any]) -> None:
        ...

    def remove(self, address: str) -> None:
        ...


class StateStore(StateReader, StateWriter, Protocol):
    """Lectura + escritura."""
    ...


class MemoryStateStore:
    """Store en memoria; conserva el orden de creación."""

    def __init__(self, resources: Optional[Dict[str, Dict[str, Any]]] = None):
        self._resources: Dict[str, Dict[str, Any]] = copy.deepcopy(resources or {})

    def get(self, address: str) -> Optional[Dict[str, Any]]:
        record = self._resources.get(address)
        return copy.deepcopy(record) if record is not None else None

    def addresses(self) -> List[str]:
        return list(self._resources.keys())

    def put(self, address: str, type_name: str, attributes: Dict[str, Any]) -> None:
        self._resources[address] = {"type": type_name, "attributes": copy.deepcopy(attributes)}

    def remove(self, address: str) -> None:
        self._resources.pop(address, None)

    def snapshot(self) -> Dict[str, Any]:
        return {"version": STATE_FORMAT_VERSION, "resources": copy.deepcopy(self._resources)}


class JsonStateStore(MemoryStateStore):
    """
    Store respaldado por un archivo JSON.
    Se carga al construir y se reescribe completo en cada put/remove.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StateError(f"No se pudo leer el estado {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("resources", {}), dict):
            raise StateError(f"Formato de estado inválido en {self.path}")
        version = data.get("version", STATE_FORMAT_VERSION)
        if version != STATE_FORMAT_VERSION:
            raise StateError(f"Versión de estado no soportada: {version}")
        return data.get("resources", {})

    def _save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(self.snapshot(), f, indent=2)
                f.write("\n")
        except OSError as e:
            raise StateError(f"No se pudo escribir el estado {self.path}: {e}") from e

    def put(self, address: str, type_name: str, attributes: Dict[str, Any]) -> None:
        super().put(address, type_name, attributes)
        self._save()

    def remove(self, address: str) -> None:
        if address not in self._resources:
            return
        super().remove(address)
        self._save()
