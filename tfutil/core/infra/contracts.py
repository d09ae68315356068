"""
Contratos entre el orquestador y los recursos/providers.

El core solo define interfaces, requests y responses; la implementación vive
en tfutil/providers/*. Los recursos declaran conformidad con estos Protocol
(ver las aserciones al final de cada módulo de recurso).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from tfutil.core.diagnostics import Diagnostics
from tfutil.core.runtime.state import StateDiff

Attributes = Dict[str, Any]


class PlanResult:
    """Resultado de un plan (qué se aplicaría) sin ejecutar."""
    def __init__(
        self,
        action: str,
        planned_state: Optional[Attributes],
        diffs: List[StateDiff],
        requires_replace: Optional[List[str]] = None,
        summary: str = ""
    ):
        self.action = action  # "create", "update", "replace", "delete", "noop"
        self.planned_state = planned_state
        self.diffs = diffs
        self.requires_replace = requires_replace or []
        self.summary = summary
        self.diagnostics = Diagnostics()


# --- Requests / responses ------------------------------------------------

@dataclass
class ConfigureRequest:
    """provider_data: lo que el provider entrega a cada recurso (slot sin tipo)."""
    provider_data: Any = None


@dataclass
class ConfigureResponse:
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ProviderConfigureRequest:
    """config: atributos del bloque provider tal como llegan del orquestador."""
    config: Any = None


@dataclass
class ProviderConfigureResponse:
    resource_data: Any = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class CreateRequest:
    plan: Any


@dataclass
class CreateResponse:
    state: Optional[Attributes] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ReadRequest:
    state: Optional[Attributes]


@dataclass
class ReadResponse:
    state: Optional[Attributes] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class UpdateRequest:
    plan: Any
    state: Optional[Attributes] = None


@dataclass
class UpdateResponse:
    state: Optional[Attributes] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class DeleteRequest:
    state: Any


@dataclass
class DeleteResponse:
    """state queda en None cuando la destrucción procede."""
    state: Optional[Attributes] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ModifyPlanRequest:
    """state None = la instancia aún no existe; plan None = destrucción."""
    resource_id: str
    plan: Optional[Attributes]
    state: Optional[Attributes] = None


# --- Protocolos por rol --------------------------------------------------

@runtime_checkable
class Resource(Protocol):
    """Contrato mínimo de un recurso: metadatos, schema y los cuatro verbos."""
    def metadata(self, provider_type_name: str) -> str:
        ...

    def schema(self) -> Any:
        ...

    def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        ...

    def read(self, req: ReadRequest, resp: ReadResponse) -> None:
        ...

    def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        ...

    def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        ...


@runtime_checkable
class ResourceWithConfigure(Resource, Protocol):
    """Recurso que recibe datos del provider en Configure."""
    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        ...


@runtime_checkable
class ResourceWithModifyPlan(Resource, Protocol):
    """Recurso que ajusta el plan (defaults, reemplazo forzado)."""
    def modify_plan(self, req: ModifyPlanRequest) -> PlanResult:
        ...


@runtime_checkable
class Provider(Protocol):
    """
    Contrato de un provider: nombre, schema, configuración y catálogo de
    recursos. No ejecuta lógica de recursos directamente.
    """
    def metadata(self) -> Dict[str, str]:
        ...

    def schema(self) -> Any:
        ...

    def configure(self, req: ProviderConfigureRequest, resp: ProviderConfigureResponse) -> None:
        ...

    def resources(self) -> List[Callable[[], Resource]]:
        ...

    def data_sources(self) -> List[Callable[[], Any]]:
        ...

    def functions(self) -> List[Callable[[], Any]]:
        ...
