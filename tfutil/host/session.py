"""
Sesión local: hace de orquestador para ejecutar plan/apply/destroy en proceso.

No es el motor de grafos del orquestador real; solo despacha los verbos de
cada recurso en orden (declaración para crear, inverso para destruir) y
persiste o elimina lo que devuelven, igual que haría el host.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tfutil.core.diagnostics import Diagnostics
from tfutil.core.infra.contracts import (
    ConfigureRequest,
    ConfigureResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    ModifyPlanRequest,
    PlanResult,
    Provider,
    ProviderConfigureRequest,
    ProviderConfigureResponse,
    ReadRequest,
    ReadResponse,
    Resource,
    UpdateRequest,
    UpdateResponse,
)
from tfutil.core.runtime.state import StateStore
from tfutil.host.config import ResourceBlock

logger = logging.getLogger(__name__)


@dataclass
class PlannedChange:
    """Cambio planeado para una dirección"""
    address: str
    type_name: str
    result: PlanResult

    @property
    def action(self) -> str:
        return self.result.action


@dataclass
class ResourceOutcome:
    """Resultado de aplicar un cambio a una dirección"""
    address: str
    action: str
    applied: bool
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass
class ApplyReport:
    """Resultado de un apply/destroy completo"""
    outcomes: List[ResourceOutcome] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def add(self, outcome: ResourceOutcome) -> None:
        self.outcomes.append(outcome)
        self.diagnostics.append_all(outcome.diagnostics)

    def has_error(self) -> bool:
        return self.diagnostics.has_error()

    def outcome(self, address: str) -> Optional[ResourceOutcome]:
        for o in self.outcomes:
            if o.address == address:
                return o
        return None


class ProviderSession:
    """Motor de la sesión: provider configurado + store de estado"""

    def __init__(self, provider: Provider, store: StateStore):
        self.provider = provider
        self.store = store
        self.type_prefix = provider.metadata()["type_name"]
        self._provider_data = None
        self._resources: Dict[str, Resource] = {}

    def configure(self, config: Optional[dict] = None) -> Diagnostics:
        """Configura el provider; debe ocurrir antes de cualquier verbo de recurso."""
        resp = ProviderConfigureResponse()
        self.provider.configure(ProviderConfigureRequest(config), resp)
        if not resp.diagnostics.has_error():
            self._provider_data = resp.resource_data
            self._resources.clear()
        return resp.diagnostics

    def resource(self, type_name: str, diagnostics: Diagnostics) -> Optional[Resource]:
        """Instancia (y configura) el recurso para un tipo; None si el tipo no existe."""
        if type_name in self._resources:
            return self._resources[type_name]

        for factory in self.provider.resources():
            candidate = factory()
            if candidate.metadata(self.type_prefix) != type_name:
                continue
            configure = getattr(candidate, "configure", None)
            if configure is not None:
                resp = ConfigureResponse()
                configure(ConfigureRequest(self._provider_data), resp)
                diagnostics.append_all(resp.diagnostics)
                if resp.diagnostics.has_error():
                    return None
            self._resources[type_name] = candidate
            return candidate

        diagnostics.add_error("Unknown Resource Type", f"The provider does not support resource type {type_name!r}.")
        return None

    # --- plan ------------------------------------------------------------

    def plan(self, desired: Dict[str, ResourceBlock]) -> List[PlannedChange]:
        """
        Calcula los cambios para llevar el estado al deseado.

        Direcciones en desired pero no en estado → create; en ambos → update,
        replace o noop; en estado pero no en desired → delete (orden inverso).
        """
        changes: List[PlannedChange] = []
        for address, block in desired.items():
            changes.append(self._plan_one(address, block.type, block.attributes))

        for address in reversed(self.store.addresses()):
            if address in desired:
                continue
            record = self.store.get(address)
            changes.append(self._plan_one(address, record["type"], None))
        return changes

    def _plan_one(self, address: str, type_name: str, attributes: Optional[dict]) -> PlannedChange:
        diagnostics = Diagnostics()
        record = self.store.get(address)
        prior = record["attributes"] if record else None

        resource = self.resource(type_name, diagnostics)
        if resource is None:
            result = PlanResult("noop", None, [], summary=f"{address}: unsupported")
        elif hasattr(resource, "modify_plan"):
            result = resource.modify_plan(ModifyPlanRequest(address, attributes, prior))
        else:
            action = "delete" if attributes is None else ("create" if prior is None else "update")
            result = PlanResult(action, attributes, [])
        result.diagnostics.append_all(diagnostics)
        return PlannedChange(address, type_name, result)

    # --- apply -----------------------------------------------------------

    def apply(self, desired: Dict[str, ResourceBlock]) -> ApplyReport:
        """Planifica y aplica; un error en una dirección no detiene las demás."""
        report = ApplyReport()
        for change in self.plan(desired):
            report.add(self._apply_change(change))
        return report

    def _apply_change(self, change: PlannedChange) -> ResourceOutcome:
        outcome = ResourceOutcome(change.address, change.action, applied=False)
        outcome.diagnostics.append_all(change.result.diagnostics)
        if outcome.diagnostics.has_error():
            return outcome
        if change.action == "noop":
            return outcome

        resource = self.resource(change.type_name, outcome.diagnostics)
        if resource is None:
            return outcome

        record = self.store.get(change.address)
        prior = record["attributes"] if record else None
        planned = change.result.planned_state

        if change.action == "delete":
            outcome.applied = self._delete(resource, change.address, prior, outcome.diagnostics)
        elif change.action == "replace":
            logger.info("%s: replacing (%s)", change.address, ", ".join(change.result.requires_replace))
            if self._delete(resource, change.address, prior, outcome.diagnostics):
                outcome.applied = self._create(resource, change, planned, outcome.diagnostics)
        elif change.action == "create":
            outcome.applied = self._create(resource, change, planned, outcome.diagnostics)
        elif change.action == "update":
            resp = UpdateResponse()
            resource.update(UpdateRequest(planned, prior), resp)
            outcome.diagnostics.append_all(resp.diagnostics)
            if not resp.diagnostics.has_error():
                self.store.put(change.address, change.type_name, resp.state)
                outcome.applied = True
        return outcome

    def _create(self, resource: Resource, change: PlannedChange, planned: dict, diagnostics: Diagnostics) -> bool:
        resp = CreateResponse()
        resource.create(CreateRequest(planned), resp)
        diagnostics.append_all(resp.diagnostics)
        if resp.diagnostics.has_error() or resp.state is None:
            return False
        self.store.put(change.address, change.type_name, resp.state)
        return True

    def _delete(self, resource: Resource, address: str, prior: Optional[dict], diagnostics: Diagnostics) -> bool:
        resp = DeleteResponse()
        resource.delete(DeleteRequest(prior), resp)
        diagnostics.append_all(resp.diagnostics)
        if resp.diagnostics.has_error() or resp.state is not None:
            logger.warning("%s: destroy rejected, state retained", address)
            return False
        self.store.remove(address)
        return True

    # --- refresh / destroy -------------------------------------------------

    def refresh(self) -> Diagnostics:
        """Read sobre cada instancia persistida; persiste lo que devuelva."""
        diagnostics = Diagnostics()
        for address in self.store.addresses():
            record = self.store.get(address)
            resource = self.resource(record["type"], diagnostics)
            if resource is None:
                continue
            resp = ReadResponse()
            resource.read(ReadRequest(record["attributes"]), resp)
            diagnostics.append_all(resp.diagnostics)
            if resp.diagnostics.has_error():
                continue
            if resp.state is None:
                self.store.remove(address)
            else:
                self.store.put(address, record["type"], resp.state)
        return diagnostics

    def destroy(self, targets: Optional[List[str]] = None) -> ApplyReport:
        """
        Destruye las direcciones indicadas (o todas, en orden inverso de creación).
        Direcciones sin estado previo se ignoran: no hay nada que destruir.
        """
        report = ApplyReport()
        addresses = targets if targets else list(reversed(self.store.addresses()))
        for address in addresses:
            record = self.store.get(address)
            if record is None:
                logger.debug("%s: not in state, nothing to destroy", address)
                report.add(ResourceOutcome(address, "noop", applied=False))
                continue
            change = PlannedChange(address, record["type"], PlanResult("delete", None, []))
            report.add(self._apply_change(change))
        return report
