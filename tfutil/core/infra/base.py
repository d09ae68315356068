"""
Base opcional para recursos: decodificación de payloads y plan por defecto.

Los recursos pueden heredar de aquí o implementar solo el contrato (Protocol).
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

import pydantic

from tfutil.core.diagnostics import Diagnostics
from tfutil.core.errors import ValidationError
from tfutil.core.infra.contracts import ModifyPlanRequest, PlanResult, ReadRequest, ReadResponse
from tfutil.core.infra.schema import Schema, values_equal
from tfutil.core.runtime.state import StateDiff

INVALID_DATA_SUMMARY = "Invalid Resource Data"


def decode_model(model: Type[pydantic.BaseModel], payload: Any) -> pydantic.BaseModel:
    """
    Decodifica un payload (dict) al modelo del recurso.

    Raises:
        ValidationError: si el payload no encaja en el modelo
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            f"Expected an object for {model.__name__}, got: {type(payload).__name__}"
        )
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) or "<root>" for err in e.errors()]
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(f"{model.__name__} decode failed: {details}", fields) from e


def decode_into(
    model: Type[pydantic.BaseModel], payload: Any, diagnostics: Diagnostics
) -> Optional[pydantic.BaseModel]:
    """Como decode_model, pero deja el error en diagnostics y devuelve None."""
    try:
        return decode_model(model, payload)
    except ValidationError as e:
        diagnostics.add_error(INVALID_DATA_SUMMARY, str(e))
        return None


class BaseResource(ABC):
    """Base opcional para recursos; no obligatorio usar herencia."""

    model: Type[pydantic.BaseModel]

    @abstractmethod
    def schema(self) -> Schema:
        """Schema del recurso"""
        pass

    def read(self, req: ReadRequest, resp: ReadResponse) -> None:
        """Por defecto: no-op, se confía en el estado persistido."""
        resp.state = req.state

    def modify_plan(self, req: ModifyPlanRequest) -> PlanResult:
        """
        Calcula la acción para una instancia comparando plan y estado.

        Returns:
            PlanResult con action create/update/replace/delete/noop, el estado
            planeado (con defaults aplicados) y los diffs por atributo
        """
        if req.plan is None:
            if req.state is None:
                return PlanResult("noop", None, [], summary=f"{req.resource_id}: nothing to destroy")
            return PlanResult("delete", None, [], summary=f"{req.resource_id} will be destroyed")

        diagnostics = Diagnostics()
        payload = self.schema().apply_defaults(req.plan) if isinstance(req.plan, dict) else req.plan
        data = decode_into(self.model, payload, diagnostics)
        if data is None:
            result = PlanResult("noop", None, [], summary=f"{req.resource_id}: invalid plan")
            result.diagnostics.append_all(diagnostics)
            return result

        planned = data.model_dump()
        diffs = self._diff(req.resource_id, planned, req.state)

        if req.state is None:
            return PlanResult("create", planned, diffs, summary=f"{req.resource_id} will be created")
        if not diffs:
            return PlanResult("noop", planned, [], summary=f"{req.resource_id} is up to date")

        replace = self.schema().requires_replace(req.state, planned)
        if replace:
            return PlanResult(
                "replace", planned, diffs, replace,
                summary=f"{req.resource_id} must be replaced ({', '.join(replace)})",
            )
        return PlanResult("update", planned, diffs, summary=f"{req.resource_id} will be updated in-place")

    @staticmethod
    def _diff(resource_id: str, planned: Dict[str, Any], state: Optional[Dict[str, Any]]) -> List[StateDiff]:
        diffs: List[StateDiff] = []
        prior = state or {}
        for name, value in planned.items():
            if state is None and value is None:
                continue
            if not values_equal(prior.get(name), value):
                diffs.append(StateDiff(resource_id, name, value, prior.get(name)))
        return diffs
