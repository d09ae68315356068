"""
Recurso util_indestructible.

Nodo sintético del grafo que no puede destruirse salvo que allow_destroy
esté en el estado. Los recursos que dependen de él quedan protegidos porque
el orquestador destruye dependientes antes que dependencias.
"""

import logging

from tfutil.core.guard.policy import Outcome, evaluate_destroy
from tfutil.core.infra.base import BaseResource, decode_into
from tfutil.core.infra.contracts import (
    ConfigureRequest,
    ConfigureResponse,
    CreateRequest,
    CreateResponse,
    DeleteRequest,
    DeleteResponse,
    Resource,
    UpdateRequest,
    UpdateResponse,
)
from tfutil.core.infra.schema import Schema
from tfutil.core.runtime.config import ProviderConfig
from tfutil.providers.util.models import IndestructibleResourceModel
from tfutil.providers.util.schema import INDESTRUCTIBLE_SCHEMA

logger = logging.getLogger(__name__)

TYPE_SUFFIX = "_indestructible"


class IndestructibleResource(BaseResource):
    """Adaptador del ciclo de vida: create/update persisten, read no-op, delete pasa por el guard"""

    model = IndestructibleResourceModel

    def __init__(self):
        self.bypass = False

    def metadata(self, provider_type_name: str) -> str:
        return provider_type_name + TYPE_SUFFIX

    def schema(self) -> Schema:
        return INDESTRUCTIBLE_SCHEMA

    def configure(self, req: ConfigureRequest, resp: ConfigureResponse) -> None:
        # Provider aún no configurado (p. ej. validación temprana): nada que hacer
        if req.provider_data is None:
            return

        if not isinstance(req.provider_data, ProviderConfig):
            resp.diagnostics.add_error(
                "Unexpected Resource Configure Type",
                f"Expected ProviderConfig, got: {type(req.provider_data).__name__}. "
                "Please report this issue to the provider developers.",
            )
            return

        self.bypass = req.provider_data.bypass_indestructible

    def create(self, req: CreateRequest, resp: CreateResponse) -> None:
        data = decode_into(self.model, req.plan, resp.diagnostics)
        if data is None:
            return

        logger.debug("created util_indestructible instance")
        resp.state = data.model_dump()

    def update(self, req: UpdateRequest, resp: UpdateResponse) -> None:
        resp.state = req.state
        data = decode_into(self.model, req.plan, resp.diagnostics)
        if data is None:
            return

        resp.state = data.model_dump()

    def delete(self, req: DeleteRequest, resp: DeleteResponse) -> None:
        resp.state = req.state
        data = decode_into(self.model, req.state, resp.diagnostics)
        if data is None:
            return

        decision = evaluate_destroy(data, self.bypass)
        logger.debug("destroy guard decision: %s", decision.outcome.value)

        if decision.outcome == Outcome.DENY:
            resp.diagnostics.add_error(decision.summary, decision.message)
            return

        if decision.outcome == Outcome.WARN:
            resp.diagnostics.add_warning(decision.summary, decision.message)

        resp.state = None


def new_indestructible_resource() -> Resource:
    return IndestructibleResource()

