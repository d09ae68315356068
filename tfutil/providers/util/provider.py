"""
Provider "util".

Resuelve ProviderConfig una única vez (Configure) y lo entrega por referencia
a cada recurso en su propio Configure.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from tfutil.core.infra.base import decode_into
from tfutil.core.infra.contracts import (
    Provider,
    ProviderConfigureRequest,
    ProviderConfigureResponse,
    Resource,
)
from tfutil.core.infra.schema import Schema
from tfutil.core.runtime.config import ProviderConfig, resolve_provider_config
from tfutil.providers.util.indestructible import new_indestructible_resource
from tfutil.providers.util.models import ProviderModel
from tfutil.providers.util.schema import PROVIDER_SCHEMA

logger = logging.getLogger(__name__)

PROVIDER_TYPE_NAME = "util"


class UtilProvider:
    """
    Implementación del provider.

    version: versión publicada, "dev" en ejecución local y "test" en pruebas.
    """

    def __init__(self, version: str = "dev", environ: Optional[Mapping[str, str]] = None):
        self.version = version
        self._environ = environ
        self._config: Optional[ProviderConfig] = None

    @property
    def config(self) -> Optional[ProviderConfig]:
        return self._config

    def metadata(self) -> Dict[str, str]:
        return {"type_name": PROVIDER_TYPE_NAME, "version": self.version}

    def schema(self) -> Schema:
        return PROVIDER_SCHEMA

    def configure(self, req: ProviderConfigureRequest, resp: ProviderConfigureResponse) -> None:
        if self._config is not None:
            resp.diagnostics.add_error(
                "Provider Already Configured",
                "The util provider configuration is resolved once per run and cannot be changed.",
            )
            resp.resource_data = self._config
            return

        data = decode_into(ProviderModel, req.config if req.config is not None else {}, resp.diagnostics)
        if data is None:
            return

        self._config = resolve_provider_config(data.bypass_indestructible, self._environ)
        logger.debug("provider configured: bypass_indestructible=%s", self._config.bypass_indestructible)
        resp.resource_data = self._config

    def resources(self) -> List[Callable[[], Resource]]:
        return [new_indestructible_resource]

    def data_sources(self) -> List[Callable[[], Any]]:
        return []

    def functions(self) -> List[Callable[[], Any]]:
        return []


def new(version: str) -> Callable[[], Provider]:
    """Fábrica de providers para una versión dada."""
    def factory() -> Provider:
        return UtilProvider(version)
    return factory

