"""
Contratos para providers y recursos.

Los providers (util) implementan estos contratos; el core no depende de
ningún provider concreto.
"""

from tfutil.core.infra.contracts import (
    PlanResult,
    Provider,
    Resource,
    ResourceWithConfigure,
    ResourceWithModifyPlan,
)

__all__ = ["PlanResult", "Provider", "Resource", "ResourceWithConfigure", "ResourceWithModifyPlan"]
