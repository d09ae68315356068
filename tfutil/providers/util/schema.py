"""
Schemas del provider util y del recurso util_indestructible.
"""

from typing import Any

from tfutil.core.guard.policy import BYPASS_ENV_VAR
from tfutil.core.infra.schema import Attribute, AttributeType, RequiresReplaceIf, Schema

INDESTRUCTIBLE_DESCRIPTION = """
The `util_indestructible` resource creates a node in the resource
graph that cannot be destroyed unless the `allow_destroy` attribute
is set to `true` in the state. This provides a workaround to a
[well-known shortcoming](https://github.com/hashicorp/terraform/issues/17599)
of the `prevent_destroy` lifecycle attribute by exploiting
dependency order to prevent the destruction of resources that are dependencies
of the indestructible resource, since it must be destroyed before the dependencies
are.
"""


def protected_value_changed(state_value: Any, plan_value: Any) -> bool:
    """Solo fuerza reemplazo si ya había un valor persistido."""
    return state_value is not None


INDESTRUCTIBLE_SCHEMA = Schema(
    description=INDESTRUCTIBLE_DESCRIPTION,
    attributes=[
        Attribute(
            "allow_destroy",
            AttributeType.BOOL,
            description="Whether to allow destruction.",
            optional=True,
        ),
        Attribute(
            "allow_bypass",
            AttributeType.BOOL,
            description="Whether to allow destruction when `bypass_indestructible` is set on the provider.",
            optional=True,
            computed=True,
            default=True,
        ),
        Attribute(
            "error_message",
            AttributeType.STRING,
            description=(
                "Additional message to include in the error message when attempting to destroy "
                "when `allow_destroy` is `false`."
            ),
            optional=True,
        ),
        Attribute(
            "protected_value",
            AttributeType.DYNAMIC,
            description="Value whose change forces replacement of this resource, once it has been set.",
            optional=True,
            plan_modifiers=(
                RequiresReplaceIf(
                    protected_value_changed,
                    "Changing a previously set protected_value destroys and recreates the resource.",
                ),
            ),
        ),
    ],
)

PROVIDER_SCHEMA = Schema(
    attributes=[
        Attribute(
            "bypass_indestructible",
            AttributeType.BOOL,
            description=(
                "Globally bypasses destruction protection on util_indestructible resource that allow it. "
                f"Defaults to the `{BYPASS_ENV_VAR}` environment variable."
            ),
            optional=True,
        ),
    ],
)
