"""
Política de protección contra destrucción (destroy guard).

Función pura: dado el estado persistido de la instancia y el bypass del
provider decide si la destrucción se permite, se permite con advertencia o
se rechaza. No hace I/O ni modifica el estado; reaccionar a la decisión es
trabajo del adaptador del recurso.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

BYPASS_ENV_VAR = "TF_UTIL_BYPASS_INDESTRUCTIBLE"

BYPASS_SUMMARY = "Bypassing Destroy Protection"
BYPASS_DETAIL = (
    "Proceeding to destroy util_indestructible instance due to bypass_indestructible "
    "being true on the provider, and allow_bypass being true on the resource."
)

DENY_SUMMARY = "Destruction Not Allowed"
DENY_MESSAGE = (
    "Cannot destroy indestructible resource unless allow_destroy is set in state.\n"
    "To continue with destruction, set allow_destroy to true and apply first.\n"
    "Or, unless otherwise prohibited, set bypass_indestructible on the provider, or set\n"
    f"the {BYPASS_ENV_VAR} env var to \"true\"."
)


class Outcome(str, Enum):
    """Resultado de evaluar un intento de destrucción"""
    ALLOW = "allow"
    WARN = "warn"
    DENY = "deny"


class GuardState(Protocol):
    """Lo mínimo que la política necesita leer del estado persistido."""
    allow_destroy: Optional[bool]
    allow_bypass: Optional[bool]
    error_message: Optional[str]


@dataclass(frozen=True)
class Decision:
    """Decisión del guard; summary/message vacíos cuando outcome es ALLOW."""
    outcome: Outcome
    summary: str = ""
    message: str = ""

    @property
    def allows_destroy(self) -> bool:
        return self.outcome != Outcome.DENY


ALLOW = Decision(Outcome.ALLOW)


def deny_message(error_message: Optional[str]) -> str:
    """Mensaje de rechazo; el error_message del usuario va separado por una línea en blanco."""
    if error_message:
        return DENY_MESSAGE + "\n\n" + error_message
    return DENY_MESSAGE


def evaluate_destroy(state: GuardState, bypass_enabled: bool) -> Decision:
    """
    Evalúa un intento de destrucción. Gana la primera regla que aplique:

    1. allow_destroy en el estado → ALLOW (el consentimiento explícito siempre gana).
    2. bypass del provider activo y allow_bypass en la instancia → WARN.
    3. En cualquier otro caso → DENY con el mensaje compuesto.

    La variante antigua sin bypass equivale a llamar con bypass_enabled=False.
    """
    if state.allow_destroy:
        return ALLOW

    if bypass_enabled and state.allow_bypass:
        return Decision(Outcome.WARN, BYPASS_SUMMARY, BYPASS_DETAIL)

    return Decision(Outcome.DENY, DENY_SUMMARY, deny_message(state.error_message))
