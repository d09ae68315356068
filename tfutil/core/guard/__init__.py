"""
Guard: decisión de permitir, advertir o rechazar la destrucción de un recurso.
"""

from tfutil.core.guard.policy import Decision, Outcome, GuardState, evaluate_destroy, deny_message

__all__ = ["Decision", "Outcome", "GuardState", "evaluate_destroy", "deny_message"]
