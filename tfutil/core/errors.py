"""
Errores del provider util.

El core solo define excepciones; el adaptador de recursos las traduce a
diagnósticos y la CLI se encarga del formato de salida.
"""


class UtilError(Exception):
    """Error base del provider util."""
    pass


class ValidationError(UtilError):
    """Payload (plan, estado o configuración) que no encaja en el modelo esperado."""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class ConfigError(UtilError):
    """Error de configuración (archivo faltante, formato inválido, provider mal configurado)."""
    pass


class StateError(UtilError):
    """Error al leer o escribir el estado persistido."""
    pass
