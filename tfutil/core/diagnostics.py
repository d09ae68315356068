"""
Diagnósticos devueltos al orquestador.

Cada verbo del ciclo de vida agrega diagnósticos a su respuesta; el host
decide el código de salida según haya o no errores.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class Severity(Enum):
    """Severidad de un diagnóstico"""
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """Un diagnóstico: severidad, resumen corto y detalle"""
    severity: Severity
    summary: str
    detail: str = ""

    @property
    def is_error(self) -> bool:
        """Retorna True si es un error"""
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        """Retorna True si es una advertencia"""
        return self.severity == Severity.WARNING

    def to_dict(self) -> dict:
        return {"severity": self.severity.value, "summary": self.summary, "detail": self.detail}


class Diagnostics(list):
    """Lista de diagnósticos con los helpers que usan los recursos"""

    def add_error(self, summary: str, detail: str = "") -> None:
        """Agrega un diagnóstico de error"""
        self.append(Diagnostic(Severity.ERROR, summary, detail))

    def add_warning(self, summary: str, detail: str = "") -> None:
        """Agrega un diagnóstico de advertencia"""
        self.append(Diagnostic(Severity.WARNING, summary, detail))

    def has_error(self) -> bool:
        """Retorna True si algún diagnóstico es un error"""
        return any(d.is_error for d in self)

    def errors(self) -> List[Diagnostic]:
        return [d for d in self if d.is_error]

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self if d.is_warning]

    def append_all(self, others: Iterable[Diagnostic]) -> "Diagnostics":
        self.extend(others)
        return self
