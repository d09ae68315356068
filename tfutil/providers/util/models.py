"""
Modelos de datos del provider util.
Usa Pydantic para validación estricta de planes, estado y configuración.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IndestructibleResourceModel(BaseModel):
    """Estado persistido de una instancia util_indestructible"""
    allow_destroy: Optional[bool] = Field(None, description="Consentimiento explícito para destruir")
    allow_bypass: bool = Field(True, description="Permite que bypass_indestructible del provider aplique")
    error_message: Optional[str] = Field(None, description="Texto extra para el error de destrucción")
    protected_value: Any = Field(None, description="Valor opaco; su cambio fuerza reemplazo")

    @field_validator("allow_bypass", mode="before")
    @classmethod
    def default_allow_bypass(cls, v):
        """Atributo computado: null toma el default del schema"""
        return True if v is None else v

    model_config = ConfigDict(strict=True, extra="forbid")


class ProviderModel(BaseModel):
    """Atributos del bloque provider "util" """
    bypass_indestructible: Optional[bool] = Field(
        None, description="Bypass global de la protección (None = usar variable de entorno)"
    )

    model_config = ConfigDict(strict=True, extra="forbid")
