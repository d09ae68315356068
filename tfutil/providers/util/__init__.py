"""
Provider util: recurso util_indestructible y su configuración.
"""

from tfutil.providers.util.indestructible import IndestructibleResource
from tfutil.providers.util.models import IndestructibleResourceModel, ProviderModel
from tfutil.providers.util.provider import UtilProvider, PROVIDER_TYPE_NAME

__all__ = [
    "IndestructibleResource",
    "IndestructibleResourceModel",
    "ProviderModel",
    "UtilProvider",
    "PROVIDER_TYPE_NAME",
]
