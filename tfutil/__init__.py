"""
tfutil: provider "util" con el recurso util_indestructible.
"""

__version__ = "1.0.0"
