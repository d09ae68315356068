"""
Punto de entrada: python -m tfutil

Delega a la misma app que el script tfutil.
"""

from tfutil.cli.app import app

if __name__ == "__main__":
    app()
