"""
Providers: implementaciones concretas de los contratos de tfutil.core.infra.
"""
