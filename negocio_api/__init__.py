"""
API Multi-tenant de Negocios

REST backend serving many independent negocios from one deployment, each
with its own configuration, catalog collections and orders.
"""

__version__ = "1.0.0"
