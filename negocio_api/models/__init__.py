"""
Database Models

Nested resources carry negocio_id for tenant isolation; every query on them
filters by it.
"""
from negocio_api.models.tenant import Tenant
from negocio_api.models.resource import TenantResource, ResourceKind, OrderStatus

__all__ = ["Tenant", "TenantResource", "ResourceKind", "OrderStatus"]
