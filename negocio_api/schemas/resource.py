"""
Nested Resource Schemas

Documents in the nested collections are free-form: whatever fields the
admin panel sends are stored. Only the envelope around them is typed here.
"""
from pydantic import BaseModel

from negocio_api.models.resource import OrderStatus


class ResourceCreatedResponse(BaseModel):
    success: bool = True
    id: str


class OrderStatusUpdate(BaseModel):
    estado: OrderStatus
