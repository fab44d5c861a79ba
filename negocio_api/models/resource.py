"""
Nested Resource Model

Every tenant owns six typed collections (products, services, testimonials,
case studies, gallery images, orders). They share one table: `tipo` names the
collection and `datos` holds the caller's free-form fields.

`orden` is copied out of `datos` on every write so collections ordered by it
can be sorted in SQL.
"""
from sqlalchemy import Column, String, DateTime, Float, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from negocio_api.database import Base
import enum
import uuid


class ResourceKind(str, enum.Enum):
    """Nested collection names as they appear in URLs."""
    PRODUCTOS = "productos"
    SERVICIOS = "servicios"
    TESTIMONIOS = "testimonios"
    CASOS_EXITO = "casos-exito"
    GALERIA = "galeria"
    PEDIDOS = "pedidos"


class OrderStatus(str, enum.Enum):
    PENDIENTE = "pendiente"
    CONFIRMADO = "confirmado"
    ENVIADO = "enviado"
    ENTREGADO = "entregado"
    CANCELADO = "cancelado"


class TenantResource(Base):
    __tablename__ = "recursos_negocio"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)

    # CRITICAL: every document belongs to exactly one tenant
    negocio_id = Column(
        String(40),
        ForeignKey("negocios.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    tipo = Column(String(20), nullable=False)

    datos = Column(JSON, nullable=False, default=dict)

    orden = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    negocio = relationship("Tenant", back_populates="recursos")

    __table_args__ = (
        Index('idx_recurso_negocio_tipo_orden', 'negocio_id', 'tipo', 'orden'),
        Index('idx_recurso_negocio_tipo_fecha', 'negocio_id', 'tipo', 'created_at'),
    )

    def __repr__(self):
        return f"<TenantResource {self.tipo}/{self.id} (negocio={self.negocio_id})>"
