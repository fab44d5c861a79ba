"""
Tenant Model

A tenant ("negocio") is the root of all per-business data. The identity and
status fields are real columns so login and listing can query them; the
storefront configuration is a free-form JSON document, the same shape the
admin panel edits.

NOTE: The admin PIN is stored as issued. The super-admin can read it back
from the tenant listing, which is how lost credentials are recovered.
"""
from sqlalchemy import Column, String, Boolean, DateTime, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from negocio_api.database import Base


class Tenant(Base):
    __tablename__ = "negocios"

    # Generated "neg_<hex>" token, immutable once assigned
    id = Column(String(40), primary_key=True)

    nombre_negocio = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)

    # Admin credentials
    user = Column(String(64), unique=True, nullable=False, index=True)
    pin = Column(String(4), nullable=False)

    activo = Column(Boolean, default=True, nullable=False, index=True)
    brief_completado = Column(Boolean, default=False, nullable=False)

    # Storefront configuration: nombre, slogan, colores, contacto, contenido
    config = Column(JSON, nullable=False, default=dict)

    # Named boolean toggles controlling which storefront sections render
    secciones_activas = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    recursos = relationship(
        "TenantResource",
        back_populates="negocio",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_negocio_user_pin', 'user', 'pin'),
    )

    def __repr__(self):
        return f"<Tenant {self.id} ({self.user})>"
