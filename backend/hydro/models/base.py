from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import declared_attr, relationship
from datetime import datetime
from hydro.database import Base


class CorporationMixin:
    """
    Adds corporation_id to every tenant scoped table
    CRITICAL for multi-tenant isolation

    Tables using this mixin get:
    - corporation_id (foreign key to corporations.id)
    - a relationship to Corporation
    """

    @declared_attr
    def corporation_id(cls):
        return Column(Integer, ForeignKey('corporations.id'), nullable=False, index=True)

    @declared_attr
    def corporation(cls):
        return relationship("Corporation", foreign_keys=[cls.corporation_id])


class TimestampMixin:
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class AuditMixin:
    """
    Records which user created and last updated the row
    """

    @declared_attr
    def created_by(cls):
        return Column(Integer, ForeignKey('users.id'), nullable=True)

    @declared_attr
    def updated_by(cls):
        return Column(Integer, ForeignKey('users.id'), nullable=True)


__all__ = ['Base', 'CorporationMixin', 'TimestampMixin', 'AuditMixin']
