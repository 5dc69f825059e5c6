"""
System models - multi-tenant

IMPORTANT: every corporation owned table uses CorporationMixin, which adds
corporation_id. Reference geography and catalogs are shared.
"""

from hydro.models.base import Base, CorporationMixin, TimestampMixin, AuditMixin
from hydro.models.corporation import Corporation
from hydro.models.user import User, UserRole
from hydro.models.geography import Department, Category, Municipality
from hydro.models.catalog import EconomicActivity, AuthorizationType
from hydro.models.water_basin import WaterBasin, BasinSection
from hydro.models.discharge_user import DischargeUser, DocumentType
from hydro.models.discharge import (
    Discharge,
    DischargeParameter,
    DischargeMonitoring,
    DischargeType,
    WaterResourceType,
    ParameterOrigin,
    QualityClassification,
)
from hydro.models.monitoring import MonitoringStation, Monitoring
from hydro.models.tariff import MinimumTariff, ProjectProgress
from hydro.models.invoice import Invoice
from hydro.models.sequence import ConsecutiveSequence, SequenceType

__all__ = [
    "Base",
    "CorporationMixin",
    "TimestampMixin",
    "AuditMixin",
    "Corporation",
    "User",
    "UserRole",
    "Department",
    "Category",
    "Municipality",
    "EconomicActivity",
    "AuthorizationType",
    "WaterBasin",
    "BasinSection",
    "DischargeUser",
    "DocumentType",
    "Discharge",
    "DischargeParameter",
    "DischargeMonitoring",
    "DischargeType",
    "WaterResourceType",
    "ParameterOrigin",
    "QualityClassification",
    "MonitoringStation",
    "Monitoring",
    "MinimumTariff",
    "ProjectProgress",
    "Invoice",
    "ConsecutiveSequence",
    "SequenceType",
]
