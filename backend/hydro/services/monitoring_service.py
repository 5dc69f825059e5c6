"""
Station monitorings

One campaign per station and date. The water quality indices are
recomputed from the raw values on every write, as for discharge
monitorings.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from hydro.core.exceptions import DuplicateResourceError, InvalidDataError, ResourceNotFoundError
from hydro.models.monitoring import Monitoring, MonitoringStation
from hydro.schemas.monitoring import MonitoringCreate, MonitoringUpdate
from hydro.services.water_quality import apply_monitoring_indices

logger = logging.getLogger(__name__)


class MonitoringService:

    def create(self, db: Session, corporation_id: int, user_id: int, data: MonitoringCreate) -> Monitoring:
        """
        Raises:
            DuplicateResourceError: the station already has a monitoring on that date
            InvalidDataError: the indices cannot be computed
        """
        self._ensure_date_free(db, data.monitoring_station_id, data.monitoring_date)

        monitoring = Monitoring(
            **data.model_dump(),
            corporation_id=corporation_id,
            created_by=user_id,
            updated_by=user_id,
        )
        self._apply_indices(monitoring)

        db.add(monitoring)
        db.flush()

        logger.info(
            "Registered monitoring of station %s on %s (ICA %s, %s)",
            monitoring.monitoring_station_id, monitoring.monitoring_date,
            monitoring.ica_coefficient, monitoring.quality_classification,
        )
        return monitoring

    def update(self, db: Session, monitoring: Monitoring, user_id: int, data: MonitoringUpdate) -> Monitoring:
        changes = data.model_dump(exclude_unset=True)

        station_id = changes.get("monitoring_station_id", monitoring.monitoring_station_id)
        monitoring_date = changes.get("monitoring_date", monitoring.monitoring_date)
        if (station_id, monitoring_date) != (monitoring.monitoring_station_id, monitoring.monitoring_date):
            self._ensure_date_free(db, station_id, monitoring_date, exclude_id=monitoring.id)

        for field, value in changes.items():
            setattr(monitoring, field, value)

        self._apply_indices(monitoring)
        monitoring.updated_by = user_id
        db.flush()
        return monitoring

    def latest_by_station(self, db: Session, station_id: int) -> Optional[Monitoring]:
        return db.query(Monitoring).filter(
            Monitoring.monitoring_station_id == station_id
        ).order_by(Monitoring.monitoring_date.desc()).first()

    def stations_with_last_monitoring(
        self, db: Session, corporation_id: int, basin_section_id: int, name: Optional[str] = None
    ) -> List[dict]:
        """
        Active stations of a section (optionally filtered by name) that have
        at least one monitoring, each with its most recent campaign.

        Raises:
            ResourceNotFoundError: no station of the corporation matches
            InvalidDataError: every matching station is inactive
        """
        query = db.query(MonitoringStation).filter(
            MonitoringStation.corporation_id == corporation_id,
            MonitoringStation.basin_section_id == basin_section_id,
        )
        if name:
            query = query.filter(MonitoringStation.name.ilike(f"%{name}%"))
        stations = query.order_by(MonitoringStation.name).all()

        if not stations:
            raise ResourceNotFoundError("Monitoring station for section", basin_section_id)
        active = [station for station in stations if station.is_active]
        if not active:
            raise InvalidDataError("No active monitoring stations found")

        result = []
        for station in active:
            latest = self.latest_by_station(db, station.id)
            if latest is None:
                continue
            result.append({
                "id": station.id,
                "name": station.name,
                "description": station.description,
                "latitude": station.latitude,
                "longitude": station.longitude,
                "last_monitoring": latest,
            })
        return result

    def get_stats(self, db: Session, corporation_id: int, year: int) -> dict:
        active_stations = db.query(func.count(MonitoringStation.id)).filter(
            MonitoringStation.corporation_id == corporation_id,
            MonitoringStation.is_active.is_(True),
        ).scalar()

        base = db.query(Monitoring).filter(Monitoring.corporation_id == corporation_id)
        total, average = base.with_entities(
            func.count(Monitoring.id),
            func.avg(Monitoring.ica_coefficient),
        ).one()

        this_year = base.filter(
            Monitoring.monitoring_date >= date(year, 1, 1),
            Monitoring.monitoring_date <= date(year, 12, 31),
        ).count()

        by_quality = dict(
            base.with_entities(Monitoring.quality_classification, func.count(Monitoring.id))
            .group_by(Monitoring.quality_classification)
            .all()
        )

        return {
            "active_stations": active_stations,
            "total_monitorings": total,
            "monitorings_this_year": this_year,
            "average_ica_coefficient": (
                Decimal(str(average)).quantize(Decimal("0.001")) if average is not None else None
            ),
            "by_quality": {
                (quality.value if quality is not None else "UNCLASSIFIED"): count
                for quality, count in by_quality.items()
            },
        }

    def _ensure_date_free(
        self, db: Session, station_id: int, monitoring_date: date, exclude_id: Optional[int] = None
    ) -> None:
        query = db.query(Monitoring.id).filter(
            Monitoring.monitoring_station_id == station_id,
            Monitoring.monitoring_date == monitoring_date,
        )
        if exclude_id:
            query = query.filter(Monitoring.id != exclude_id)
        if query.first():
            raise DuplicateResourceError(
                f"Station {station_id} already has a monitoring on {monitoring_date}",
                {"monitoring_station_id": station_id, "monitoring_date": str(monitoring_date)},
            )

    def _apply_indices(self, monitoring: Monitoring) -> None:
        try:
            apply_monitoring_indices(monitoring)
        except ValueError as e:
            raise InvalidDataError(str(e)) from e


monitoring_service = MonitoringService()
