"""
Discharge registration

Assigns the consecutive number, stores the monthly parameters and the
source monitorings, and keeps every computed column in sync.
"""
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hydro.api.utils.sequencers import next_number
from hydro.core.exceptions import DuplicateResourceError, InvalidDataError
from hydro.models.discharge import Discharge, DischargeParameter, DischargeMonitoring
from hydro.models.sequence import SequenceType
from hydro.schemas.discharge import (
    DischargeCreate,
    DischargeUpdate,
    DischargeParameterCreate,
    DischargeMonitoringCreate,
)
from hydro.services.discharge_calculator import calculate_parameter_loads, calculate_discharge_loads
from hydro.services.water_quality import apply_monitoring_indices

logger = logging.getLogger(__name__)


class DischargeService:

    def create(self, db: Session, corporation_id: int, user_id: int, data: DischargeCreate) -> Discharge:
        """
        Build and flush a new discharge, the caller commits.

        Raises:
            DuplicateResourceError: the given number is taken for the year
            InvalidDataError: a monitoring cannot be classified
        """
        if data.number is not None:
            self._ensure_number_free(db, corporation_id, data.year, data.number)
            number = data.number
        else:
            number = self._allocate_number(db, corporation_id, data.year)

        discharge = Discharge(
            **data.model_dump(exclude={"number", "parameters", "monitorings"}),
            number=number,
            corporation_id=corporation_id,
            created_by=user_id,
            updated_by=user_id,
        )
        discharge.parameters = self._build_parameters(data.parameters)
        discharge.monitorings = self._build_monitorings(data.monitorings)
        calculate_discharge_loads(discharge)

        db.add(discharge)
        try:
            db.flush()
        except IntegrityError as e:
            # An explicit number was stored by another request meanwhile
            raise DuplicateResourceError(
                f"Discharge number {number} already exists for year {data.year}",
                {"year": data.year, "number": number},
            ) from e

        logger.info(
            "Registered discharge %s-%s (%s parameters, %s monitorings)",
            discharge.year, discharge.number, len(discharge.parameters), len(discharge.monitorings),
        )
        return discharge

    def update(self, db: Session, discharge: Discharge, user_id: int, data: DischargeUpdate) -> Discharge:
        """
        Apply the sent fields, replace parameters/monitorings when sent,
        recompute the loads and flush.
        """
        changes = data.model_dump(exclude_unset=True, exclude={"parameters", "monitorings"})

        year = changes.get("year", discharge.year)
        number = changes.get("number", discharge.number)
        if (year, number) != (discharge.year, discharge.number):
            self._ensure_number_free(db, discharge.corporation_id, year, number, exclude_id=discharge.id)

        for field, value in changes.items():
            setattr(discharge, field, value)

        # Orphans must be deleted before the new (discharge, month, origin) rows are inserted
        if data.parameters is not None:
            discharge.parameters = []
            db.flush()
            discharge.parameters = self._build_parameters(data.parameters)
        if data.monitorings is not None:
            discharge.monitorings = self._build_monitorings(data.monitorings)

        calculate_discharge_loads(discharge)
        discharge.updated_by = user_id
        db.flush()
        return discharge

    def _allocate_number(self, db: Session, corporation_id: int, year: int) -> int:
        """Next DISCHARGE value of the year, skipping numbers that were set explicitly"""
        number = next_number(db, SequenceType.DISCHARGE, corporation_id, year)
        while self._number_taken(db, corporation_id, year, number):
            logger.info("Discharge number %s-%s already set explicitly, skipping it", year, number)
            number = next_number(db, SequenceType.DISCHARGE, corporation_id, year)
        return number

    def _number_taken(
        self, db: Session, corporation_id: int, year: int, number: int, exclude_id: Optional[int] = None
    ) -> bool:
        query = db.query(Discharge.id).filter(
            Discharge.corporation_id == corporation_id,
            Discharge.year == year,
            Discharge.number == number,
        )
        if exclude_id:
            query = query.filter(Discharge.id != exclude_id)
        return query.first() is not None

    def _ensure_number_free(
        self, db: Session, corporation_id: int, year: int, number: int, exclude_id: Optional[int] = None
    ) -> None:
        if self._number_taken(db, corporation_id, year, number, exclude_id):
            raise DuplicateResourceError(
                f"Discharge number {number} already exists for year {year}",
                {"year": year, "number": number},
            )

    def _build_parameters(self, items: List[DischargeParameterCreate]) -> List[DischargeParameter]:
        parameters = []
        for item in items:
            parameter = DischargeParameter(**item.model_dump())
            calculate_parameter_loads(parameter)
            parameters.append(parameter)
        return parameters

    def _build_monitorings(self, items: List[DischargeMonitoringCreate]) -> List[DischargeMonitoring]:
        monitorings = []
        for item in items:
            monitoring = DischargeMonitoring(**item.model_dump())
            try:
                apply_monitoring_indices(monitoring)
            except ValueError as e:
                raise InvalidDataError(str(e)) from e
            monitorings.append(monitoring)
        return monitorings


discharge_service = DischargeService()
