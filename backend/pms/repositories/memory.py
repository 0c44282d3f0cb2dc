"""
In-memory repository implementations.

They honour the same contracts as the SQLAlchemy repositories and are used as
test doubles and for running the API without a database. A lock per store
makes every operation atomic, including the conditional fill.
"""

import threading
from datetime import datetime
from typing import Dict, Generic, List, Optional, TypeVar
from uuid import UUID

from pms.core.exceptions import StorageError
from pms.domain.entities import (
    Doctor,
    Drug,
    Patient,
    Pharmacist,
    Prescription,
    PrescriptionStatus,
)
from pms.domain.interfaces import (
    IDoctorRepository,
    IDrugRepository,
    IPatientRepository,
    IPharmacistRepository,
    IPrescriptionRepository,
)

EntityT = TypeVar("EntityT")


class InMemoryRepository(Generic[EntityT]):
    """Dict-backed store. Python dicts keep insertion order, which get_all relies on."""

    entity_name: str = "entity"

    def __init__(self) -> None:
        self._items: Dict[UUID, EntityT] = {}
        self._lock = threading.Lock()

    def create(self, entity: EntityT) -> UUID:
        entity_id = entity.id  # type: ignore[attr-defined]
        with self._lock:
            if entity_id in self._items:
                raise StorageError(
                    f"{self.entity_name} with id {entity_id} already exists"
                )
            self._items[entity_id] = entity
        return entity_id

    def get_by_id(self, entity_id: UUID) -> Optional[EntityT]:
        with self._lock:
            return self._items.get(entity_id)

    def get_all(self) -> List[EntityT]:
        with self._lock:
            return list(self._items.values())


class InMemoryDoctorRepository(InMemoryRepository[Doctor], IDoctorRepository):
    entity_name = "doctor"


class InMemoryPatientRepository(InMemoryRepository[Patient], IPatientRepository):
    entity_name = "patient"


class InMemoryPharmacistRepository(
    InMemoryRepository[Pharmacist], IPharmacistRepository
):
    entity_name = "pharmacist"


class InMemoryDrugRepository(InMemoryRepository[Drug], IDrugRepository):
    entity_name = "drug"


class InMemoryPrescriptionRepository(
    InMemoryRepository[Prescription], IPrescriptionRepository
):
    entity_name = "prescription"

    def mark_filled(
        self, prescription_id: UUID, pharmacist_id: UUID, filled_at: datetime
    ) -> Optional[Prescription]:
        with self._lock:
            current = self._items.get(prescription_id)
            if current is None or current.status is not PrescriptionStatus.PENDING:
                return None
            filled = current.fill(pharmacist_id, filled_at)
            self._items[prescription_id] = filled
            return filled
