"""
In-memory record stores for SocietyDesk
One store per aggregate; each record has its own lock
"""

import threading
from contextlib import contextmanager
from typing import Callable, Dict, Generic, Iterator, List, Optional, TypeVar

from pydantic import BaseModel

from societydesk.exceptions import NotFound
from societydesk.models.schemas import Amenity, Booking, EmergencyAlert, Visitor
from societydesk.models.enums import BookingStatus, VisitorStatus

T = TypeVar("T", bound=BaseModel)


class RecordStore(Generic[T]):
    """
    Keyed collection of pydantic records.

    Records handed out are copies, so a caller can only change stored state
    through save(). Read-modify-write sequences must run inside locked(id).
    """

    entity: str = "Record"
    id_field: str = "id"

    def __init__(self):
        self._records: Dict[str, T] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, record_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(record_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[record_id] = lock
            return lock

    def _key(self, record: T) -> str:
        return getattr(record, self.id_field)

    @contextmanager
    def locked(self, record_id: str) -> Iterator[T]:
        """Hold the record's lock and yield a working copy of it."""
        # Unknown ids never get a lock entry
        if record_id not in self._records:
            raise NotFound(self.entity, record_id)
        with self._lock_for(record_id):
            yield self.get(record_id)

    def add(self, record: T) -> T:
        key = self._key(record)
        with self._lock_for(key):
            self._records[key] = record.model_copy(deep=True)
        return record

    def save(self, record: T) -> T:
        key = self._key(record)
        if key not in self._records:
            raise NotFound(self.entity, key)
        with self._lock_for(key):
            if key not in self._records:
                raise NotFound(self.entity, key)
            self._records[key] = record.model_copy(deep=True)
        return record

    def find(self, record_id: str) -> Optional[T]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def get(self, record_id: str) -> T:
        record = self.find(record_id)
        if record is None:
            raise NotFound(self.entity, record_id)
        return record

    def remove(self, record_id: str) -> None:
        if record_id not in self._records:
            raise NotFound(self.entity, record_id)
        with self._lock_for(record_id):
            if self._records.pop(record_id, None) is None:
                raise NotFound(self.entity, record_id)
        with self._guard:
            self._locks.pop(record_id, None)

    def all(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        records = list(self._records.values())
        return [
            r.model_copy(deep=True)
            for r in records
            if predicate is None or predicate(r)
        ]

    def __len__(self) -> int:
        return len(self._records)


class VisitorStore(RecordStore[Visitor]):
    entity = "Visitor"
    id_field = "visitor_id"

    def find_by_qr_code(self, qr_code: str) -> Optional[Visitor]:
        matches = self.all(lambda v: v.qr_code == qr_code)
        return matches[0] if matches else None

    def count_checked_in(self) -> int:
        return len(self.all(lambda v: v.status == VisitorStatus.CHECKED_IN))


class AmenityStore(RecordStore[Amenity]):
    entity = "Amenity"
    id_field = "amenity_id"

    def total_occupancy(self) -> int:
        return sum(a.current_occupancy for a in self.all())


class BookingStore(RecordStore[Booking]):
    entity = "Booking"
    id_field = "booking_id"

    def active_for_slot(self, amenity_id: str, booking_date) -> List[Booking]:
        """Non-cancelled bookings of an amenity on a given date"""
        return self.all(
            lambda b: b.amenity_id == amenity_id
            and b.booking_date == booking_date
            and b.status != BookingStatus.CANCELLED
        )


class AlertStore(RecordStore[EmergencyAlert]):
    entity = "Alert"
    id_field = "alert_id"
