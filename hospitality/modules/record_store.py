"""
Record Store Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

This module holds the in-memory tables of the hospitality desk: guest
profiles, bound guest records and hostels with their bed counters. It is the
single source of truth read and written by the accommodation workflow.

Features:
- Keyed access to profiles, records and hostels
- Badge id and student id indexes (1:1 binding)
- Re-entrant transactions with rollback on error
- Seed data loading and reset for test harnesses

Values handed out are copies; changes only reach the store through
put_record/put_hostel.
"""

import copy
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

from hospitality.modules.models import (
    Hostel, Profile, Record, hostel_from_dict, profile_from_dict,
)
from hospitality.modules.seed_data import SEED_HOSTELS, SEED_PROFILES


class RecordStore:
    """
    In-memory record store for profiles, guest records and hostels.
    All reads and writes are serialized by one re-entrant lock.
    """

    def __init__(self, profiles: Optional[Iterable[Profile]] = None,
                 hostels: Optional[Iterable[Hostel]] = None):
        """
        Initialize the store.

        Args:
            profiles: Initial guest profiles (profile registry contents)
            hostels: Initial hostels with their occupancy
        """
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._depth = 0

        self._initial_profiles = list(profiles or [])
        self._initial_hostels = [copy.deepcopy(h) for h in (hostels or [])]

        self._profiles: Dict[str, Profile] = {}
        self._records: Dict[str, Record] = {}
        self._badge_by_student: Dict[str, str] = {}
        self._hostels: Dict[str, Hostel] = {}

        self._load_initial_data()

    @classmethod
    def with_seed_data(cls) -> 'RecordStore':
        """Create a store pre-loaded with the demo profiles and hostels."""
        return cls(
            profiles=[profile_from_dict(p) for p in SEED_PROFILES],
            hostels=[hostel_from_dict(h) for h in SEED_HOSTELS],
        )

    def _load_initial_data(self):
        for profile in self._initial_profiles:
            self._profiles[profile.student_id] = profile
        for hostel in self._initial_hostels:
            self._hostels[hostel.id] = copy.deepcopy(hostel)

    @contextmanager
    def transaction(self):
        """
        Context manager for an atomic unit of work.

        Holds the store lock for the whole block. If the block raises, every
        table is restored to its state at the start of the outermost
        transaction and the exception propagates.

        Yields:
            RecordStore: this store
        """
        with self._lock:
            outermost = self._depth == 0
            snapshot = self._snapshot() if outermost else None
            self._depth += 1
            try:
                yield self
            except Exception as e:
                if outermost:
                    self._restore(snapshot)
                    self.logger.debug(f"Transaction rolled back: {str(e)}")
                raise
            finally:
                self._depth -= 1

    def _snapshot(self):
        return (
            copy.deepcopy(self._records),
            dict(self._badge_by_student),
            copy.deepcopy(self._hostels),
        )

    def _restore(self, snapshot):
        self._records, self._badge_by_student, self._hostels = snapshot

    # Profiles

    def get_profile(self, student_id: str) -> Optional[Profile]:
        with self._lock:
            return self._profiles.get(student_id)

    def add_profile(self, profile: Profile):
        with self._lock:
            self._profiles[profile.student_id] = profile

    def list_profiles(self) -> List[Profile]:
        with self._lock:
            return list(self._profiles.values())

    # Records

    def get_record(self, badge_id: str) -> Optional[Record]:
        with self._lock:
            record = self._records.get(badge_id)
            return copy.deepcopy(record) if record else None

    def get_record_by_student(self, student_id: str) -> Optional[Record]:
        with self._lock:
            badge_id = self._badge_by_student.get(student_id)
            return self.get_record(badge_id) if badge_id else None

    def badge_for_student(self, student_id: str) -> Optional[str]:
        with self._lock:
            return self._badge_by_student.get(student_id)

    def is_badge_bound(self, badge_id: str) -> bool:
        with self._lock:
            return badge_id in self._records

    def is_student_bound(self, student_id: str) -> bool:
        with self._lock:
            return student_id in self._badge_by_student

    def put_record(self, record: Record):
        """
        Insert or replace a record.

        Raises:
            ValueError: if the student id is already bound to another badge
        """
        with self._lock:
            bound_badge = self._badge_by_student.get(record.student_id)
            if bound_badge is not None and bound_badge != record.badge_id:
                raise ValueError(
                    f"Student {record.student_id} is already bound to {bound_badge}"
                )
            self._records[record.badge_id] = copy.deepcopy(record)
            self._badge_by_student[record.student_id] = record.badge_id

    def list_records(self) -> List[Record]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._records.values()]

    # Hostels

    def get_hostel(self, hostel_id: str) -> Optional[Hostel]:
        with self._lock:
            hostel = self._hostels.get(hostel_id)
            return copy.deepcopy(hostel) if hostel else None

    def find_hostel(self, key: str) -> Optional[Hostel]:
        """Find a hostel by id, falling back to an exact name match."""
        with self._lock:
            if key in self._hostels:
                return self.get_hostel(key)
            for hostel in self._hostels.values():
                if hostel.name == key:
                    return copy.deepcopy(hostel)
            return None

    def put_hostel(self, hostel: Hostel):
        with self._lock:
            self._hostels[hostel.id] = copy.deepcopy(hostel)

    def list_hostels(self) -> List[Hostel]:
        with self._lock:
            return [copy.deepcopy(h) for h in self._hostels.values()]

    def reset(self):
        """Drop all records and restore hostels to their initial occupancy."""
        with self._lock:
            self._profiles.clear()
            self._records.clear()
            self._badge_by_student.clear()
            self._hostels.clear()
            self._load_initial_data()
            self.logger.info("Record store reset")
