"""
Occupancy Module - Hospitality Desk

Hostel bed accounting. ``admit`` is the only place a bed is taken and
``release`` the only place one is given back; both run inside the caller's
store transaction so the counter changes together with the record status.
"""

import logging
from typing import Any, Dict, List

from hospitality.modules.errors import CapacityError, NotFoundError
from hospitality.modules.models import Hostel


class HostelOccupancyTracker:
    """Keeps hostel occupied-bed counters within 0..total_beds."""

    def __init__(self, store):
        self.store = store
        self.logger = logging.getLogger(__name__)

    def _require_hostel(self, hostel_id: str) -> Hostel:
        hostel = self.store.get_hostel(hostel_id)
        if hostel is None:
            raise NotFoundError(f"Hostel {hostel_id} not found")
        return hostel

    def admit(self, hostel_id: str) -> Hostel:
        """
        Take one bed in a hostel.

        Raises:
            NotFoundError: unknown hostel
            CapacityError: no beds available
        """
        with self.store.transaction():
            hostel = self._require_hostel(hostel_id)
            if hostel.available_beds <= 0:
                raise CapacityError('No beds available in assigned hostel')
            hostel.occupied_beds += 1
            self.store.put_hostel(hostel)

        self.logger.info(f"Bed taken in {hostel.name}: {hostel.occupied_beds}/{hostel.total_beds}")
        return hostel

    def release(self, hostel_id: str) -> Hostel:
        """
        Give one bed back to a hostel.

        Raises:
            NotFoundError: unknown hostel
            ValueError: the hostel has no occupied beds
        """
        with self.store.transaction():
            hostel = self._require_hostel(hostel_id)
            if hostel.occupied_beds <= 0:
                raise ValueError(f"Hostel {hostel.id} has no occupied beds to release")
            hostel.occupied_beds -= 1
            self.store.put_hostel(hostel)

        self.logger.info(f"Bed released in {hostel.name}: {hostel.occupied_beds}/{hostel.total_beds}")
        return hostel

    def occupancy_report(self) -> List[Dict[str, Any]]:
        """Occupancy of every hostel, fullest first."""
        report = [
            {
                'hostel_id': h.id,
                'hostel_name': h.name,
                'occupied_beds': h.occupied_beds,
                'total_beds': h.total_beds,
                'available_beds': h.available_beds,
                'utilization_percentage': h.utilization_percentage,
            }
            for h in self.store.list_hostels()
        ]
        report.sort(key=lambda row: row['utilization_percentage'], reverse=True)
        return report
