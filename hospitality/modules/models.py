"""
Models Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

Data structures shared by the hospitality modules: guest profiles, bound
guest records with their daily check-ins, and hostels with bed counters.
Timestamps are ISO-8601 strings and dates are YYYY-MM-DD strings, the same
representation the records are served in.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


class GuestType:
    """Profile type tag deciding whether hostel payment is required."""
    EXTERNAL = 'EXTERNAL'
    AFFILIATED = 'AFFILIATED'

    ALL = (EXTERNAL, AFFILIATED)


class AccommodationType:
    NONE = 'NONE'
    HOSTEL = 'HOSTEL'

    ALL = (NONE, HOSTEL)


class AccommodationStatus:
    """Accommodation state machine values."""
    NONE = 'NONE'
    REQUESTED = 'REQUESTED'
    PAID = 'PAID'
    CHECKED_IN = 'CHECKED_IN'
    CHECKED_OUT = 'CHECKED_OUT'

    ALL = (NONE, REQUESTED, PAID, CHECKED_IN, CHECKED_OUT)

    LABELS = {
        NONE: 'No Accommodation',
        REQUESTED: 'Awaiting Payment',
        PAID: 'Payment Verified',
        CHECKED_IN: 'Checked In',
        CHECKED_OUT: 'Checked Out',
    }


@dataclass(frozen=True)
class Profile:
    """Identity facts about a guest, sourced from the profile registry."""
    student_id: str
    name: str
    email: str
    phone: str
    affiliation: str
    guest_type: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DailyCheckIn:
    """One day-visit entry for a guest without hostel accommodation."""
    date: str
    check_in_time: str
    check_out_time: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None


@dataclass
class Record:
    """Guest record created when a badge id is bound to a student id."""
    badge_id: str
    student_id: str
    name: str
    email: str
    phone: str
    affiliation: str
    guest_type: str
    accommodation_type: str
    accommodation_status: str
    created_at: str
    updated_at: str
    hostel_id: Optional[str] = None
    hostel_name: Optional[str] = None
    check_in_date: Optional[str] = None
    hostel_check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    payment_timestamp: Optional[str] = None
    daily_check_ins: Optional[List[DailyCheckIn]] = None

    def open_check_in_for(self, date: str) -> Optional[DailyCheckIn]:
        """Return the entry for ``date`` that has not been checked out yet."""
        for entry in self.daily_check_ins or []:
            if entry.date == date and entry.is_open:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Hostel:
    """Hostel with bed counters. Available beds are always derived."""
    id: str
    name: str
    total_beds: int
    occupied_beds: int = 0
    sharing: Optional[str] = None
    price: Optional[int] = None

    @property
    def available_beds(self) -> int:
        return self.total_beds - self.occupied_beds

    @property
    def utilization_percentage(self) -> float:
        if self.total_beds <= 0:
            return 0.0
        return round(self.occupied_beds * 100.0 / self.total_beds, 2)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['available_beds'] = self.available_beds
        return data


def profile_from_dict(data: Dict[str, Any]) -> Profile:
    return Profile(
        student_id=data['student_id'],
        name=data['name'],
        email=data.get('email', ''),
        phone=data.get('phone', ''),
        affiliation=data.get('affiliation', ''),
        guest_type=data.get('guest_type', GuestType.EXTERNAL),
    )


def hostel_from_dict(data: Dict[str, Any]) -> Hostel:
    return Hostel(
        id=data['id'],
        name=data['name'],
        total_beds=int(data['total_beds']),
        occupied_beds=int(data.get('occupied_beds', 0)),
        sharing=data.get('sharing'),
        price=data.get('price'),
    )


def status_label(status: str) -> str:
    """Display label for an accommodation status."""
    return AccommodationStatus.LABELS.get(status, status)
