"""
Accommodation Workflow Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

This module implements the guest accommodation lifecycle. A guest profile is
bound to a badge id at the registration desk, external hostel guests pay at
the finance desk, hostel guests take a bed at the hostel desk and finally
check out. Guests without hostel accommodation check in and out daily.

Status flow:
    HOSTEL guests:  REQUESTED -> PAID -> CHECKED_IN -> CHECKED_OUT
                    (affiliated guests start at PAID)
    Day guests:     NONE (daily check-in/out entries only)

Features:
- Badge id binding with uniqueness checks
- Payment, hostel check-in and final check-out transitions
- Hostel bed accounting through the occupancy tracker
- Daily check-in/out for guests without accommodation
- Record lookups, listing and desk statistics

Every public operation returns the response envelope built in
``hospitality.modules.errors``; no exception escapes this module.
"""

import logging
from datetime import datetime
from functools import wraps
from typing import Any, Callable, Dict, Optional

from hospitality.modules.errors import (
    AlreadyCheckedInError, ConflictError, FormatError, HospitalityError,
    InvalidTransitionError, MissingHostelError, NoActiveCheckInError,
    NoHostelAssignedError, NotFoundError, PaymentNotVerifiedError,
    ProfileNotFoundError, WrongAccommodationTypeError, error_response,
    success_response, system_error_response,
)
from hospitality.modules.identifiers import require_badge_id
from hospitality.modules.models import (
    AccommodationStatus, AccommodationType, DailyCheckIn, GuestType, Record,
    status_label,
)
from hospitality.modules.occupancy import HostelOccupancyTracker

logger = logging.getLogger(__name__)


def workflow_operation(func):
    """
    Run a workflow operation and wrap its outcome in a response envelope.

    The wrapped method returns ``(data, message)``. Workflow errors become
    failed envelopes; anything else is logged and reported as a system error.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            data, message = func(self, *args, **kwargs)
            return success_response(data, message)
        except HospitalityError as e:
            self.logger.warning(f"{func.__name__} rejected: {e.message}")
            return error_response(e)
        except Exception as e:
            self.logger.error(f"{func.__name__} failed: {str(e)}")
            return system_error_response()
    return wrapper


class AccommodationWorkflow:
    """
    Accommodation state machine over a record store.
    The workflow is the only component that mutates records and hostel
    occupancy.
    """

    def __init__(self, store, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the workflow.

        Args:
            store: RecordStore instance (profiles, records, hostels)
            clock: Callable returning the current datetime
        """
        self.store = store
        self.occupancy = HostelOccupancyTracker(store)
        self.clock = clock or datetime.now
        self.logger = logger

    def _now(self) -> str:
        return self.clock().isoformat()

    def _today(self) -> str:
        return self.clock().strftime('%Y-%m-%d')

    def _require_record(self, badge_id: str) -> Record:
        record = self.store.get_record(badge_id)
        if record is None:
            raise NotFoundError('Student not found')
        return record

    def _save(self, record: Record):
        record.updated_at = self._now()
        self.store.put_record(record)

    # Registration desk

    @workflow_operation
    def fetch_profile_for_binding(self, student_id: str):
        """
        Get the profile of a student who has not been bound yet.

        Args:
            student_id (str): Student ID read from the Profile QR

        Returns:
            Dict[str, Any]: Envelope with the profile as data
        """
        profile = self.store.get_profile(student_id)
        if profile is None:
            raise ProfileNotFoundError('Student not found in database')

        existing_badge = self.store.badge_for_student(student_id)
        if existing_badge:
            raise ConflictError(
                f"Student already mapped to Hospitality ID: {existing_badge}",
                existing_badge_id=existing_badge,
            )

        return profile.to_dict(), None

    @workflow_operation
    def check_badge_availability(self, badge_id: str):
        require_badge_id(badge_id)
        return {'available': not self.store.is_badge_bound(badge_id)}, None

    @workflow_operation
    def bind(self, student_id: str, badge_id: str, accommodation_type: str,
             hostel_name: Optional[str] = None, check_in_date: Optional[str] = None):
        """
        Bind a student to a badge id and create the guest record.

        Hostel guests from affiliated institutions start at PAID since
        their accommodation is not charged; external hostel guests start
        at REQUESTED and must pay first. Day guests stay at NONE.

        Args:
            student_id (str): Student ID from the Profile QR
            badge_id (str): Badge id (format A123)
            accommodation_type (str): NONE or HOSTEL
            hostel_name (str): Hostel id or name, required for HOSTEL
            check_in_date (str): Arrival timestamp, defaults to now

        Returns:
            Dict[str, Any]: Envelope with the new record as data
        """
        require_badge_id(badge_id)
        if accommodation_type not in AccommodationType.ALL:
            raise FormatError(f"Invalid accommodation type: {accommodation_type}")

        with self.store.transaction():
            if self.store.is_badge_bound(badge_id):
                raise ConflictError('Hospitality ID already in use', existing_badge_id=badge_id)

            existing_badge = self.store.badge_for_student(student_id)
            if existing_badge:
                raise ConflictError(
                    f"Student already mapped to: {existing_badge}",
                    existing_badge_id=existing_badge,
                )

            profile = self.store.get_profile(student_id)
            if profile is None:
                raise ProfileNotFoundError('Student profile not found')

            hostel = None
            if accommodation_type == AccommodationType.HOSTEL:
                if not hostel_name:
                    raise MissingHostelError('Hostel name required for hostel accommodation')
                hostel = self.store.find_hostel(hostel_name)
                if hostel is None:
                    raise NotFoundError(f"Hostel {hostel_name} not found")

            if accommodation_type == AccommodationType.HOSTEL:
                if profile.guest_type == GuestType.AFFILIATED:
                    initial_status = AccommodationStatus.PAID
                else:
                    initial_status = AccommodationStatus.REQUESTED
            else:
                initial_status = AccommodationStatus.NONE

            now = self._now()
            record = Record(
                badge_id=badge_id,
                student_id=student_id,
                name=profile.name,
                email=profile.email,
                phone=profile.phone,
                affiliation=profile.affiliation,
                guest_type=profile.guest_type,
                accommodation_type=accommodation_type,
                accommodation_status=initial_status,
                hostel_id=hostel.id if hostel else None,
                hostel_name=hostel.name if hostel else None,
                check_in_date=check_in_date or now,
                daily_check_ins=[] if accommodation_type == AccommodationType.NONE else None,
                created_at=now,
                updated_at=now,
            )
            self.store.put_record(record)

        if initial_status == AccommodationStatus.REQUESTED:
            message = 'Student registered. Redirect to Finance for payment.'
        elif initial_status == AccommodationStatus.PAID:
            message = 'Student registered. Redirect to HOSP_2 for hostel check-in.'
        else:
            message = 'Student registered successfully'

        self.logger.info(f"Bound {student_id} to {badge_id} ({accommodation_type}, {initial_status})")
        return record.to_dict(), message

    @workflow_operation
    def update_check_in_date(self, badge_id: str, check_in_date: str):
        """Edit the arrival timestamp, the only editable record field."""
        with self.store.transaction():
            record = self._require_record(badge_id)
            record.check_in_date = check_in_date
            self._save(record)

        return record.to_dict(), 'Student updated successfully'

    # Finance desk

    @workflow_operation
    def process_payment(self, badge_id: str):
        """Mark the hostel fee of an external guest as paid (REQUESTED -> PAID)."""
        with self.store.transaction():
            record = self._require_record(badge_id)
            if record.accommodation_status != AccommodationStatus.REQUESTED:
                raise InvalidTransitionError(
                    f"Cannot process payment. Current status: {record.accommodation_status}",
                    current_status=record.accommodation_status,
                )

            record.accommodation_status = AccommodationStatus.PAID
            record.payment_timestamp = self._now()
            self._save(record)

        self.logger.info(f"Payment processed for {badge_id}")
        return record.to_dict(), 'Payment processed. Redirect student to HOSP_2 for hostel check-in.'

    # Hostel desk

    @workflow_operation
    def hostel_check_in(self, badge_id: str):
        """
        Give a paid guest a bed in the assigned hostel (PAID -> CHECKED_IN).

        A guest still at REQUESTED is rejected with a payment-not-verified
        error so the desk can send them to Finance.
        """
        with self.store.transaction():
            record = self._require_record(badge_id)
            status = record.accommodation_status

            if status == AccommodationStatus.REQUESTED:
                raise PaymentNotVerifiedError(
                    'Payment not verified. Redirect to Finance first.',
                    current_status=status,
                )
            if status != AccommodationStatus.PAID:
                raise InvalidTransitionError(
                    f"Cannot check in. Current status: {status}",
                    current_status=status,
                )
            if not record.hostel_id:
                raise NoHostelAssignedError(
                    'No hostel assigned to this student',
                    current_status=status,
                )

            self.occupancy.admit(record.hostel_id)

            record.accommodation_status = AccommodationStatus.CHECKED_IN
            record.hostel_check_in_date = self._now()
            self._save(record)

        self.logger.info(f"{badge_id} checked into {record.hostel_name}")
        return record.to_dict(), f"Checked into {record.hostel_name}"

    @workflow_operation
    def final_check_out(self, badge_id: str):
        """Close a hostel stay and free the bed (CHECKED_IN -> CHECKED_OUT)."""
        with self.store.transaction():
            record = self._require_record(badge_id)
            if record.accommodation_status != AccommodationStatus.CHECKED_IN:
                raise InvalidTransitionError(
                    f"Cannot checkout. Current status: {record.accommodation_status}",
                    current_status=record.accommodation_status,
                )

            self.occupancy.release(record.hostel_id)

            record.accommodation_status = AccommodationStatus.CHECKED_OUT
            record.check_out_date = self._now()
            self._save(record)

        self.logger.info(f"{badge_id} checked out of {record.hostel_name}")
        return record.to_dict(), 'Final check-out completed'

    # Day guests

    @workflow_operation
    def daily_check_in_out(self, badge_id: str, checking_out: bool):
        """
        Record a daily check-in or check-out for a guest without hostel
        accommodation.

        At most one open entry exists per date. A guest who checked out can
        check in again the same day; that opens a new entry.

        Args:
            badge_id (str): Badge id
            checking_out (bool): True to close today's open entry

        Returns:
            Dict[str, Any]: Envelope with the updated record
        """
        with self.store.transaction():
            record = self._require_record(badge_id)
            if record.accommodation_status != AccommodationStatus.NONE:
                raise WrongAccommodationTypeError(
                    'Daily check-in/out only available for students without hostel accommodation',
                    current_status=record.accommodation_status,
                )

            today = self._today()
            if record.daily_check_ins is None:
                record.daily_check_ins = []
            open_entry = record.open_check_in_for(today)

            if checking_out:
                if open_entry is None:
                    raise NoActiveCheckInError(
                        'No active check-in to close for today',
                        current_status=record.accommodation_status,
                    )
                open_entry.check_out_time = self._now()
            else:
                if open_entry is not None:
                    raise AlreadyCheckedInError(
                        'Already checked in today',
                        current_status=record.accommodation_status,
                    )
                record.daily_check_ins.append(DailyCheckIn(date=today, check_in_time=self._now()))

            self._save(record)

        action = 'check-out' if checking_out else 'check-in'
        self.logger.info(f"Daily {action} recorded for {badge_id}")
        return record.to_dict(), f"Daily {action} successful"

    # Queries

    @workflow_operation
    def lookup_by_badge(self, badge_id: str):
        require_badge_id(badge_id)
        record = self.store.get_record(badge_id)
        if record is None:
            raise NotFoundError('No student mapped to this Hospitality ID')
        return record.to_dict(), None

    @workflow_operation
    def lookup_by_student_id(self, student_id: str):
        record = self.store.get_record_by_student(student_id)
        if record is None:
            raise NotFoundError(f"No Hospitality ID mapped to student {student_id}")
        return record.to_dict(), None

    @workflow_operation
    def list_records(self):
        records = [r.to_dict() for r in self.store.list_records()]
        return {'students': records, 'total': len(records)}, None

    @workflow_operation
    def list_hostels(self):
        return {'hostels': [h.to_dict() for h in self.store.list_hostels()]}, None

    @workflow_operation
    def get_stats(self):
        """Count records per desk queue."""
        records = self.store.list_records()

        def count(status: str) -> int:
            return sum(1 for r in records if r.accommodation_status == status)

        stats: Dict[str, Any] = {
            'total_students': len(records),
            'checked_in': count(AccommodationStatus.CHECKED_IN),
            'awaiting_payment': count(AccommodationStatus.REQUESTED),
            'awaiting_hostel_checkin': count(AccommodationStatus.PAID),
            'checked_out': count(AccommodationStatus.CHECKED_OUT),
            'daily_checkins': count(AccommodationStatus.NONE),
            'status_labels': {s: status_label(s) for s in AccommodationStatus.ALL},
        }
        return stats, None
