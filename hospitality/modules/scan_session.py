"""
Scan Session Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

This module sequences camera scans at the registration kiosk into workflow
calls. A session walks through five steps:

    PROFILE_QR -> HOSP_ID -> ACCOMMODATION -> CONFIRM -> COMPLETE

The first two steps are driven by scans (Profile QR, then the badge id); the
accommodation choice and the confirmation come from the operator.

Every scan goes through the same gate before reaching a step handler:
1. ignored while a result overlay is displayed
2. ignored while an operation is in flight
3. ignored if it repeats the last accepted scan within the cooldown window
4. otherwise accepted, the cooldown restarted and the handler called

Features:
- One immutable session object per step
- Duplicate scan suppression with a timed cooldown
- Success/error feedback with a timed overlay
- Delayed step advance so the success overlay stays visible
- Session generation guard that discards results after a reset
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional

from hospitality.modules.errors import (
    CapacityError, ConflictError, FormatError, HospitalityError,
    InvalidTransitionError, MissingHostelError, NotFoundError, error_response,
    success_response,
)
from hospitality.modules.feedback import ERROR, SUCCESS, ResultFeedback, route_for_record
from hospitality.modules.identifiers import normalize_badge_id, parse_profile_qr, require_badge_id
from hospitality.modules.models import (
    AccommodationType, Hostel, Profile, hostel_from_dict, profile_from_dict,
)


class ScanStep:
    PROFILE_QR = 'PROFILE_QR'
    HOSP_ID = 'HOSP_ID'
    ACCOMMODATION = 'ACCOMMODATION'
    CONFIRM = 'CONFIRM'
    COMPLETE = 'COMPLETE'

    ALL = (PROFILE_QR, HOSP_ID, ACCOMMODATION, CONFIRM, COMPLETE)


@dataclass(frozen=True)
class ProfileStep:
    """Waiting for the guest's Profile QR."""
    step: ClassVar[str] = ScanStep.PROFILE_QR


@dataclass(frozen=True)
class HospIdStep:
    """Profile fetched; waiting for the badge id."""
    student_id: str
    profile: Profile
    step: ClassVar[str] = ScanStep.HOSP_ID


@dataclass(frozen=True)
class AccommodationStep:
    """Badge id accepted; waiting for the accommodation choice."""
    student_id: str
    profile: Profile
    badge_id: str
    step: ClassVar[str] = ScanStep.ACCOMMODATION


@dataclass(frozen=True)
class ConfirmStep:
    """Everything chosen; waiting for the operator to confirm."""
    student_id: str
    profile: Profile
    badge_id: str
    accommodation_type: str
    hostel: Optional[Hostel] = None
    step: ClassVar[str] = ScanStep.CONFIRM


@dataclass(frozen=True)
class CompleteStep:
    """Guest bound; ``next_desk`` tells the operator where to send them."""
    record: Dict[str, Any]
    next_desk: str
    title: str
    message: str
    step: ClassVar[str] = ScanStep.COMPLETE


class ScanSessionCoordinator:
    """
    Kiosk scan session over an accommodation workflow.
    Owns the session state; the rendering layer only reads ``snapshot()``.
    """

    def __init__(self, workflow, scheduler, feedback: Optional[ResultFeedback] = None,
                 cooldown_seconds: float = 3.0, step_advance_delay: float = 1.5):
        """
        Initialize the coordinator.

        Args:
            workflow: AccommodationWorkflow instance
            scheduler: Scheduler used for every delay (call_later)
            feedback: ResultFeedback; one with a 2 second overlay is created if omitted
            cooldown_seconds (float): Window in which a repeated scan is ignored
            step_advance_delay (float): Delay between a successful scan and the next step
        """
        self.workflow = workflow
        self.scheduler = scheduler
        self.feedback = feedback or ResultFeedback(scheduler)
        self.cooldown_seconds = cooldown_seconds
        self.step_advance_delay = step_advance_delay
        self.logger = logging.getLogger(__name__)

        self._lock = threading.RLock()
        self._session = ProfileStep()
        self._is_processing = False
        self._generation = 0
        self._last_scan_key: Optional[str] = None
        self._cooldown_timer = None
        self._advance_timer = None
        self._last_response: Optional[Dict[str, Any]] = None

        self._scan_handlers = {
            ScanStep.PROFILE_QR: self._handle_profile_scan,
            ScanStep.HOSP_ID: self._handle_badge_scan,
        }

    @property
    def session(self):
        return self._session

    @property
    def step(self) -> str:
        return self._session.step

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def scan_result(self) -> Optional[str]:
        return self.feedback.current

    # Scanning

    def submit_scan(self, raw_text: str) -> Optional[Dict[str, Any]]:
        """
        Feed one decoded camera string into the session.

        Args:
            raw_text (str): Decoded QR/barcode text

        Returns:
            Optional[Dict[str, Any]]: Response envelope of the handled scan,
            or None when the scan was ignored (no message should be shown)
        """
        if raw_text is None:
            return None

        with self._lock:
            if self.feedback.is_active:
                return None
            if self._is_processing:
                return None

            session = self._session
            handler = self._scan_handlers.get(session.step)
            if handler is None:
                return None

            key = normalize_badge_id(raw_text) if session.step == ScanStep.HOSP_ID else raw_text
            if key == self._last_scan_key:
                return None

            self._accept_scan(key)
            self._is_processing = True
            generation = self._generation

        try:
            return handler(raw_text, session, generation)
        except Exception as e:
            self.logger.error(f"Scan handling failed: {str(e)}")
            with self._lock:
                if generation == self._generation:
                    self._is_processing = False
            raise

    def _accept_scan(self, key: str):
        self._last_scan_key = key
        if self._cooldown_timer is not None:
            self._cooldown_timer.cancel()
        self._cooldown_timer = self.scheduler.call_later(self.cooldown_seconds, self._end_cooldown)

    def _end_cooldown(self):
        with self._lock:
            self._last_scan_key = None
            self._cooldown_timer = None

    def _handle_profile_scan(self, raw_text: str, session: ProfileStep, generation: int):
        try:
            student_id = parse_profile_qr(raw_text)['student_id']
        except FormatError as e:
            return self._fail(generation, error_response(e))

        response = self.workflow.fetch_profile_for_binding(student_id)
        if not response['success']:
            return self._fail(generation, response)

        profile = profile_from_dict(response['data'])
        next_session = HospIdStep(student_id=student_id, profile=profile)
        return self._succeed(generation, response, next_session)

    def _handle_badge_scan(self, raw_text: str, session: HospIdStep, generation: int):
        badge_id = normalize_badge_id(raw_text)
        try:
            require_badge_id(badge_id)
        except FormatError as e:
            return self._fail(generation, error_response(e))

        response = self.workflow.check_badge_availability(badge_id)
        if not response['success']:
            return self._fail(generation, response)
        if not response['data']['available']:
            return self._fail(generation, error_response(
                ConflictError('Hospitality ID already in use', existing_badge_id=badge_id)
            ))

        next_session = AccommodationStep(
            student_id=session.student_id,
            profile=session.profile,
            badge_id=badge_id,
        )
        return self._succeed(generation, success_response({'badge_id': badge_id}), next_session)

    def _fail(self, generation: int, response: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            if generation != self._generation:
                return None
            self.feedback.show(ERROR)
            self._is_processing = False
            self._last_response = response

        self.logger.info(f"Scan rejected at {self.step}: {response.get('error')}")
        return response

    def _succeed(self, generation: int, response: Dict[str, Any], next_session) -> Optional[Dict[str, Any]]:
        with self._lock:
            if generation != self._generation:
                return None
            self.feedback.show(SUCCESS)
            self._last_response = response
            self._advance_timer = self.scheduler.call_later(
                self.step_advance_delay,
                lambda: self._advance(generation, next_session),
            )

        return response

    def _advance(self, generation: int, next_session):
        with self._lock:
            if generation != self._generation:
                return
            self._session = next_session
            self._is_processing = False
            self._advance_timer = None

        self.logger.info(f"Scan session advanced to {next_session.step}")

    # Operator actions

    def select_accommodation(self, accommodation_type: str,
                             hostel: Optional[str] = None) -> Dict[str, Any]:
        """
        Choose the accommodation for the guest and move to confirmation.

        Args:
            accommodation_type (str): NONE or HOSTEL
            hostel (str): Hostel id or name, required for HOSTEL

        Returns:
            Dict[str, Any]: Response envelope
        """
        with self._lock:
            session = self._session
            try:
                if not isinstance(session, AccommodationStep) or self._is_processing:
                    raise InvalidTransitionError(
                        f"Cannot choose accommodation at step {session.step}",
                        current_status=session.step,
                    )
                if accommodation_type not in AccommodationType.ALL:
                    raise FormatError(f"Invalid accommodation type: {accommodation_type}")

                selected = None
                if accommodation_type == AccommodationType.HOSTEL:
                    if not hostel:
                        raise MissingHostelError('Hostel name required for hostel accommodation')
                    selected = self._find_hostel(hostel)
                    if selected.available_beds <= 0:
                        raise CapacityError(f"No beds available in {selected.name}")

            except HospitalityError as e:
                return error_response(e)

            self._session = ConfirmStep(
                student_id=session.student_id,
                profile=session.profile,
                badge_id=session.badge_id,
                accommodation_type=accommodation_type,
                hostel=selected,
            )
            return success_response(self.snapshot())

    def _find_hostel(self, key: str) -> Hostel:
        response = self.workflow.list_hostels()
        if response['success']:
            for data in response['data']['hostels']:
                if data['id'] == key or data['name'] == key:
                    data = {k: v for k, v in data.items() if k != 'available_beds'}
                    return hostel_from_dict(data)
        raise NotFoundError(f"Hostel {key} not found")

    def confirm(self) -> Dict[str, Any]:
        """
        Bind the guest with the chosen accommodation.

        On success the session moves to COMPLETE with the desk the guest
        should go to next; on failure an error is shown and the session
        stays at CONFIRM.
        """
        with self._lock:
            session = self._session
            if not isinstance(session, ConfirmStep) or self._is_processing:
                return error_response(InvalidTransitionError(
                    f"Cannot confirm at step {session.step}",
                    current_status=session.step,
                ))
            self._is_processing = True
            generation = self._generation

        response = self.workflow.bind(
            session.student_id,
            session.badge_id,
            session.accommodation_type,
            hostel_name=session.hostel.id if session.hostel else None,
        )

        if not response['success']:
            return self._fail(generation, response)

        route = route_for_record(response['data'])
        with self._lock:
            if generation != self._generation:
                return response
            self.feedback.show(SUCCESS)
            self._session = CompleteStep(
                record=response['data'],
                next_desk=route.next_desk,
                title=route.title,
                message=route.message,
            )
            self._is_processing = False
            self._last_response = response

        self.logger.info(f"Registration complete for {session.badge_id}, next desk {route.next_desk}")
        return response

    def go_back(self) -> bool:
        """
        Step back from HOSP_ID (full reset) or ACCOMMODATION (badge cleared).

        Returns:
            bool: True if the session moved
        """
        with self._lock:
            session = self._session
            if self._is_processing:
                return False
            if isinstance(session, HospIdStep):
                self.reset()
                return True
            if isinstance(session, AccommodationStep):
                self._session = HospIdStep(student_id=session.student_id, profile=session.profile)
                return True
            return False

    def reset(self):
        """Start a fresh session; pending timers and in-flight results are discarded."""
        with self._lock:
            self._generation += 1
            for timer in (self._cooldown_timer, self._advance_timer):
                if timer is not None:
                    timer.cancel()
            self._cooldown_timer = None
            self._advance_timer = None
            self._last_scan_key = None
            self._is_processing = False
            self._last_response = None
            self.feedback.clear()
            self._session = ProfileStep()

    # Rendering

    def snapshot(self) -> Dict[str, Any]:
        """Flat, read-only view of the session for the UI."""
        with self._lock:
            session = self._session
            state: Dict[str, Any] = {
                'step': session.step,
                'is_processing': self._is_processing,
                'scan_result': self.feedback.current,
                'student_id': getattr(session, 'student_id', None),
                'profile': session.profile.to_dict() if hasattr(session, 'profile') else None,
                'badge_id': getattr(session, 'badge_id', None),
                'accommodation_type': getattr(session, 'accommodation_type', None),
                'hostel': session.hostel.to_dict() if getattr(session, 'hostel', None) else None,
            }
            if isinstance(session, CompleteStep):
                state['student_id'] = session.record.get('student_id')
                state['badge_id'] = session.record.get('badge_id')
                state['accommodation_type'] = session.record.get('accommodation_type')
                state['record'] = session.record
                state['next_desk'] = session.next_desk
                state['title'] = session.title
                state['message'] = session.message
            if self._last_response is not None and not self._last_response.get('success'):
                state['last_error'] = self._last_response.get('error')
            return state
