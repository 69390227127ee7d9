"""
Errors Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

Error taxonomy for the accommodation workflow and the helpers that turn
results and errors into the response envelope returned by every workflow
operation:

    {'success': bool, 'data': ..., 'message': ..., 'error': ..., 'error_type': ...}
"""

from typing import Any, Dict, Optional


class HospitalityError(Exception):
    """Base class for every workflow failure."""

    error_type = 'hospitality_error'

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class FormatError(HospitalityError):
    """Malformed badge id or QR payload."""

    error_type = 'format_error'


class NotFoundError(HospitalityError):
    """Unknown badge id, student id or hostel."""

    error_type = 'not_found'


class ProfileNotFoundError(NotFoundError):
    """The upstream profile registry has no entry for the student."""

    error_type = 'profile_not_found'


class ConflictError(HospitalityError):
    """Badge id or student id is already bound."""

    error_type = 'conflict'

    def __init__(self, message: str, existing_badge_id: Optional[str] = None) -> None:
        super().__init__(message, existing_badge_id=existing_badge_id)
        self.existing_badge_id = existing_badge_id


class MissingHostelError(HospitalityError):
    """Hostel accommodation requested without a hostel."""

    error_type = 'missing_hostel'


class InvalidTransitionError(HospitalityError):
    """Operation attempted from the wrong accommodation status."""

    error_type = 'invalid_transition'

    def __init__(self, message: str, current_status: Optional[str] = None) -> None:
        super().__init__(message, current_status=current_status)
        self.current_status = current_status


class PaymentNotVerifiedError(InvalidTransitionError):
    error_type = 'payment_not_verified'


class WrongAccommodationTypeError(InvalidTransitionError):
    error_type = 'wrong_accommodation_type'


class AlreadyCheckedInError(InvalidTransitionError):
    error_type = 'already_checked_in'


class NoActiveCheckInError(InvalidTransitionError):
    error_type = 'no_active_check_in'


class NoHostelAssignedError(InvalidTransitionError):
    error_type = 'no_hostel_assigned'


class CapacityError(HospitalityError):
    """Hostel has no free beds."""

    error_type = 'hostel_full'


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Build a successful response envelope."""
    response: Dict[str, Any] = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    return response


def error_response(error: HospitalityError) -> Dict[str, Any]:
    """
    Build a failed response envelope from a workflow error.

    Context values carried by the error (current status, existing badge id)
    are copied into the envelope when present.
    """
    response: Dict[str, Any] = {
        'success': False,
        'error': error.message,
        'error_type': error.error_type,
    }
    for key, value in error.context.items():
        if value is not None:
            response[key] = value
    return response


def system_error_response(message: str = 'An unexpected error occurred') -> Dict[str, Any]:
    return {
        'success': False,
        'error': message,
        'error_type': 'system_error',
    }
