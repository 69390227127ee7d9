"""
Identifiers Module - Hospitality Desk

Badge id format checks and Profile QR payload parsing. Everything here is
pure: no store access and no logging of guest data.
"""

import json
import re
from typing import Any, Dict

from hospitality.modules.errors import FormatError

BADGE_ID_PATTERN = re.compile(r'^[A-Z][0-9]{3}$')
BADGE_ID_FORMAT_HINT = 'A123'


def is_valid_badge_id(badge_id: Any) -> bool:
    """Return True when ``badge_id`` is one uppercase letter and three digits."""
    return isinstance(badge_id, str) and BADGE_ID_PATTERN.match(badge_id) is not None


def normalize_badge_id(raw_text: str) -> str:
    """Trim and uppercase scanned or typed badge text."""
    if raw_text is None:
        return ''
    return str(raw_text).strip().upper()


def require_badge_id(badge_id: Any) -> str:
    """
    Validate a badge id.

    Raises:
        FormatError: if the id does not match the badge format
    """
    if not is_valid_badge_id(badge_id):
        raise FormatError(f'Invalid Hospitality ID format (expected: {BADGE_ID_FORMAT_HINT})')
    return badge_id


def parse_profile_qr(raw_text: str) -> Dict[str, str]:
    """
    Decode a Profile QR payload.

    The payload must be a JSON object with a non-empty string ``student_id``
    key. Extra keys are ignored.

    Args:
        raw_text (str): Decoded QR text

    Returns:
        Dict[str, str]: ``{'student_id': ...}``

    Raises:
        FormatError: on invalid JSON or a missing/empty student id
    """
    try:
        decoded = json.loads(raw_text)
    except (TypeError, ValueError):
        raise FormatError('Invalid QR code format')

    if not isinstance(decoded, dict):
        raise FormatError('Invalid QR code format')

    student_id = decoded.get('student_id')
    if not isinstance(student_id, str) or not student_id.strip():
        raise FormatError('Missing required field: student_id')

    return {'student_id': student_id.strip()}
