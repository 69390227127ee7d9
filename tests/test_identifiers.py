import json

import pytest

from hospitality.modules.errors import FormatError
from hospitality.modules.identifiers import (
    is_valid_badge_id, normalize_badge_id, parse_profile_qr, require_badge_id,
)


@pytest.mark.parametrize('badge_id', ['A123', 'Z000', 'B204'])
def test_valid_badge_ids(badge_id):
    assert is_valid_badge_id(badge_id)
    assert require_badge_id(badge_id) == badge_id


@pytest.mark.parametrize('badge_id', ['a123', 'A12', 'A1234', '1234', 'AB12', '', None, 123])
def test_invalid_badge_ids(badge_id):
    assert not is_valid_badge_id(badge_id)
    with pytest.raises(FormatError, match='expected: A123'):
        require_badge_id(badge_id)


def test_normalize_badge_id():
    assert normalize_badge_id('  a123\n') == 'A123'
    assert normalize_badge_id(None) == ''
    assert normalize_badge_id(1234) == '1234'


def test_parse_profile_qr():
    payload = json.dumps({'student_id': 'STU001', 'name': 'ignored'})
    assert parse_profile_qr(payload) == {'student_id': 'STU001'}


@pytest.mark.parametrize('raw_text, message', [
    ('not json', 'Invalid QR code format'),
    ('[1, 2]', 'Invalid QR code format'),
    ('{}', 'Missing required field: student_id'),
    ('{"student_id": "  "}', 'Missing required field: student_id'),
    ('{"student_id": 42}', 'Missing required field: student_id'),
])
def test_parse_profile_qr_rejects(raw_text, message):
    with pytest.raises(FormatError) as excinfo:
        parse_profile_qr(raw_text)
    assert excinfo.value.message == message
    assert excinfo.value.error_type == 'format_error'
