import json

from config import TestingConfig, validate_config


def profile_qr(student_id):
    return json.dumps({'student_id': student_id})


def bind(client, student_id='STU003', badge_id='B204', accommodation_type='HOSTEL', hostel_name='Yamuna'):
    return client.post('/api/records', json={
        'student_id': student_id,
        'badge_id': badge_id,
        'accommodation_type': accommodation_type,
        'hostel_name': hostel_name,
    })


def test_testing_config_is_valid():
    assert validate_config(TestingConfig) == []


def test_index_reports_stats(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_json()['data']['total_students'] == 0


def test_profile_lookup(client):
    assert client.get('/api/profiles/STU001').get_json()['data']['name'] == 'Rahul Sharma'
    assert client.get('/api/profiles/STU999').status_code == 404


def test_profile_qr_image(client):
    response = client.get('/api/profiles/STU001/qr')

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['qr_data'] == profile_qr('STU001')
    assert client.get('/api/profiles/STU999/qr').status_code == 404


def test_bind_and_desk_flow(client, store):
    created = bind(client, badge_id='b204')
    assert created.status_code == 201
    assert created.get_json()['data']['accommodation_status'] == 'REQUESTED'

    early = client.post('/api/records/B204/hostel-check-in')
    assert early.status_code == 400
    assert early.get_json()['error_type'] == 'payment_not_verified'

    assert client.post('/api/records/B204/payment').status_code == 200
    checked_in = client.post('/api/records/b204/hostel-check-in')
    assert checked_in.get_json()['data']['accommodation_status'] == 'CHECKED_IN'
    assert store.get_hostel('H004').occupied_beds == 91

    checked_out = client.post('/api/records/B204/check-out')
    assert checked_out.get_json()['data']['accommodation_status'] == 'CHECKED_OUT'
    assert store.get_hostel('H004').occupied_beds == 90


def test_bind_conflict_is_409(client):
    bind(client)
    response = bind(client, student_id='STU005')

    assert response.status_code == 409
    assert response.get_json()['error'] == 'Hospitality ID already in use'


def test_bind_requires_student_id(client):
    response = client.post('/api/records', json={'badge_id': 'A123'})
    assert response.status_code == 400


def test_record_lookups(client):
    bind(client, accommodation_type='NONE', hostel_name=None)

    assert client.get('/api/records/B204').get_json()['data']['student_id'] == 'STU003'
    assert client.get('/api/records/by-student/STU003').get_json()['data']['badge_id'] == 'B204'
    assert client.get('/api/records/A999').status_code == 404
    assert client.get('/api/records').get_json()['data']['total'] == 1


def test_update_check_in_date(client):
    bind(client, accommodation_type='NONE', hostel_name=None)

    response = client.patch('/api/records/B204', json={'check_in_date': '2026-10-20T08:00:00'})
    assert response.get_json()['data']['check_in_date'] == '2026-10-20T08:00:00'
    assert client.patch('/api/records/B204', json={}).status_code == 400


def test_daily_check_in_out(client):
    bind(client, accommodation_type='NONE', hostel_name=None)

    assert client.post('/api/records/B204/daily', json={'checking_out': False}).status_code == 200
    again = client.post('/api/records/B204/daily', json={'checking_out': False})
    assert again.get_json()['error_type'] == 'already_checked_in'
    assert client.post('/api/records/B204/daily', json={'checking_out': True}).status_code == 200


def test_badge_availability(client):
    bind(client)
    assert client.get('/api/badges/B204/availability').get_json()['data']['available'] is False
    assert client.get('/api/badges/B205/availability').get_json()['data']['available'] is True


def test_badge_qr(client):
    assert client.get('/api/badges/a123/qr').get_json()['data']['qr_data'] == 'A123'
    assert client.get('/api/badges/A12/qr').status_code == 400


def test_hostels_and_stats(client):
    hostels = client.get('/api/hostels').get_json()['data']['hostels']
    assert {h['id'] for h in hostels} == {'H001', 'H002', 'H003', 'H004'}

    bind(client)
    assert client.get('/api/stats').get_json()['data']['awaiting_payment'] == 1


def test_roster_export(app, client, tmp_path):
    app.extensions['hospitality']['report_generator'].output_dir = str(tmp_path)
    bind(client)

    response = client.get('/api/reports/roster?format=csv')

    assert response.status_code == 200
    assert response.get_json()['rows'] == 1
    assert client.get('/api/reports/roster?format=pdf').status_code == 400


def test_kiosk_session(client, scheduler):
    assert client.get('/api/kiosk/state').get_json()['data']['step'] == 'PROFILE_QR'

    scanned = client.post('/api/kiosk/scan', json={'text': profile_qr('STU002')})
    assert scanned.status_code == 200
    assert scanned.get_json()['state']['is_processing'] is True

    repeated = client.post('/api/kiosk/scan', json={'text': profile_qr('STU002')})
    assert repeated.status_code == 202
    assert repeated.get_json()['ignored'] is True

    scheduler.advance(3.5)
    client.post('/api/kiosk/scan', json={'text': 'C100'})
    scheduler.advance(3.5)
    assert client.get('/api/kiosk/state').get_json()['data']['step'] == 'ACCOMMODATION'

    selected = client.post('/api/kiosk/accommodation', json={'accommodation_type': 'HOSTEL', 'hostel': 'Ganga'})
    assert selected.get_json()['data']['step'] == 'CONFIRM'

    confirmed = client.post('/api/kiosk/confirm')
    body = confirmed.get_json()
    assert confirmed.status_code == 200
    assert body['data']['accommodation_status'] == 'PAID'
    assert body['state']['next_desk'] == 'HOSP_2'

    assert client.post('/api/kiosk/back').status_code == 400
    reset = client.post('/api/kiosk/reset')
    assert reset.get_json()['data']['step'] == 'PROFILE_QR'


def test_kiosk_scan_requires_text(client):
    assert client.post('/api/kiosk/scan', json={}).status_code == 400


def test_non_string_payloads_are_rejected(client):
    assert client.post('/api/kiosk/scan', json={'text': 123}).status_code == 400

    response = client.post('/api/records', json={'student_id': 42, 'badge_id': 'A123'})
    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'format_error'


def test_numeric_badge_scan_is_a_format_error(client, scheduler):
    client.post('/api/kiosk/scan', json={'text': profile_qr('STU001')})
    scheduler.advance(3.5)

    response = client.post('/api/kiosk/scan', json={'text': '1234'})

    assert response.status_code == 400
    assert response.get_json()['error_type'] == 'format_error'
