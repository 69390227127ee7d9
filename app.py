"""
Hospitality Desk - Main Application
Author: Hospitality Desk Team
Date: October 2026

This module serves as the main entry point for the Hospitality Desk service.
It wires the record store, accommodation workflow and kiosk scan session
together and exposes them as JSON routes for the desk front-ends:

- Registration desk (HOSP 1): profile lookup, badge binding, daily
  check-in/out, final check-out
- Finance desk: payment
- Hostel desk (HOSP 2): hostel check-in
- Security desk: badge lookup
- Kiosk: scan session driven by the camera

Every route answers with the workflow response envelope
({'success': ..., 'data': ..., 'message': ..., 'error': ...}).
"""

from flask import Blueprint, Flask, current_app, jsonify, request
import logging

from config import Config, init_config
from hospitality.modules.accommodation_workflow import AccommodationWorkflow
from hospitality.modules.feedback import ResultFeedback
from hospitality.modules.identifiers import normalize_badge_id
from hospitality.modules.qr_generator import QRGenerator
from hospitality.modules.record_store import RecordStore
from hospitality.modules.report_generator import ReportGenerator
from hospitality.modules.scan_session import ScanSessionCoordinator
from hospitality.modules.scheduler import ThreadingScheduler

# Configure logging
logging.basicConfig(level=logging.INFO, format=Config.LOG_FORMAT)
logger = logging.getLogger(__name__)

api = Blueprint('api', __name__)

ERROR_STATUS_CODES = {
    'not_found': 404,
    'profile_not_found': 404,
    'conflict': 409,
    'hostel_full': 409,
    'system_error': 500,
}


def create_app(config_name=None, store=None, scheduler=None, clock=None):
    """
    Create and configure the Flask application.

    Args:
        config_name (str): Key of the configuration class to use
        store (RecordStore): Store to serve; a fresh one is created if omitted
        scheduler: Timer scheduler for the kiosk session
        clock: Callable returning the current datetime for the workflow

    Returns:
        Flask: Configured application
    """
    app = Flask(__name__)
    config_class = init_config(app, config_name)
    app.config.from_object(config_class)

    if store is None:
        store = RecordStore.with_seed_data() if config_class.SEED_DEMO_DATA else RecordStore()
    scheduler = scheduler or ThreadingScheduler()

    workflow = AccommodationWorkflow(store, clock=clock)
    feedback = ResultFeedback(
        scheduler,
        display_seconds=config_class.RESULT_OVERLAY_SECONDS,
        success_vibration_ms=config_class.HAPTIC_SUCCESS_MS,
        error_vibration_ms=config_class.HAPTIC_ERROR_MS,
    )
    kiosk = ScanSessionCoordinator(
        workflow,
        scheduler,
        feedback=feedback,
        cooldown_seconds=config_class.SCAN_COOLDOWN_SECONDS,
        step_advance_delay=config_class.STEP_ADVANCE_DELAY_SECONDS,
    )

    app.extensions['hospitality'] = {
        'store': store,
        'workflow': workflow,
        'kiosk': kiosk,
        'qr_generator': QRGenerator({
            'box_size': config_class.QR_CODE_SIZE,
            'border': config_class.QR_CODE_BORDER,
        }),
        'report_generator': ReportGenerator(store, config_class.REPORTS_FOLDER),
    }

    app.register_blueprint(api)
    logger.info(f"Hospitality Desk initialized ({config_class.__name__})")
    return app


def _component(name):
    return current_app.extensions['hospitality'][name]


def _respond(envelope):
    """Turn a response envelope into a JSON response with a matching status."""
    if envelope.get('success'):
        return jsonify(envelope), 200
    return jsonify(envelope), ERROR_STATUS_CODES.get(envelope.get('error_type'), 400)


def _json_body():
    return request.get_json(silent=True) or {}


@api.route('/')
def index():
    """Service overview with desk statistics"""
    return _respond(_component('workflow').get_stats())


# Profiles

@api.route('/api/profiles/<student_id>')
def get_profile(student_id):
    """Profile lookup for a student who has no badge yet"""
    return _respond(_component('workflow').fetch_profile_for_binding(student_id))


@api.route('/api/profiles/<student_id>/qr')
def get_profile_qr(student_id):
    """Profile QR image (base64 PNG) for a registered profile"""
    profile = _component('store').get_profile(student_id)
    if profile is None:
        return jsonify({
            'success': False,
            'error': 'Student not found in database',
            'error_type': 'profile_not_found'
        }), 404

    with_caption = request.args.get('caption', 'false').lower() in ['true', '1']
    result = _component('qr_generator').generate_profile_qr(profile.to_dict(), with_caption)
    if not result['success']:
        return jsonify(result), 500
    result['image_size'] = list(result['image_size'])
    return jsonify({'success': True, 'data': result})


# Records

@api.route('/api/records', methods=['GET'])
def list_records():
    return _respond(_component('workflow').list_records())


@api.route('/api/records', methods=['POST'])
def bind_record():
    """Bind a student to a badge id"""
    try:
        data = _json_body()
        student_id = data.get('student_id')
        if not isinstance(student_id, str) or not student_id.strip():
            return jsonify({
                'success': False,
                'error': 'No student_id provided',
                'error_type': 'format_error'
            }), 400

        envelope = _component('workflow').bind(
            student_id.strip(),
            normalize_badge_id(data.get('badge_id', '')),
            data.get('accommodation_type', 'NONE'),
            hostel_name=data.get('hostel_name'),
            check_in_date=data.get('check_in_date'),
        )
        if envelope['success']:
            return jsonify(envelope), 201
        return _respond(envelope)

    except Exception as e:
        logger.error(f"Bind error: {str(e)}")
        return jsonify({
            'success': False,
            'error': 'An error occurred while binding the badge',
            'error_type': 'system_error'
        }), 500


@api.route('/api/records/<badge_id>', methods=['GET'])
def get_record(badge_id):
    return _respond(_component('workflow').lookup_by_badge(normalize_badge_id(badge_id)))


@api.route('/api/records/by-student/<student_id>')
def get_record_by_student(student_id):
    return _respond(_component('workflow').lookup_by_student_id(student_id))


@api.route('/api/records/<badge_id>', methods=['PATCH'])
def update_record(badge_id):
    """Edit the arrival timestamp"""
    check_in_date = _json_body().get('check_in_date')
    if not check_in_date:
        return jsonify({
            'success': False,
            'error': 'No check_in_date provided',
            'error_type': 'format_error'
        }), 400
    return _respond(_component('workflow').update_check_in_date(normalize_badge_id(badge_id), check_in_date))


@api.route('/api/records/<badge_id>/payment', methods=['POST'])
def process_payment(badge_id):
    return _respond(_component('workflow').process_payment(normalize_badge_id(badge_id)))


@api.route('/api/records/<badge_id>/hostel-check-in', methods=['POST'])
def hostel_check_in(badge_id):
    return _respond(_component('workflow').hostel_check_in(normalize_badge_id(badge_id)))


@api.route('/api/records/<badge_id>/check-out', methods=['POST'])
def final_check_out(badge_id):
    return _respond(_component('workflow').final_check_out(normalize_badge_id(badge_id)))


@api.route('/api/records/<badge_id>/daily', methods=['POST'])
def daily_check_in_out(badge_id):
    checking_out = bool(_json_body().get('checking_out', False))
    return _respond(_component('workflow').daily_check_in_out(normalize_badge_id(badge_id), checking_out))


@api.route('/api/badges/<badge_id>/availability')
def badge_availability(badge_id):
    return _respond(_component('workflow').check_badge_availability(normalize_badge_id(badge_id)))


@api.route('/api/badges/<badge_id>/qr')
def get_badge_qr(badge_id):
    """Printable badge QR (base64 PNG)"""
    result = _component('qr_generator').generate_badge_qr(normalize_badge_id(badge_id))
    if not result['success']:
        return jsonify(result), 400
    result['image_size'] = list(result['image_size'])
    return jsonify({'success': True, 'data': result})


# Hostels, statistics and reports

@api.route('/api/hostels')
def list_hostels():
    return _respond(_component('workflow').list_hostels())


@api.route('/api/stats')
def stats():
    return _respond(_component('workflow').get_stats())


@api.route('/api/reports/roster')
def export_roster():
    output_format = request.args.get('format', current_app.config['REPORTS_DEFAULT_FORMAT'])
    result = _component('report_generator').export_roster(output_format)
    return jsonify(result), 200 if result['success'] else 400


# Kiosk scan session

@api.route('/api/kiosk/state')
def kiosk_state():
    return jsonify({'success': True, 'data': _component('kiosk').snapshot()})


@api.route('/api/kiosk/scan', methods=['POST'])
def kiosk_scan():
    """Feed one decoded camera string into the kiosk session"""
    raw_text = _json_body().get('text')
    if not isinstance(raw_text, str) or not raw_text:
        return jsonify({
            'success': False,
            'error': 'No scan text provided',
            'error_type': 'format_error'
        }), 400

    kiosk = _component('kiosk')
    envelope = kiosk.submit_scan(raw_text)
    if envelope is None:
        return jsonify({'success': True, 'ignored': True, 'data': kiosk.snapshot()}), 202

    body = dict(envelope)
    body['state'] = kiosk.snapshot()
    return jsonify(body), 200 if envelope['success'] else 400


@api.route('/api/kiosk/accommodation', methods=['POST'])
def kiosk_accommodation():
    data = _json_body()
    envelope = _component('kiosk').select_accommodation(
        data.get('accommodation_type', 'NONE'),
        data.get('hostel'),
    )
    return _respond(envelope)


@api.route('/api/kiosk/confirm', methods=['POST'])
def kiosk_confirm():
    kiosk = _component('kiosk')
    envelope = dict(kiosk.confirm())
    envelope['state'] = kiosk.snapshot()
    return _respond(envelope)


@api.route('/api/kiosk/back', methods=['POST'])
def kiosk_back():
    kiosk = _component('kiosk')
    moved = kiosk.go_back()
    return jsonify({'success': moved, 'data': kiosk.snapshot()}), 200 if moved else 400


@api.route('/api/kiosk/reset', methods=['POST'])
def kiosk_reset():
    kiosk = _component('kiosk')
    kiosk.reset()
    return jsonify({'success': True, 'data': kiosk.snapshot()})


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'], host='0.0.0.0', port=5000)
