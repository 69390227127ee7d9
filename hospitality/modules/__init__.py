# Hospitality Desk - Modules Package
"""
Core business logic modules for the Hospitality Desk.
"""

__version__ = "1.0.0"
__description__ = "Core modules for hospitality accommodation and kiosk scanning"

# Module descriptions
MODULES = {
    'errors': 'Error taxonomy and response envelopes',
    'models': 'Profiles, guest records and hostels',
    'identifiers': 'Badge id validation and Profile QR parsing',
    'record_store': 'In-memory profiles, records and hostels',
    'occupancy': 'Hostel bed accounting',
    'accommodation_workflow': 'Accommodation status state machine',
    'scheduler': 'Timers for the scan session',
    'feedback': 'Scan result feedback and desk routing messages',
    'scan_session': 'Kiosk scan session coordinator',
    'qr_generator': 'Profile and badge QR code generation',
    'report_generator': 'Roster and occupancy exports'
}

def get_module_info():
    """Get information about available modules"""
    return MODULES
