# Hospitality Desk - App Package
"""
Main application package for the Hospitality Desk.
This package contains the accommodation workflow, the kiosk scan session and
their supporting modules.
"""

__version__ = "1.0.0"
__author__ = "Hospitality Desk Team"
__description__ = "Guest hospitality check-in pipeline with QR-driven badge binding and hostel occupancy tracking"

# Import core components for easy access
from .modules.record_store import RecordStore
from .modules.accommodation_workflow import AccommodationWorkflow
from .modules.occupancy import HostelOccupancyTracker
from .modules.scan_session import ScanSessionCoordinator
from .modules.feedback import ResultFeedback
from .modules.scheduler import ManualScheduler, ThreadingScheduler
from .modules.qr_generator import QRGenerator
from .modules.report_generator import ReportGenerator

__all__ = [
    'RecordStore',
    'AccommodationWorkflow',
    'HostelOccupancyTracker',
    'ScanSessionCoordinator',
    'ResultFeedback',
    'ManualScheduler',
    'ThreadingScheduler',
    'QRGenerator',
    'ReportGenerator'
]
