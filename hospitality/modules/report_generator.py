"""
Report Generator Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

This module exports the guest roster and hostel occupancy for the desk
coordinators. Data is assembled with pandas and written as CSV or as an
Excel workbook (roster, occupancy and status summary sheets).
"""

import logging
import os
from datetime import datetime
from typing import Any, Dict

import pandas as pd

from hospitality.modules.models import AccommodationStatus, status_label
from hospitality.modules.occupancy import HostelOccupancyTracker

ROSTER_COLUMNS = [
    'badge_id', 'student_id', 'name', 'affiliation', 'guest_type',
    'accommodation_type', 'accommodation_status', 'status_label', 'hostel_name',
    'check_in_date', 'payment_timestamp', 'hostel_check_in_date', 'check_out_date',
    'daily_visits',
]


class ReportGenerator:
    """
    Roster and occupancy exports built from the record store.
    """

    def __init__(self, store, output_dir: str = 'reports'):
        """
        Initialize the report generator.

        Args:
            store: RecordStore instance
            output_dir (str): Folder for exported files
        """
        self.store = store
        self.occupancy = HostelOccupancyTracker(store)
        self.output_dir = str(output_dir)
        self.supported_formats = ['csv', 'excel']
        self.logger = logging.getLogger(__name__)

    def roster_frame(self) -> pd.DataFrame:
        """One row per guest record, ordered by badge id."""
        rows = []
        for record in self.store.list_records():
            row = record.to_dict()
            row['status_label'] = status_label(record.accommodation_status)
            row['daily_visits'] = len(record.daily_check_ins or [])
            rows.append(row)

        df = pd.DataFrame(rows, columns=ROSTER_COLUMNS)
        return df.sort_values('badge_id').reset_index(drop=True)

    def occupancy_frame(self) -> pd.DataFrame:
        """Bed counters per hostel, fullest first."""
        return pd.DataFrame(self.occupancy.occupancy_report())

    def status_summary_frame(self) -> pd.DataFrame:
        """Guest count per accommodation status, every status listed."""
        roster = self.roster_frame()
        counts = roster['accommodation_status'].value_counts()
        return pd.DataFrame([
            {
                'status': status,
                'label': status_label(status),
                'count': int(counts.get(status, 0)),
            }
            for status in AccommodationStatus.ALL
        ])

    def export_roster(self, output_format: str = 'csv') -> Dict[str, Any]:
        """
        Write the roster to the output folder.

        Args:
            output_format (str): 'csv' or 'excel'

        Returns:
            Dict[str, Any]: Export result with the file path
        """
        if output_format not in self.supported_formats:
            return {
                'success': False,
                'error': f'Unsupported output format: {output_format}'
            }

        try:
            os.makedirs(self.output_dir, exist_ok=True)
            stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            roster = self.roster_frame()

            if output_format == 'csv':
                filename = f"hospitality_roster_{stamp}.csv"
                filepath = os.path.join(self.output_dir, filename)
                roster.to_csv(filepath, index=False, encoding='utf-8')
            else:
                filename = f"hospitality_roster_{stamp}.xlsx"
                filepath = os.path.join(self.output_dir, filename)
                with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
                    roster.to_excel(writer, sheet_name='Roster', index=False)
                    self.occupancy_frame().to_excel(writer, sheet_name='Hostel Occupancy', index=False)
                    self.status_summary_frame().to_excel(writer, sheet_name='Status Summary', index=False)

            self.logger.info(f"Roster exported: {filename} ({len(roster)} guests)")
            return {
                'success': True,
                'filename': filename,
                'filepath': filepath,
                'format': output_format,
                'rows': len(roster),
                'size': os.path.getsize(filepath)
            }

        except Exception as e:
            self.logger.error(f"Roster export failed: {str(e)}")
            return {
                'success': False,
                'error': str(e)
            }
