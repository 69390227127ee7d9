"""
Feedback Module - Hospitality Desk
Author: Hospitality Desk Team
Date: October 2026

This module maps scan outcomes to the cues the kiosk renders: a haptic
pulse (short for success, long for error) and a result overlay shown for a
fixed time. While the overlay is active the scan session ignores new scans.

It also renders the desk-routing messages shown when a registration
completes, using Jinja2 templates.
"""

import logging
import threading
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Optional

from jinja2 import Template

from hospitality.modules.models import AccommodationStatus

SUCCESS = 'success'
ERROR = 'error'


@dataclass(frozen=True)
class FeedbackCue:
    """Data structure for one feedback event."""
    outcome: str
    vibration_ms: int
    display_seconds: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DeskRoute:
    next_desk: str
    title: str
    message: str


DESK_TEMPLATES = {
    AccommodationStatus.REQUESTED: (
        'FINANCE',
        'Redirect to Finance',
        Template("{{ name }} ({{ badge_id }}) must pay at the Finance desk "
                 "before hostel check-in at {{ hostel_name }}."),
    ),
    AccommodationStatus.PAID: (
        'HOSP_2',
        'Redirect to HOSP 2',
        Template("{{ name }} ({{ badge_id }}) can go to the hostel desk "
                 "for check-in at {{ hostel_name }}."),
    ),
    AccommodationStatus.NONE: (
        'NONE',
        'Registration Complete',
        Template("{{ name }} is registered with Hospitality ID {{ badge_id }}."),
    ),
}


def route_for_record(record: Dict[str, Any]) -> DeskRoute:
    """
    Pick the desk a freshly bound guest goes to next.

    Args:
        record (Dict[str, Any]): Record as returned by the workflow

    Returns:
        DeskRoute: next desk, toast title and rendered message
    """
    status = record.get('accommodation_status', AccommodationStatus.NONE)
    next_desk, title, template = DESK_TEMPLATES.get(
        status, DESK_TEMPLATES[AccommodationStatus.NONE]
    )
    return DeskRoute(next_desk=next_desk, title=title, message=template.render(**record))


class ResultFeedback:
    """
    Timed result overlay plus haptic cue.

    The overlay flag is set by ``show`` and cleared by a scheduler callback
    after ``display_seconds``. Showing a new result replaces the pending
    clear.
    """

    def __init__(self, scheduler, sink: Optional[Callable[[FeedbackCue], None]] = None,
                 display_seconds: float = 2.0, success_vibration_ms: int = 200,
                 error_vibration_ms: int = 500):
        self.scheduler = scheduler
        self.sink = sink
        self.display_seconds = display_seconds
        self.vibration_ms = {SUCCESS: success_vibration_ms, ERROR: error_vibration_ms}
        self.logger = logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._current: Optional[str] = None
        self._timer = None
        # Bumped by every show/clear; an expiry for an older value is stale
        self._shown = 0

    @property
    def is_active(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> Optional[str]:
        """Outcome currently displayed, or None."""
        return self._current

    def show(self, outcome: str) -> FeedbackCue:
        if outcome not in self.vibration_ms:
            raise ValueError(f"Unknown feedback outcome: {outcome}")

        cue = FeedbackCue(
            outcome=outcome,
            vibration_ms=self.vibration_ms[outcome],
            display_seconds=self.display_seconds,
        )

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._shown += 1
            shown = self._shown
            self._current = outcome
            self._timer = self.scheduler.call_later(
                self.display_seconds, lambda: self._expire(shown)
            )

        if self.sink is not None:
            try:
                self.sink(cue)
            except Exception as e:
                self.logger.error(f"Feedback sink failed: {str(e)}")

        return cue

    def _expire(self, shown: int):
        with self._lock:
            if shown != self._shown:
                return
            self._current = None
            self._timer = None

    def clear(self):
        """Hide the overlay immediately (session reset)."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._shown += 1
            self._timer = None
            self._current = None
