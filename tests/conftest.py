from datetime import datetime, timedelta

import pytest

from hospitality.modules.accommodation_workflow import AccommodationWorkflow
from hospitality.modules.feedback import ResultFeedback
from hospitality.modules.record_store import RecordStore
from hospitality.modules.scan_session import ScanSessionCoordinator
from hospitality.modules.scheduler import ManualScheduler


class FixedClock:
    """Clock returning a settable datetime."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 9, 0, 0))


@pytest.fixture
def store():
    return RecordStore.with_seed_data()


@pytest.fixture
def workflow(store, clock):
    return AccommodationWorkflow(store, clock=clock)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def cues():
    return []


@pytest.fixture
def feedback(scheduler, cues):
    return ResultFeedback(scheduler, sink=cues.append)


@pytest.fixture
def coordinator(workflow, scheduler, feedback):
    return ScanSessionCoordinator(workflow, scheduler, feedback=feedback)


@pytest.fixture
def app(store, scheduler, clock):
    from app import create_app
    flask_app = create_app('testing', store=store, scheduler=scheduler, clock=clock)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
