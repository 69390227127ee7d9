import pytest

from hospitality.modules.errors import CapacityError, NotFoundError
from hospitality.modules.models import Hostel
from hospitality.modules.occupancy import HostelOccupancyTracker
from hospitality.modules.record_store import RecordStore


@pytest.fixture
def tracker():
    store = RecordStore(hostels=[
        Hostel(id='H1', name='Small', total_beds=2, occupied_beds=1),
        Hostel(id='H2', name='Empty', total_beds=10),
    ])
    return HostelOccupancyTracker(store)


def beds(tracker, hostel_id):
    return tracker.store.get_hostel(hostel_id)


def test_admit_and_release(tracker):
    assert tracker.admit('H1').occupied_beds == 2
    assert beds(tracker, 'H1').available_beds == 0

    assert tracker.release('H1').occupied_beds == 1
    assert beds(tracker, 'H1').utilization_percentage == 50.0


def test_admit_full_hostel(tracker):
    tracker.admit('H1')
    with pytest.raises(CapacityError, match='No beds available'):
        tracker.admit('H1')
    assert beds(tracker, 'H1').occupied_beds == 2


def test_release_empty_hostel(tracker):
    with pytest.raises(ValueError):
        tracker.release('H2')
    assert beds(tracker, 'H2').occupied_beds == 0


def test_unknown_hostel(tracker):
    with pytest.raises(NotFoundError):
        tracker.admit('H9')
    with pytest.raises(NotFoundError):
        tracker.release('H9')


def test_occupancy_report_is_fullest_first(tracker):
    report = tracker.occupancy_report()
    assert [row['hostel_id'] for row in report] == ['H1', 'H2']
    assert report[1]['available_beds'] == 10
