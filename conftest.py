import os
import threading

import django
import pytest


def pytest_configure():
    """Point Django at the project settings before any test module imports apps.*"""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')
    django.setup()


@pytest.fixture(scope='session')
def django_db():
    """Build the test database once for the tests that need users and sessions"""
    from django.db import connection
    from django.test.utils import setup_test_environment, teardown_test_environment

    setup_test_environment()
    old_name = connection.creation.create_test_db(verbosity=0, autoclobber=True)
    yield
    connection.creation.destroy_test_db(old_name, verbosity=0)
    teardown_test_environment()


class FakeUser:
    """Stand-in for request.user without touching the database"""

    def __init__(self, pk=None, email=''):
        self.pk = pk
        self.email = email

    @property
    def is_authenticated(self):
        return self.pk is not None


@pytest.fixture
def rider_user():
    return FakeUser(pk=7, email='rider@example.com')


@pytest.fixture
def anonymous_user():
    return FakeUser()


class RentalStore:
    """
    In-memory bikes + reservations with an atomic claim, standing in for the
    Firestore collections. `barrier` makes concurrent callers all finish
    candidate selection before any of them claims.
    """

    def __init__(self, bikes, barrier=None):
        self.bikes = {bike['id']: dict(bike) for bike in bikes}
        self.reservations = []
        self.barrier = barrier
        self.lookups = 0
        self.claims = 0
        self._lock = threading.Lock()

    # BikeFirebaseService surface
    def list_available_bikes(self, station_id):
        self.lookups += 1
        candidates = [
            dict(bike) for bike in self.bikes.values()
            if bike['station_id'] == station_id and bike['status'] == 'available'
        ]
        if self.barrier is not None:
            self.barrier.wait(timeout=5)
        return candidates

    # ReservationFirebaseService surface
    def claim_bike(self, bike_id, user_id, start_time, end_time):
        with self._lock:
            self.claims += 1
            bike = self.bikes.get(bike_id)
            if bike is None or bike['status'] != 'available':
                return None
            bike['status'] = 'reserved'
            reservation = {
                'id': f'res-{len(self.reservations) + 1}',
                'user_id': user_id,
                'bike_id': bike_id,
                'start_time': start_time,
                'end_time': end_time,
                'status': 'pending',
            }
            self.reservations.append(reservation)
            return dict(reservation)


@pytest.fixture
def rental_store():
    def build(bikes, barrier=None):
        return RentalStore(bikes, barrier=barrier)
    return build
