import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _fast_hashers(settings):
    # PBKDF2 makes every driver registration slow; MD5 keeps the salted-hash contract
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters live in the default cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def driver(db):
    from handoff.services import drivers
    return drivers.register(
        driver_name='Dana Driver',
        email='d@x.com',
        password='s3cret-pass',
        phone='555-0100',
        licence_number='DL-42',
    )


@pytest.fixture
def patient_data():
    return {
        'patient_name': 'Jane Doe',
        'age': 54,
        'gender': 'F',
        'medical_condition': 'Chest pain',
        'blood_pressure': '150/95',
        'heart_rate': 110,
        'oxygen_saturation': 93,
        'medical_needs': ['oxygen', 'cardiac monitor'],
        'selected_hospital': 'St. Mary Hospital',
        'driver_email': 'd@x.com',
        'location': {'latitude': 40.71, 'longitude': -74.0},
    }
