"""
Driver directory: registration, login and lookup of ambulance drivers.

Passwords are stored as salted hashes using Django's password hashers
and verified with :func:`check_password`, which compares in constant
time.  The email address is the natural key and is normalised to lower
case everywhere it is stored or queried.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.contrib.auth.hashers import make_password, check_password
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from handoff.exceptions import AuthError, ConflictError, NotFoundError, StorageError, ValidationError
from handoff.models import Driver
from handoff.services.audit import log_action

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or '').strip().lower()


def format_driver(driver: Driver) -> dict:
    return {
        'id': driver.id,
        'driverName': driver.driver_name,
        'email': driver.email,
        'phone': driver.phone,
        'licenceNumber': driver.licence_number,
        'registeredAt': driver.registered_at.isoformat() if driver.registered_at else None,
        'lastLogin': driver.last_login.isoformat() if driver.last_login else None,
    }


def register(*, driver_name: str, email: str, password: str, phone: str, licence_number: str) -> Driver:
    email = normalize_email(email)
    missing = [
        name for name, value in (
            ('driverName', driver_name), ('email', email), ('password', password),
            ('phone', phone), ('licenceNumber', licence_number),
        ) if not value
    ]
    if missing:
        raise ValidationError(f"All fields are required (missing: {', '.join(missing)})")

    if Driver.objects.filter(email=email).exists():
        raise ConflictError('Driver with this email already exists')
    try:
        with transaction.atomic():
            driver = Driver.objects.create(
                driver_name=driver_name,
                email=email,
                password=make_password(password),
                phone=phone,
                licence_number=licence_number,
            )
            log_action(actor=email, action='driver_register', object_type='driver', object_id=driver.id)
    except IntegrityError as exc:
        # lost a race against a concurrent registration with the same email
        raise ConflictError('Driver with this email already exists') from exc
    except DatabaseError as exc:
        raise StorageError('Error registering driver') from exc

    logger.info('driver registered: %s', email)
    return driver


def get_driver(email: str) -> Optional[Driver]:
    email = normalize_email(email)
    if not email:
        return None
    return Driver.objects.filter(email=email).first()


def current(email: str) -> Driver:
    driver = get_driver(email)
    if driver is None:
        raise NotFoundError('Driver not found')
    return driver


def login(email: str, password: str, *, ip: Optional[str] = None) -> Driver:
    email = normalize_email(email)
    if not email or not password:
        raise ValidationError('Email and password are required')

    driver = get_driver(email)
    if driver is None:
        logger.info('login attempt for unknown driver: %s', email)
        log_action(actor=email, action='driver_login', object_type='driver',
                   detail={'result': 'not_found', 'ip': ip})
        raise NotFoundError('Driver not found')

    if not check_password(password, driver.password):
        logger.info('login attempt with incorrect password: %s', email)
        log_action(actor=email, action='driver_login', object_type='driver', object_id=driver.id,
                   detail={'result': 'fail', 'ip': ip})
        raise AuthError('Incorrect password')

    driver.last_login = timezone.now()
    driver.save(update_fields=['last_login'])
    log_action(actor=email, action='driver_login', object_type='driver', object_id=driver.id,
               detail={'result': 'ok', 'ip': ip})
    logger.info('driver logged in: %s', email)
    return driver
