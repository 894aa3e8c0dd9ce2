"""
Offline patient cache for clients that cannot reach the backend.

The cache keeps a list of patient records and the "current driver"
profile in a small string key/value store, the same contract the
browser's ``localStorage`` offers.  It is a separate source of truth
from the server database: nothing here is ever synchronised with the
API, and records created offline keep their local ids.

The storage adapter is injected by the caller, who also decides when
it is opened and closed::

    with PatientCache(JsonFileStorage("~/.mediroute")) as cache:
        cache.set_current_driver({"driverName": "John Smith", ...})
        cache.add_patient({"patientName": "Jane Doe"})

Reads never raise: unreadable or corrupt data yields an empty default.
Writes that fail are logged and dropped.
"""
from __future__ import annotations

import json
import logging
import os
import random
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from django.core.cache import caches

logger = logging.getLogger(__name__)

PATIENTS_KEY = 'mediroute_patients'
DRIVER_KEY = 'mediroute_current_driver'
AWAITING_STATUSES = ('pending', 'sent_to_hospital')
# target status -> statuses it may be reached from
ALLOWED_FROM = {
    'sent_to_hospital': ('pending',),
    'admitted': AWAITING_STATUSES,
    'declined': AWAITING_STATUSES,
}
UNKNOWN_DRIVER = 'Unknown Driver'
NOT_AVAILABLE = 'N/A'

_ID_ALPHABET = string.digits + string.ascii_lowercase


class StorageAdapter:
    """String key/value store backing a :class:`PatientCache`."""

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(StorageAdapter):
    def __init__(self):
        self._items: dict[str, str] = {}

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = value

    def remove_item(self, key):
        self._items.pop(key, None)

    def close(self):
        self._items.clear()


class JsonFileStorage(StorageAdapter):
    """One ``<key>.json`` file per key inside ``directory``."""

    def __init__(self, directory):
        self.directory = Path(directory).expanduser()

    def open(self):
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key):
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    def set_item(self, key, value):
        path = self._path(key)
        tmp = path.with_suffix('.tmp')
        tmp.write_text(value, encoding='utf-8')
        os.replace(tmp, path)

    def remove_item(self, key):
        self._path(key).unlink(missing_ok=True)


class CacheStorage(StorageAdapter):
    """Keys stored without expiry in a configured Django cache (locmem or Redis)."""

    def __init__(self, alias: str = 'default', prefix: str = 'local-cache:'):
        self.alias = alias
        self.prefix = prefix
        self._cache = None

    def open(self):
        self._cache = caches[self.alias]

    def close(self):
        self._cache = None

    @property
    def cache(self):
        if self._cache is None:
            raise RuntimeError('CacheStorage is not open')
        return self._cache

    def get_item(self, key):
        return self.cache.get(self.prefix + key)

    def set_item(self, key, value):
        self.cache.set(self.prefix + key, value, timeout=None)

    def remove_item(self, key):
        self.cache.delete(self.prefix + key)


def generate_id() -> str:
    """``patient_<epoch ms>_<9 random base36 chars>``; unique enough for one device."""
    suffix = ''.join(random.choices(_ID_ALPHABET, k=9))
    return f"patient_{int(time.time() * 1000)}_{suffix}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class PatientCache:
    def __init__(self, storage: StorageAdapter, *, patients_key: str = PATIENTS_KEY,
                 driver_key: str = DRIVER_KEY):
        self.storage = storage
        self.patients_key = patients_key
        self.driver_key = driver_key

    def open(self) -> 'PatientCache':
        self.storage.open()
        return self

    def close(self) -> None:
        self.storage.close()

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    # -- storage helpers -------------------------------------------------

    def _read(self, key: str, expected_type):
        try:
            raw = self.storage.get_item(key)
            if not raw:
                return None
            value = json.loads(raw)
        except Exception:
            logger.error('error loading %s from local cache', key, exc_info=True)
            return None
        if not isinstance(value, expected_type):
            logger.error('ignoring malformed %s in local cache', key)
            return None
        return value

    def _write(self, key: str, value) -> None:
        try:
            self.storage.set_item(key, json.dumps(value))
        except Exception:
            logger.error('error saving %s to local cache', key, exc_info=True)

    def _remove(self, key: str) -> None:
        try:
            self.storage.remove_item(key)
        except Exception:
            logger.error('error removing %s from local cache', key, exc_info=True)

    # -- patients --------------------------------------------------------

    def get_patients(self) -> list:
        return self._read(self.patients_key, list) or []

    def save_patients(self, patients: list) -> None:
        self._write(self.patients_key, patients)

    def get_pending_patients(self) -> list:
        return [p for p in self.get_patients() if p.get('status') in AWAITING_STATUSES]

    def add_patient(self, patient_data: dict) -> str:
        patients = self.get_patients()
        driver = self.get_current_driver() or {}
        record = {
            'id': generate_id(),
            **patient_data,
            'status': 'pending',
            'timestamp': _now_iso(),
            'driverName': driver.get('driverName') or UNKNOWN_DRIVER,
            'driverPhone': driver.get('phone') or NOT_AVAILABLE,
            'driverEmail': driver.get('email') or patient_data.get('driverEmail') or NOT_AVAILABLE,
            'driverLicense': driver.get('licenceNumber') or NOT_AVAILABLE,
        }
        patients.append(record)
        self.save_patients(patients)
        return record['id']

    def update_patient_status(self, patient_id: str, status: str, reason: Optional[str] = None) -> Optional[dict]:
        """Move a cached patient to ``status`` following the server's transition rules.

        Returns the updated record, or ``None`` when the patient is unknown
        or the move is refused (unknown status, record already decided,
        ``declined`` without a reason).  Refusals are logged, never raised.
        """
        if status not in ALLOWED_FROM:
            logger.warning('refusing unknown local status %r for %s', status, patient_id)
            return None
        reason = (reason or '').strip()
        if status == 'declined' and not reason:
            logger.warning('refusing local decline of %s without a reason', patient_id)
            return None
        patients = self.get_patients()
        for record in patients:
            if record.get('id') != patient_id:
                continue
            if record.get('status') not in ALLOWED_FROM[status]:
                logger.warning('refusing local move of %s from %s to %s',
                               patient_id, record.get('status'), status)
                return None
            record['status'] = status
            record['updatedAt'] = _now_iso()
            if status == 'declined':
                record['declineReason'] = reason
            else:
                record.pop('declineReason', None)
            self.save_patients(patients)
            return record
        return None

    # -- current driver --------------------------------------------------

    def set_current_driver(self, driver_data: dict) -> None:
        self._write(self.driver_key, driver_data)

    def get_current_driver(self) -> Optional[dict]:
        return self._read(self.driver_key, dict)

    def clear_current_driver(self) -> None:
        self._remove(self.driver_key)

    def clear_all(self) -> None:
        self._remove(self.patients_key)
        self._remove(self.driver_key)
