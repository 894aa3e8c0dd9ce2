#!/usr/bin/env python
"""
Command line entry point for the MediRoute handoff backend.

Typical uses::

    python manage.py migrate
    python manage.py ensure_demo_driver
    python manage.py runserver 0.0.0.0:8000

Websocket notifications need an ASGI server; ``runserver`` serves
them when ``daphne`` is installed, otherwise run ``mediroute.asgi``
under uvicorn or daphne.
"""
import os
import sys


def main() -> None:
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'mediroute.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Django is not importable. Install the backend with "
            "`pip install -e .` inside an activated virtual environment."
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
