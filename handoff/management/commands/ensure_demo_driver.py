# handoff/management/commands/ensure_demo_driver.py
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand

from handoff.models import Driver

DEMO_DRIVER = {
    "driver_name": "John Smith",
    "email": "john.smith@mediroute.com",
    "phone": "(555) 123-4567",
    "licence_number": "DL123456789",
}


class Command(BaseCommand):
    help = "Ensure the demo driver exists with the given password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--password", default="demo1234")

    def handle(self, *args, **opts):
        driver, created = Driver.objects.get_or_create(
            email=DEMO_DRIVER["email"],
            defaults={**DEMO_DRIVER, "password": make_password(opts["password"])},
        )
        if not created:
            # reset profile fields and password
            for field, value in DEMO_DRIVER.items():
                setattr(driver, field, value)
            driver.password = make_password(opts["password"])
            driver.save()
        state = "created" if created else "updated"
        self.stdout.write(self.style.SUCCESS(f"{state}: {driver.driver_name} <{driver.email}>"))
