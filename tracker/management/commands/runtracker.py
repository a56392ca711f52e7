import logging

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand
from waitress import serve

from german_tracker.wsgi import application

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Apply migrations, then serve the API and the bundled frontend."

    def add_arguments(self, parser):
        parser.add_argument("--host", default=settings.TRACKER_HOST)
        parser.add_argument("--port", type=int, default=settings.TRACKER_PORT)
        parser.add_argument(
            "--migrate-only", action="store_true",
            help="Apply migrations and exit without serving.",
        )

    def handle(self, *args, **options):
        call_command("migrate", interactive=False, verbosity=options["verbosity"])
        logger.info("Database ready")
        if options["migrate_only"]:
            return

        host, port = options["host"], options["port"]
        logger.info("Listening on http://%s:%d", host, port)
        serve(application, host=host, port=port)
