import logging

from django.conf import settings
from django.core.management.base import BaseCommand

from apps.core.scheduler import build_scheduler, run_sweeps

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Run the expiry reaper (stock holds and seller funding locks)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help='Run both sweeps a single time and exit',
        )

    def handle(self, *args, **options):
        if options['once']:
            results = run_sweeps()
            self.stdout.write(self.style.SUCCESS(
                f"Released {results['stock_holds'] or 0} stock units "
                f"and {results['funding_locks'] or 0} funding locks"
            ))
            return

        scheduler = build_scheduler()
        self.stdout.write(self.style.SUCCESS(
            f'Reaper started, sweeping every {settings.REAPER_INTERVAL_MINUTES} minutes'
        ))
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Reaper stopped")
