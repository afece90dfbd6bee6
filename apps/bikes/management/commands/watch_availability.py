"""
Management command to follow station availability in real time

Usage:
    python manage.py watch_availability          # Refresh on every bike change
    python manage.py watch_availability --once   # Print current availability and exit
"""

import time
from django.core.management.base import BaseCommand, CommandError
from apps.bikes.change_listener import BikeChangeListener
from apps.common.exceptions import FetchFailed


class Command(BaseCommand):
    help = 'Print station availability and refresh it on every change to the bikes collection'

    def add_arguments(self, parser):
        parser.add_argument(
            '--once',
            action='store_true',
            help='Fetch and print availability once, do not start the listener'
        )

    def print_stations(self, stations):
        self.stdout.write(self.style.SUCCESS(f'\n{len(stations)} stations:'))
        for station in stations:
            self.stdout.write(
                f"  {station.get('name', station['id']):<40} {station['available_bikes']:>3} bikes available"
            )

    def handle(self, *args, **options):
        listener = BikeChangeListener()

        if options['once']:
            try:
                self.print_stations(listener.refresh())
            except FetchFailed as e:
                raise CommandError(f'{e.title}: {e.message}')
            return

        def on_error(error):
            self.stdout.write(self.style.ERROR(f'✗ {error.title}: {error.message}'))

        watch = listener.listen(callback=self.print_stations, on_error=on_error)

        self.stdout.write(self.style.SUCCESS('✓ Listener is active. Press Ctrl+C to stop.'))

        try:
            # Keep the listener running
            while True:
                time.sleep(1)

        except KeyboardInterrupt:
            self.stdout.write(self.style.WARNING('\n\nStopping listener...'))
            watch.unsubscribe()
            self.stdout.write(self.style.SUCCESS('✓ Listener stopped successfully'))
