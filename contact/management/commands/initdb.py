"""
Create or upgrade the contact tables.

Usage:
    python manage.py initdb

Safe to run on every deploy: missing tables are created, missing columns
are added to tables left by earlier deployments, and nothing else changes.
"""

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError
from django.db import OperationalError


class Command(BaseCommand):
    help = 'Creates the contacts and replies tables if missing and applies pending migrations'

    def handle(self, *args, **options):
        try:
            call_command('migrate', interactive=False, verbosity=options['verbosity'])
        except OperationalError as e:
            if 'allow_list' in str(e):
                self.stderr.write(self.style.ERROR(
                    'ACTION REQUIRED: your database is blocking this server\'s IP. '
                    'Go to your Database Dashboard and allow 0.0.0.0/0.'
                ))
            raise CommandError(f'Database initialization error: {e}') from e

        self.stdout.write(self.style.SUCCESS('Database initialized'))
