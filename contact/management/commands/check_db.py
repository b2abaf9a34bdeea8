"""
Print every stored contact, newest first.

Usage:
    python manage.py check_db
"""

from django.core.management.base import BaseCommand

from contact.models import Contact

COLUMNS = ['id', 'name', 'email', 'phone', 'subject', 'message', 'status', 'created_at']


class Command(BaseCommand):
    help = 'Lists all contact form submissions stored in the database'

    def handle(self, *args, **options):
        self.stdout.write('Connecting to database...')
        rows = list(Contact.objects.order_by('-id').values_list(*COLUMNS))

        self.stdout.write(f'\nFound {len(rows)} records:\n')
        if not rows:
            return

        cells = [[self._cell(value) for value in row] for row in rows]
        widths = [
            max(len(column), *(len(row[i]) for row in cells))
            for i, column in enumerate(COLUMNS)
        ]

        self.stdout.write(self._line(COLUMNS, widths))
        self.stdout.write(self._line(['-' * width for width in widths], widths))
        for row in cells:
            self.stdout.write(self._line(row, widths))

    @staticmethod
    def _cell(value, limit=40):
        text = '' if value is None else str(value).replace('\n', ' ')
        return text if len(text) <= limit else text[:limit - 3] + '...'

    @staticmethod
    def _line(values, widths):
        return ' | '.join(value.ljust(width) for value, width in zip(values, widths))
