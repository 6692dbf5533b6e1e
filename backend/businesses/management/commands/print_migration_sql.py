# backend/businesses/management/commands/print_migration_sql.py
from io import StringIO

from django.core.management import call_command
from django.core.management.base import BaseCommand


class Command(BaseCommand):
    help = "Print the SQL that creates the businesses table so it can be run by hand"

    def add_arguments(self, parser):
        parser.add_argument("--migration", default="0001", help="Migration name or prefix (default: 0001)")
        parser.add_argument("--database", default="default", help="Database alias whose SQL dialect is used")

    def handle(self, *args, **options):
        sql = StringIO()
        call_command("sqlmigrate", "businesses", options["migration"], database=options["database"], stdout=sql)

        self.stdout.write(self.style.MIGRATE_HEADING("Run the following SQL in your database console:"))
        self.stdout.write("")
        self.stdout.write(sql.getvalue())
        self.stdout.write(self.style.SUCCESS(
            "Then record it with: python manage.py migrate businesses --fake"
        ))
