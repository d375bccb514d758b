# donors/management/commands/import_donors.py
"""
Django management command to import donors from a spreadsheet
Usage: python manage.py import_donors path/to/donors.xlsx
       python manage.py import_donors path/to/donors.csv --geocode
"""

from pathlib import Path

import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from algorithms.blood_compatibility import parse_blood_group
from donors.models import DonorProfile
from donors.tasks import geocode_missing_locations


def read_table(path):
    if Path(path).suffix.lower() == '.csv':
        return pd.read_csv(path, dtype={'postal_code': str})
    return pd.read_excel(path, dtype={'postal_code': str})


def optional_float(value):
    if pd.isna(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def optional_text(value):
    if pd.isna(value):
        return ''
    return str(value).strip()


class Command(BaseCommand):
    help = 'Import donors (full_name, blood_group, postal_code, latitude, longitude) from CSV or Excel'

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='Path to the CSV or Excel file')
        parser.add_argument('--geocode', action='store_true', help='Queue geocoding for donors without coordinates')

    def handle(self, *args, **options):
        path = options['path']
        try:
            df = read_table(path)
        except FileNotFoundError:
            raise CommandError(f'File not found: {path}')
        except (ValueError, OSError) as e:
            raise CommandError(f'Could not read {path}: {e}')

        missing_columns = {'full_name', 'blood_group'} - set(df.columns)
        if missing_columns:
            raise CommandError(f'Missing columns: {", ".join(sorted(missing_columns))}')

        self.stdout.write(f'Found {len(df)} rows in {path}')

        imported_count = 0
        skipped_count = 0

        with transaction.atomic():
            for index, row in df.iterrows():
                line = index + 2  # header is line 1
                full_name = optional_text(row.get('full_name'))
                if not full_name:
                    self.stdout.write(self.style.WARNING(f'Skipping row {line}: Missing name'))
                    skipped_count += 1
                    continue

                blood_group = parse_blood_group(optional_text(row.get('blood_group')))
                if blood_group is None:
                    self.stdout.write(self.style.WARNING(
                        f'Skipping row {line}: Invalid blood group {row.get("blood_group")!r}'
                    ))
                    skipped_count += 1
                    continue

                DonorProfile.objects.create(
                    full_name=full_name,
                    blood_group=blood_group.value,
                    postal_code=optional_text(row.get('postal_code')),
                    latitude=optional_float(row.get('latitude')),
                    longitude=optional_float(row.get('longitude')),
                )
                imported_count += 1

        self.stdout.write(self.style.SUCCESS(
            f'Import complete! Created: {imported_count}, Skipped: {skipped_count}'
        ))

        if options['geocode'] and imported_count:
            geocode_missing_locations.delay()
            self.stdout.write('Geocoding queued for donors without coordinates')
