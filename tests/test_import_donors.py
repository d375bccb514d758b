"""Tests for the spreadsheet import command."""

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from donors.models import DonorProfile

pytestmark = pytest.mark.django_db


def test_imports_valid_rows(tmp_path):
    path = tmp_path / 'donors.csv'
    path.write_text(
        'full_name,blood_group,postal_code,latitude,longitude\n'
        'Asha Rao,o-,560001,,\n'
        'Ravi Kumar,AB+,,19.07,72.87\n'
        ',A+,400001,,\n'
        'Meera,Z+,400001,,\n'
    )

    call_command('import_donors', str(path))

    donors = {d.full_name: d for d in DonorProfile.objects.all()}
    assert set(donors) == {'Asha Rao', 'Ravi Kumar'}
    assert donors['Asha Rao'].blood_group == 'O-'
    assert donors['Asha Rao'].postal_code == '560001'
    assert donors['Asha Rao'].latitude is None
    assert donors['Ravi Kumar'].latitude == 19.07


def test_postal_codes_keep_leading_zeros(tmp_path):
    path = tmp_path / 'donors.csv'
    path.write_text('full_name,blood_group,postal_code\nLeading Zero,B-,01234\n')
    call_command('import_donors', str(path))
    assert DonorProfile.objects.get().postal_code == '01234'


def test_missing_file(tmp_path):
    with pytest.raises(CommandError):
        call_command('import_donors', str(tmp_path / 'nope.csv'))


def test_missing_columns(tmp_path):
    path = tmp_path / 'donors.csv'
    path.write_text('name,group\nA,O+\n')
    with pytest.raises(CommandError):
        call_command('import_donors', str(path))
