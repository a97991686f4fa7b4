import datetime as dt

import pytest

from utils import dates


@pytest.mark.parametrize("value", [None, '', True, False, 'not a date', [], {}])
def test_safe_date_rejects_garbage(value):
    assert dates.safe_date(value) is None


def test_safe_date_parses_supported_inputs():
    assert dates.safe_date(dt.date(2024, 1, 5)) == dt.datetime(2024, 1, 5)
    naive = dt.datetime(2024, 1, 5, 8, 30)
    assert dates.safe_date(naive) is naive
    assert dates.safe_date(0) == dt.datetime(1970, 1, 1)
    parsed = dates.safe_date('2024-01-05T08:30:00Z')
    assert (parsed.year, parsed.month, parsed.day, parsed.hour, parsed.minute) == (2024, 1, 5, 8, 30)
    assert parsed.utcoffset() == dt.timedelta(0)


def test_formatters_and_fallbacks():
    value = '2024-03-07T14:05:00Z'
    assert dates.format_list_date(value) == '03/07 14:05'
    assert dates.format_short_date(value) == 'Mar 07, 2024'
    assert dates.format_detail_date(value) == 'March 07, 2024'
    assert dates.format_detail_datetime(value) == 'March 07, 2024 14:05'
    assert dates.format_form_date(value) == '2024-03-07'

    assert dates.format_list_date(None) == 'No record'
    assert dates.format_short_date('garbage') == 'No date'
    assert dates.format_form_date('') == ''
    assert dates.safe_format('nope', '%Y', fallback='-') == '-'


def test_is_valid_date():
    assert dates.is_valid_date('2024-01-01')
    assert not dates.is_valid_date('2024-13-45')


def test_now_iso_shape():
    stamp = dates.now_iso()
    assert stamp.endswith('Z') and '.' not in stamp
    assert dates.safe_date(stamp) is not None


def test_duration_days_rounds_up():
    assert dates.duration_days('2024-01-01T00:00:00Z', '2024-01-03T00:00:00Z') == 2
    assert dates.duration_days('2024-01-01T00:00:00Z', '2024-01-03T01:00:00Z') == 3
    assert dates.duration_days('2024-01-03', '2024-01-01') == 2
    assert dates.duration_days('2024-01-01', '2024-01-01') == 0


def test_duration_days_uses_now_without_end():
    now = dt.datetime(2024, 1, 11)
    assert dates.duration_days('2024-01-01T00:00:00Z', None, now=now) == 10
    assert dates.duration_days('2024-01-01', '', now=now) == 10


def test_duration_days_invalid_start_is_zero():
    assert dates.duration_days('garbage', '2024-01-03') == 0
    assert dates.duration_days(None) == 0


def test_is_within_days():
    now = dt.datetime(2024, 6, 10)
    assert dates.is_within_days('2024-06-05T00:00:00Z', 7, now=now)
    assert not dates.is_within_days('2024-06-01T00:00:00Z', 7, now=now)
    assert not dates.is_within_days('', 7, now=now)
