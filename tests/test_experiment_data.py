import datetime as dt

import pytest

from domain.constants import ALL
from domain.models import ExperimentData
from domain.validation import ValidationError
from services import experiment_data as data_svc


def make_record(i, data_type, value, timestamp):
    return ExperimentData(id=f"d{i}", experiment_id='e1', data_type=data_type, data_value=value,
                          user_id='u1', measurement_unit=None, timestamp=timestamp)


RECORDS = [
    make_record(3, 'ph', '7.4', '2024-05-03T09:00:00Z'),
    make_record(2, 'temperature', '37.0', '2024-05-02T09:00:00Z'),
    make_record(1, 'ph', 'cloudy', '2024-05-01T09:00:00Z'),
]


def test_save_builds_timestamp_from_datetime(backend, user):
    record = data_svc.save_data(backend, user['id'], 'e1', {
        'data_type': 'temperature', 'data_value': '36.8', 'measurement_unit': '°C',
        'timestamp': dt.datetime(2024, 5, 1, 14, 30),
    })
    assert record.id.startswith('data_')
    assert record.timestamp == '2024-05-01T14:30:00'
    assert record.measurement_unit == '°C'


def test_save_without_timestamp_uses_now(backend, user):
    record = data_svc.save_data(backend, user['id'], 'e1', {'data_type': 'observation', 'data_value': 'turbid'})
    assert record.timestamp.endswith('Z')
    assert record.measurement_unit is None


def test_save_rejects_unknown_type(backend, user):
    with pytest.raises(ValidationError):
        data_svc.save_data(backend, user['id'], 'e1', {'data_type': 'colour', 'data_value': 'red'})


def test_list_newest_first_and_scoped_to_experiment(backend, user):
    for ts in ['2024-05-01T09:00:00Z', '2024-05-03T09:00:00Z', '2024-05-02T09:00:00Z']:
        data_svc.save_data(backend, user['id'], 'e1', {'data_type': 'ph', 'data_value': '7', 'timestamp': ts})
    data_svc.save_data(backend, user['id'], 'e2', {'data_type': 'ph', 'data_value': '7'})
    stamps = [r.timestamp for r in data_svc.list_data(backend, 'e1')]
    assert stamps == sorted(stamps, reverse=True)
    assert len(stamps) == 3


def test_update_and_delete(backend, user):
    record = data_svc.save_data(backend, user['id'], 'e1', {'data_type': 'ph', 'data_value': '7'})
    updated = data_svc.save_data(backend, user['id'], 'e1', {'data_type': 'ph', 'data_value': '6.5'},
                                 existing=record)
    assert updated.id == record.id and updated.data_value == '6.5'
    data_svc.delete_data(backend, record.id)
    assert data_svc.list_data(backend, 'e1') == []


def test_present_types_and_filter():
    assert data_svc.present_types(RECORDS) == ['ph', 'temperature']
    assert [r.id for r in data_svc.filter_data(RECORDS, 'ph')] == ['d3', 'd1']
    assert len(data_svc.filter_data(RECORDS, ALL)) == 3


def test_data_stats():
    stats = data_svc.data_stats(RECORDS)
    assert stats['total'] == 3 and stats['types'] == 2
    assert stats['latest'].id == 'd3'
    assert data_svc.data_stats([]) == {'total': 0, 'types': 0, 'latest': None}


def test_csv_export_uses_type_labels():
    lines = data_svc.to_csv(RECORDS[:1]).strip().splitlines()
    assert lines[0] == 'id,timestamp,data_type,data_value,measurement_unit'
    assert lines[1].startswith('d3,2024-05-03T09:00:00Z,pH,7.4')
    assert data_svc.to_csv([]).strip() == 'id,timestamp,data_type,data_value,measurement_unit'


def test_numeric_series_skips_non_numeric_values():
    series = data_svc.numeric_series(RECORDS)
    assert list(series.columns) == ['Temperature', 'pH']
    assert len(series) == 2
    assert series['pH'].dropna().tolist() == [7.4]
    assert data_svc.numeric_series([]).empty
    assert data_svc.numeric_series([RECORDS[2]]).empty


def test_unit_choices_default_to_no_unit():
    options, index = data_svc.unit_choices('temperature')
    assert options == [None, '°C', '°F', 'K']
    assert options[index] is None
    assert data_svc.unit_choices('observation') == ([None], 0)


def test_unit_choices_keep_stored_unit():
    options, index = data_svc.unit_choices('temperature', 'K')
    assert options[index] == 'K'
    options, index = data_svc.unit_choices('temperature', 'mK')
    assert options[-1] == 'mK' and options[index] == 'mK'


def _edit_data_form_app(record_id):
    from domain.models import Experiment
    from services import experiment_data as data_svc
    from services.backend import Backend
    from ui.view_state import ManagerState
    from views import experiment_detail
    import streamlit as st

    backend = Backend()
    record = next((r for r in data_svc.list_data(backend, 'e1') if r.id == record_id), None)
    state = ManagerState(st.session_state, 'manager_data_e1')
    state.edit(record_id)
    exp = Experiment(id='e1', title='Growth', description='d', user_id='u1')
    experiment_detail._render_data_form(backend, 'u1', exp, state, record)


def test_editing_record_without_unit_keeps_it_unitless(backend, user):
    from streamlit.testing.v1 import AppTest

    record = data_svc.save_data(backend, user['id'], 'e1', {'data_type': 'temperature', 'data_value': '37'})
    assert record.measurement_unit is None

    at = AppTest.from_function(_edit_data_form_app, args=(record.id,))
    at.run()
    assert not at.exception
    next(b for b in at.button if b.label == "Update").click().run()
    assert not at.exception

    stored = backend.db.experiment_data.get(record.id)
    assert stored['data_value'] == '37'
    assert stored['measurement_unit'] is None
