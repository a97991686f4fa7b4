import json

import pytest

from services import persistence
from services.backend import BackendError, DuplicateRecord, RecordNotFound


def _seed(backend):
    rows = [
        {'id': 'a', 'user_id': 'u1', 'status': 'planning', 'created_at': '2024-01-02T00:00:00Z'},
        {'id': 'b', 'user_id': 'u1', 'status': 'completed', 'created_at': '2024-01-03T00:00:00Z'},
        {'id': 'c', 'user_id': 'u2', 'status': 'planning', 'created_at': '2024-01-01T00:00:00Z'},
        {'id': 'd', 'user_id': 'u1', 'status': 'planning', 'created_at': None},
    ]
    for r in rows:
        backend.db.experiments.create(r)


def test_missing_table_file_is_empty(backend):
    assert backend.db.experiments.list() == []


def test_unknown_table_is_rejected(backend):
    with pytest.raises(AttributeError):
        backend.db.samples
    with pytest.raises(KeyError):
        persistence.load_list('samples')


def test_create_writes_json_file(backend, data_dir):
    backend.db.protocols.create({'id': 'p1', 'title': 'PCR'})
    with open(data_dir / 'protocols.json', encoding='utf-8') as f:
        assert json.load(f) == [{'id': 'p1', 'title': 'PCR'}]
    # no temp files left behind
    assert sorted(p.name for p in data_dir.iterdir()) == ['protocols.json']


def test_list_where_filters_by_equality(backend):
    _seed(backend)
    ids = {r['id'] for r in backend.db.experiments.list(where={'user_id': 'u1', 'status': 'planning'})}
    assert ids == {'a', 'd'}


def test_list_order_by_desc_puts_missing_last(backend):
    _seed(backend)
    rows = backend.db.experiments.list(where={'user_id': 'u1'}, order_by={'created_at': 'desc'})
    assert [r['id'] for r in rows] == ['b', 'a', 'd']


def test_list_order_by_secondary_key(backend):
    _seed(backend)
    rows = backend.db.experiments.list(order_by={'status': 'asc', 'created_at': 'desc'})
    assert [r['id'] for r in rows] == ['b', 'a', 'c', 'd']


def test_list_limit_applies_after_sorting(backend):
    _seed(backend)
    rows = backend.db.experiments.list(order_by={'created_at': 'asc'}, limit=2)
    assert [r['id'] for r in rows] == ['d', 'c']


def test_list_rejects_bad_direction(backend):
    _seed(backend)
    with pytest.raises(ValueError):
        backend.db.experiments.list(order_by={'created_at': 'newest'})


def test_create_requires_unique_id(backend):
    backend.db.notes.create({'id': 'n1'})
    with pytest.raises(DuplicateRecord):
        backend.db.notes.create({'id': 'n1'})
    with pytest.raises(BackendError):
        backend.db.notes.create({'title': 'no id'})


def test_update_merges_and_keeps_id(backend):
    backend.db.notes.create({'id': 'n1', 'title': 'old', 'content': 'body'})
    updated = backend.db.notes.update('n1', {'id': 'other', 'title': 'new'})
    assert updated == {'id': 'n1', 'title': 'new', 'content': 'body'}
    assert backend.db.notes.get('n1')['title'] == 'new'


def test_update_and_delete_unknown_id_raise(backend):
    with pytest.raises(RecordNotFound):
        backend.db.notes.update('missing', {'title': 'x'})
    with pytest.raises(RecordNotFound):
        backend.db.notes.delete('missing')


def test_delete_removes_row(backend):
    backend.db.notes.create({'id': 'n1'})
    backend.db.notes.create({'id': 'n2'})
    backend.db.notes.delete('n1')
    assert [r['id'] for r in backend.db.notes.list()] == ['n2']
    assert backend.db.notes.get('n1') is None


def test_corrupt_file_reads_as_empty(backend, data_dir):
    (data_dir / 'notes.json').write_text('{not json', encoding='utf-8')
    assert backend.db.notes.list() == []
    (data_dir / 'notes.json').write_text('{"id": "n1"}', encoding='utf-8')
    assert backend.db.notes.list() == []


def test_returned_rows_are_copies(backend):
    created = backend.db.notes.create({'id': 'n1', 'title': 'a'})
    created['title'] = 'changed'
    assert backend.db.notes.get('n1')['title'] == 'a'


def test_all_writes_go_through_replace_all(backend, monkeypatch):
    calls = []
    real = persistence.replace_all
    monkeypatch.setattr(persistence, 'replace_all', lambda key, rows: (calls.append(key), real(key, rows)))
    backend.db.notes.create({'id': 'n1'})
    backend.db.notes.update('n1', {'title': 't'})
    backend.db.notes.delete('n1')
    assert calls == ['notes', 'notes', 'notes']
    assert not hasattr(persistence, 'append_item')
    assert not hasattr(backend.db, 'table')
