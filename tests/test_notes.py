from domain.constants import ALL
from domain.models import Note
from services import notes as note_svc


def make_note(i, title, content='', tags=None):
    return Note(id=f"n{i}", title=title, content=content, user_id='u1', tags=tags or [], experiment_id='e1')


def test_save_and_list_notes(backend, user):
    note = note_svc.save_note(backend, user['id'], 'e1',
                              {'title': 'Day 1', 'content': 'Seeded plates', 'tags': ['setup']})
    assert note.id.startswith('note_')
    assert note.experiment_id == 'e1'
    note_svc.save_note(backend, user['id'], 'e2', {'title': 'Other', 'content': 'x'})
    listed = note_svc.list_notes(backend, 'e1')
    assert [n.id for n in listed] == [note.id]
    assert listed[0].tags == ['setup']


def test_update_and_delete_note(backend, user):
    note = note_svc.save_note(backend, user['id'], 'e1', {'title': 'Day 1', 'content': 'a'})
    updated = note_svc.save_note(backend, user['id'], 'e1', {'title': 'Day 1', 'content': 'b', 'tags': ['x']},
                                 existing=note)
    assert updated.content == 'b' and updated.tags == ['x']
    note_svc.delete_note(backend, note.id)
    assert note_svc.list_notes(backend, 'e1') == []


def test_filter_notes_by_search_and_tag():
    notes = [
        make_note(1, 'Plate reader', 'OD values', ['assay']),
        make_note(2, 'Contamination', 'plate 3 cloudy', ['issue', 'assay']),
        make_note(3, 'Ordering', 'tips', []),
    ]
    assert [n.id for n in note_svc.filter_notes(notes, 'PLATE')] == ['n1', 'n2']
    assert [n.id for n in note_svc.filter_notes(notes, '', 'issue')] == ['n2']
    assert [n.id for n in note_svc.filter_notes(notes, 'plate', 'assay')] == ['n1', 'n2']
    assert len(note_svc.filter_notes(notes, '', ALL)) == 3


def test_note_stats():
    notes = [make_note(1, 'a', tags=['x', 'y']), make_note(2, 'b', tags=['y'])]
    stats = note_svc.note_stats(notes)
    assert stats['total'] == 2 and stats['tags'] == 2
    assert stats['latest'].id == 'n1'
    assert note_svc.note_stats([])['latest'] is None
