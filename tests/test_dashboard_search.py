from services import card_notes as card_note_svc
from services import protocols as protocol_svc
from services.dashboard import get_overview
from services.search import search_all


def _add_experiment(backend, user_id, i, status, created_at):
    backend.db.experiments.create({
        'id': f'e{i}', 'title': f'Experiment {i}', 'description': 'culture growth', 'user_id': user_id,
        'status': status, 'start_date': '2024-01-01T00:00:00Z', 'created_at': created_at,
    })


def test_overview_counts_all_experiments(backend, user):
    statuses = ['planning', 'in_progress', 'in_progress', 'completed', 'paused', 'completed', 'in_progress']
    for i, status in enumerate(statuses):
        _add_experiment(backend, user['id'], i, status, f'2024-01-0{i + 1}T00:00:00Z')
    _add_experiment(backend, 'someone-else', 99, 'completed', '2024-02-01T00:00:00Z')
    protocol_svc.save_protocol(backend, user['id'], {'title': 'PCR', 'description': 'd', 'content': 'c'})

    overview = get_overview(backend, user['id'], recent_limit=5)
    assert overview['total'] == 7
    assert overview['in_progress'] == 3
    assert overview['completed'] == 2
    assert overview['protocols'] == 1
    assert [e.id for e in overview['recent']] == ['e6', 'e5', 'e4', 'e3', 'e2']


def test_overview_empty(backend, user):
    overview = get_overview(backend, user['id'])
    assert overview == {'total': 0, 'in_progress': 0, 'completed': 0, 'protocols': 0, 'recent': []}


def test_search_spans_record_kinds(backend, user):
    _add_experiment(backend, user['id'], 1, 'planning', '2024-01-01T00:00:00Z')
    protocol_svc.save_protocol(backend, user['id'],
                               {'title': 'Passaging', 'description': 'split culture', 'content': 'steps'})
    card_note_svc.save_card_note(backend, user['id'],
                                 {'title': 'Media', 'content': 'buy more', 'tags': ['culture']})
    hits = search_all(backend, user['id'], 'CULTURE')
    assert [(h.page, h.kind) for h in hits] == [
        ('experiments', 'Experiment'), ('protocols', 'Protocol'), ('notes', 'Note')]
    assert hits[0].record_id == 'e1'


def test_search_blank_term_returns_nothing(backend, user):
    _add_experiment(backend, user['id'], 1, 'planning', '2024-01-01T00:00:00Z')
    assert search_all(backend, user['id'], '   ') == []


def test_search_respects_limit(backend, user):
    for i in range(5):
        _add_experiment(backend, user['id'], i, 'planning', f'2024-01-0{i + 1}T00:00:00Z')
    assert len(search_all(backend, user['id'], 'experiment', limit=3)) == 3
