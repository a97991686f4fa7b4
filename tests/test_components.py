from unittest.mock import MagicMock

from domain.models import CardNote, Experiment
from ui.components import base, cards
from views.experiment_detail import overview_metrics


def test_base_css_injected_on_every_run(monkeypatch):
    st_mock = MagicMock()
    monkeypatch.setattr(base, 'st', st_mock)
    base.inject_base_css()
    base.inject_base_css()
    assert st_mock.markdown.call_count == 2
    assert '<style>' in st_mock.markdown.call_args[0][0]


def test_card_note_border_uses_palette_colour(monkeypatch):
    st_mock = MagicMock()
    st_mock.columns.side_effect = lambda n: [MagicMock() for _ in range(n)]
    monkeypatch.setattr(cards, 'st', st_mock)
    note = CardNote(id='c1', title='t', content='c', user_id='u1', color='red;x:url(evil)')
    cards.card_note_card(note)
    html = st_mock.markdown.call_args[0][0]
    assert 'evil' not in html
    assert 'border-color:#f59e0b;' in html


def test_overview_end_date_not_set():
    exp = Experiment(id='e1', title='t', description='d', user_id='u1', start_date='2024-01-01T00:00:00Z')
    metrics = dict(overview_metrics(exp, 4))
    assert metrics['End date'] == 'Not set'
    assert 'Planned end' not in metrics
    assert metrics['Data records'] == 4

    exp.end_date = '2024-01-03T00:00:00Z'
    metrics = dict(overview_metrics(exp, 0))
    assert metrics['End date'] == 'January 03, 2024'
    assert metrics['Duration'] == '2 days'
