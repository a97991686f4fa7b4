from demo.sample_data import CARD_NOTES, EXPERIMENTS, PROTOCOLS, seed_demo
from services import experiment_data as data_svc
from services import experiments as experiment_svc
from services import protocols as protocol_svc
from services.dashboard import get_overview


def test_seed_demo_populates_every_table(backend, user):
    counts = seed_demo(backend, user['id'], seed=1)
    assert counts['protocols'] == len(PROTOCOLS)
    assert counts['experiments'] == len(EXPERIMENTS)
    assert counts['card_notes'] == len(CARD_NOTES)
    assert counts['notes'] == len(EXPERIMENTS)
    assert len(backend.db.experiment_data.list()) == counts['experiment_data']


def test_seeded_experiments_link_existing_protocols(backend, user):
    seed_demo(backend, user['id'], seed=1)
    protocol_ids = {p.id for p in protocol_svc.list_protocols(backend, user['id'])}
    for exp in experiment_svc.list_experiments(backend, user['id']):
        assert exp.protocol_id in protocol_ids
        assert data_svc.list_data(backend, exp.id)


def test_seeded_overview(backend, user):
    seed_demo(backend, user['id'], seed=1)
    overview = get_overview(backend, user['id'])
    assert overview['total'] == 3
    assert overview['completed'] == 1
    assert overview['in_progress'] == 1
