from dataclasses import dataclass
from typing import List

from . import card_notes as card_note_svc, experiments as experiment_svc, protocols as protocol_svc
from .backend import Backend


@dataclass
class SearchHit:
    page: str  # page key in app.PAGE_REGISTRY
    record_id: str
    title: str
    kind: str


def _hit(needle: str, *texts: str) -> bool:
    return any(needle in (t or '').lower() for t in texts)


def search_all(backend: Backend, user_id: str, term: str, limit: int = 20) -> List[SearchHit]:
    """Case-insensitive search over experiments, protocols and card notes."""
    needle = (term or '').strip().lower()
    if not needle:
        return []
    hits: List[SearchHit] = []
    for exp in experiment_svc.list_experiments(backend, user_id):
        if _hit(needle, exp.title, exp.description):
            hits.append(SearchHit('experiments', exp.id, exp.title, 'Experiment'))
    for p in protocol_svc.list_protocols(backend, user_id):
        if _hit(needle, p.title, p.description, p.content):
            hits.append(SearchHit('protocols', p.id, p.title, 'Protocol'))
    for n in card_note_svc.list_card_notes(backend, user_id):
        if _hit(needle, n.title, n.content, *n.tags):
            hits.append(SearchHit('notes', n.id, n.title, 'Note'))
    return hits[:limit]
