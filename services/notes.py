"""Notes attached to an experiment (the Notes tab of the experiment detail)."""
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from loguru import logger

from domain.constants import ALL, ID_PREFIXES
from domain.models import Note, note_from_dict
from domain.validation import validate_note
from utils.dates import now_iso
from utils.ids import create_id_with_prefix
from utils.tags import unique_tags
from .backend import Backend


def list_notes(backend: Backend, experiment_id: str) -> List[Note]:
    rows = backend.db.notes.list(
        where={'experiment_id': experiment_id}, order_by={'created_at': 'desc'})
    return [note_from_dict(r) for r in rows]


def save_note(backend: Backend, user_id: str, experiment_id: str, form: Dict[str, Any],
              existing: Optional[Note] = None) -> Note:
    validate_note(form)
    payload = {
        'title': form['title'],
        'content': form['content'],
        'tags': list(form.get('tags') or []),
        'experiment_id': experiment_id,
        'user_id': user_id,
    }
    now = now_iso()
    if existing:
        saved = backend.db.notes.update(existing.id, {**payload, 'updated_at': now})
        logger.info("Updated note {}", existing.id)
        return note_from_dict(saved)

    note = Note(
        id=create_id_with_prefix(ID_PREFIXES['notes']),
        created_at=now,
        updated_at=now,
        **payload,
    )
    backend.db.notes.create(asdict(note))
    logger.info("Created note {} on experiment {}", note.id, experiment_id)
    return note


def delete_note(backend: Backend, note_id: str):
    backend.db.notes.delete(note_id)
    logger.info("Deleted note {}", note_id)


def filter_notes(notes: List[Note], search: str = '', tag: str = ALL) -> List[Note]:
    needle = (search or '').strip().lower()
    return [
        n for n in notes
        if (not needle or needle in n.title.lower() or needle in n.content.lower())
        and (tag == ALL or tag in n.tags)
    ]


def note_stats(notes: List[Note]) -> Dict[str, Any]:
    """Totals for the overview cards; notes are expected newest first."""
    return {
        'total': len(notes),
        'tags': len(unique_tags(n.tags for n in notes)),
        'latest': notes[0] if notes else None,
    }
