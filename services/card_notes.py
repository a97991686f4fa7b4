"""Standalone card notes: categorized, colored, optionally starred."""
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from loguru import logger

from domain.constants import (
    ALL, CARD_NOTE_CATEGORIES, CARD_NOTE_COLORS, DEFAULT_CARD_NOTE_CATEGORY, DEFAULT_CARD_NOTE_COLOR,
    ID_PREFIXES,
)
from domain.models import CardNote, card_note_from_dict
from domain.validation import ValidationError, validate_note
from utils.dates import now_iso
from utils.ids import create_id_with_prefix
from utils.tags import unique_tags
from .backend import Backend

MAX_VISIBLE_TAGS = 3


def list_card_notes(backend: Backend, user_id: str) -> List[CardNote]:
    rows = backend.db.card_notes.list(where={'user_id': user_id}, order_by={'created_at': 'desc'})
    return [card_note_from_dict(r) for r in rows]


def get_card_note(backend: Backend, note_id: str) -> Optional[CardNote]:
    row = backend.db.card_notes.get(note_id)
    return card_note_from_dict(row) if row else None


def save_card_note(backend: Backend, user_id: str, form: Dict[str, Any],
                   existing: Optional[CardNote] = None) -> CardNote:
    validate_note(form)
    category = form.get('category') or DEFAULT_CARD_NOTE_CATEGORY
    color = form.get('color') or DEFAULT_CARD_NOTE_COLOR
    if category not in CARD_NOTE_CATEGORIES:
        raise ValidationError(f"Unknown note category: {category}")
    if color not in CARD_NOTE_COLORS:
        raise ValidationError(f"Unknown note color: {color}")
    now = now_iso()
    payload = {
        'title': form['title'].strip(),
        'content': form['content'].strip(),
        'category': category,
        'color': color,
        'tags': list(form.get('tags') or []),
        'is_favorite': bool(form.get('is_favorite')),
        'user_id': user_id,
        'updated_at': now,
    }
    if existing:
        saved = backend.db.card_notes.update(existing.id, payload)
        logger.info("Updated card note {}", existing.id)
        return card_note_from_dict(saved)

    note = CardNote(id=create_id_with_prefix(ID_PREFIXES['card_notes']), created_at=now, **payload)
    backend.db.card_notes.create(asdict(note))
    logger.info("Created card note {} for user {}", note.id, user_id)
    return note


def toggle_favorite(backend: Backend, note: CardNote) -> CardNote:
    saved = backend.db.card_notes.update(note.id, {
        'is_favorite': not note.is_favorite,
        'updated_at': now_iso(),
    })
    logger.info("Toggled favourite on card note {}", note.id)
    return card_note_from_dict(saved)


def delete_card_note(backend: Backend, note_id: str):
    backend.db.card_notes.delete(note_id)
    logger.info("Deleted card note {}", note_id)


def filter_card_notes(notes: List[CardNote], search: str = '', category: str = ALL,
                      favorites_only: bool = False) -> List[CardNote]:
    """Search hits title, content or any tag (case-insensitive)."""
    needle = (search or '').strip().lower()
    result = []
    for n in notes:
        matches_search = (not needle or needle in n.title.lower() or needle in n.content.lower()
                          or any(needle in t.lower() for t in n.tags))
        matches_category = category == ALL or n.category == category
        matches_favorite = not favorites_only or n.is_favorite
        if matches_search and matches_category and matches_favorite:
            result.append(n)
    return result


def card_note_stats(notes: List[CardNote]) -> Dict[str, int]:
    return {
        'total': len(notes),
        'favorites': sum(1 for n in notes if n.is_favorite),
        'categories': len({n.category for n in notes}),
        'tags': len(unique_tags(n.tags for n in notes)),
    }


def display_color(color: str) -> str:
    """Palette colour to render; anything outside the palette falls back to the default."""
    return color if isinstance(color, str) and color in CARD_NOTE_COLORS else DEFAULT_CARD_NOTE_COLOR


def visible_tags(tags: List[str], limit: int = MAX_VISIBLE_TAGS):
    """First ``limit`` tags and how many were left out."""
    return tags[:limit], max(len(tags) - limit, 0)
