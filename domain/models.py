from dataclasses import dataclass, field, fields
from typing import List, Dict, Optional, Any

from domain.constants import (
    DEFAULT_STATUS, DEFAULT_PROTOCOL_CATEGORY, DEFAULT_CARD_NOTE_CATEGORY, DEFAULT_CARD_NOTE_COLOR,
)
from utils.dates import now_iso
from utils.tags import parse_tags


@dataclass
class User:
    id: str
    name: str
    email: Optional[str] = None
    created_at: str = field(default_factory=now_iso)


@dataclass
class Experiment:
    id: str
    title: str
    description: str
    user_id: str
    status: str = DEFAULT_STATUS  # planning | in_progress | completed | paused
    start_date: str = field(default_factory=now_iso)
    end_date: Optional[str] = None
    protocol_id: Optional[str] = None
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)


@dataclass
class Protocol:
    id: str
    title: str
    description: str
    content: str
    user_id: str
    category: str = DEFAULT_PROTOCOL_CATEGORY
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)


@dataclass
class Note:
    id: str
    title: str
    content: str
    user_id: str
    tags: List[str] = field(default_factory=list)
    experiment_id: Optional[str] = None
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)


@dataclass
class ExperimentData:
    id: str
    experiment_id: str
    data_type: str
    data_value: str
    user_id: str
    measurement_unit: Optional[str] = None
    timestamp: str = field(default_factory=now_iso)
    created_at: str = field(default_factory=now_iso)


@dataclass
class CardNote:
    id: str
    title: str
    content: str
    user_id: str
    tags: List[str] = field(default_factory=list)
    category: str = DEFAULT_CARD_NOTE_CATEGORY
    color: str = DEFAULT_CARD_NOTE_COLOR
    is_favorite: bool = False
    created_at: str = field(default_factory=now_iso)
    updated_at: str = field(default_factory=now_iso)


def _known_fields(cls, d: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys the dataclass does not declare (store-side extras, legacy columns)."""
    allowed = {f.name for f in fields(cls)}
    return {k: v for k, v in d.items() if k in allowed}


def user_from_dict(d: Dict[str, Any]) -> User:
    return User(**_known_fields(User, d))


def experiment_from_dict(d: Dict[str, Any]) -> Experiment:
    filtered = _known_fields(Experiment, d)
    filtered['status'] = filtered.get('status') or DEFAULT_STATUS
    # empty strings from older forms mean "not set"
    filtered['end_date'] = filtered.get('end_date') or None
    filtered['protocol_id'] = filtered.get('protocol_id') or None
    return Experiment(**filtered)


def protocol_from_dict(d: Dict[str, Any]) -> Protocol:
    filtered = _known_fields(Protocol, d)
    filtered['category'] = filtered.get('category') or DEFAULT_PROTOCOL_CATEGORY
    return Protocol(**filtered)


def note_from_dict(d: Dict[str, Any]) -> Note:
    filtered = _known_fields(Note, d)
    filtered['tags'] = parse_tags(filtered.get('tags'))
    return Note(**filtered)


def experiment_data_from_dict(d: Dict[str, Any]) -> ExperimentData:
    filtered = _known_fields(ExperimentData, d)
    filtered['data_value'] = str(filtered.get('data_value', ''))
    filtered['measurement_unit'] = filtered.get('measurement_unit') or None
    return ExperimentData(**filtered)


def card_note_from_dict(d: Dict[str, Any]) -> CardNote:
    """Normalize a stored card note.

    Some rows carry tags as a JSON string and the favourite flag as 0/1.
    """
    filtered = _known_fields(CardNote, d)
    filtered['tags'] = parse_tags(filtered.get('tags'))
    raw_fav = filtered.get('is_favorite', False)
    try:
        filtered['is_favorite'] = float(raw_fav) > 0
    except (TypeError, ValueError):
        filtered['is_favorite'] = bool(raw_fav)
    filtered['category'] = filtered.get('category') or DEFAULT_CARD_NOTE_CATEGORY
    filtered['color'] = filtered.get('color') or DEFAULT_CARD_NOTE_COLOR
    return CardNote(**filtered)
