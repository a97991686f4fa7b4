import datetime as dt
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from loguru import logger

from domain.constants import ALL, DEFAULT_PROTOCOL_CATEGORY, ID_PREFIXES, PROTOCOL_CATEGORIES
from domain.models import Protocol, protocol_from_dict
from domain.validation import ValidationError, validate_protocol
from utils.dates import is_within_days, now_iso
from utils.ids import create_id_with_prefix
from .backend import Backend


def list_protocols(backend: Backend, user_id: str, order_by: Optional[Dict[str, str]] = None) -> List[Protocol]:
    rows = backend.db.protocols.list(
        where={'user_id': user_id}, order_by=order_by or {'created_at': 'desc'})
    return [protocol_from_dict(r) for r in rows]


def list_protocol_choices(backend: Backend, user_id: str) -> List[Protocol]:
    """Protocols for pickers, alphabetical."""
    return list_protocols(backend, user_id, order_by={'title': 'asc'})


def get_protocol(backend: Backend, protocol_id: str) -> Optional[Protocol]:
    row = backend.db.protocols.get(protocol_id)
    return protocol_from_dict(row) if row else None


def save_protocol(backend: Backend, user_id: str, form: Dict[str, Any],
                  existing: Optional[Protocol] = None) -> Protocol:
    validate_protocol(form)
    category = form.get('category') or DEFAULT_PROTOCOL_CATEGORY
    if category not in PROTOCOL_CATEGORIES:
        raise ValidationError(f"Unknown protocol category: {category}")
    payload = {
        'title': form['title'].strip(),
        'description': form['description'].strip(),
        'content': form['content'].strip(),
        'category': category,
        'user_id': user_id,
    }
    now = now_iso()
    if existing:
        saved = backend.db.protocols.update(existing.id, {**payload, 'updated_at': now})
        logger.info("Updated protocol {}", existing.id)
        return protocol_from_dict(saved)

    protocol = Protocol(
        id=create_id_with_prefix(ID_PREFIXES['protocols']),
        created_at=now,
        updated_at=now,
        **payload,
    )
    backend.db.protocols.create(asdict(protocol))
    logger.info("Created protocol {} for user {}", protocol.id, user_id)
    return protocol


def delete_protocol(backend: Backend, protocol_id: str):
    # experiments that reference it keep the dangling id
    backend.db.protocols.delete(protocol_id)
    logger.info("Deleted protocol {}", protocol_id)


def filter_protocols(protocols: List[Protocol], search: str = '', category: str = ALL) -> List[Protocol]:
    needle = (search or '').strip().lower()
    return [
        p for p in protocols
        if (not needle or needle in p.title.lower() or needle in p.description.lower())
        and (category == ALL or p.category == category)
    ]


def protocol_stats(protocols: List[Protocol], recent_days: int = 7,
                   now: Optional[dt.datetime] = None) -> Dict[str, int]:
    return {
        'total': len(protocols),
        'categories': len({p.category for p in protocols}),
        'recent': sum(1 for p in protocols if is_within_days(p.created_at, recent_days, now=now)),
    }
