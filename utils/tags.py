import json
from typing import Any, Iterable, List


def add_tag(tags: List[str], new_tag: str) -> List[str]:
    """Return tags with ``new_tag`` appended; blanks and duplicates are ignored."""
    tag = (new_tag or '').strip()
    if not tag or tag in tags:
        return list(tags)
    return [*tags, tag]


def remove_tag(tags: List[str], tag: str) -> List[str]:
    return [t for t in tags if t != tag]


def unique_tags(tag_lists: Iterable[List[str]]) -> List[str]:
    """Distinct tags in first-seen order."""
    seen = {}
    for tags in tag_lists:
        for t in tags:
            seen.setdefault(t, None)
    return list(seen)


def parse_tags(raw: Any) -> List[str]:
    """Accept a list or a JSON-encoded list (as some stored rows carry)."""
    if raw is None or raw == '':
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return [raw]
    if isinstance(raw, (list, tuple)):
        return [str(t) for t in raw]
    return []
