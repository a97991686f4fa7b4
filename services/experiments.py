from dataclasses import asdict
from typing import Any, Dict, List, Optional

from loguru import logger

from domain.constants import ALL, DEFAULT_STATUS, EXPERIMENT_STATUSES, ID_PREFIXES
from domain.models import Experiment, experiment_from_dict
from domain.validation import ValidationError, validate_experiment
from utils.dates import now_iso, safe_date
from utils.ids import create_id_with_prefix
from .backend import Backend


def list_experiments(backend: Backend, user_id: str, limit: Optional[int] = None) -> List[Experiment]:
    rows = backend.db.experiments.list(
        where={'user_id': user_id}, order_by={'created_at': 'desc'}, limit=limit)
    return [experiment_from_dict(r) for r in rows]


def get_experiment(backend: Backend, experiment_id: str) -> Optional[Experiment]:
    row = backend.db.experiments.get(experiment_id)
    return experiment_from_dict(row) if row else None


def _to_iso(value: Any) -> Optional[str]:
    date = safe_date(value)
    if date is None:
        return None
    return date.isoformat().replace('+00:00', 'Z')


def save_experiment(backend: Backend, user_id: str, form: Dict[str, Any],
                    existing: Optional[Experiment] = None) -> Experiment:
    """Create a new experiment or update ``existing`` from form values.

    Raises ValidationError when a required field is blank.
    """
    validate_experiment(form)
    status = form.get('status') or DEFAULT_STATUS
    if status not in EXPERIMENT_STATUSES:
        raise ValidationError(f"Unknown experiment status: {status}")

    payload = {
        'title': form['title'].strip(),
        'description': form['description'].strip(),
        'status': status,
        'start_date': _to_iso(form.get('start_date')),
        'end_date': _to_iso(form.get('end_date')) if form.get('end_date') else None,
        'protocol_id': form.get('protocol_id') or None,
        'user_id': user_id,
    }
    now = now_iso()
    if existing:
        saved = backend.db.experiments.update(existing.id, {**payload, 'updated_at': now})
        logger.info("Updated experiment {}", existing.id)
        return experiment_from_dict(saved)

    experiment = Experiment(
        id=create_id_with_prefix(ID_PREFIXES['experiments']),
        created_at=now,
        updated_at=now,
        **payload,
    )
    backend.db.experiments.create(asdict(experiment))
    logger.info("Created experiment {} for user {}", experiment.id, user_id)
    return experiment


def delete_experiment(backend: Backend, experiment_id: str):
    backend.db.experiments.delete(experiment_id)
    logger.info("Deleted experiment {}", experiment_id)


def filter_experiments(experiments: List[Experiment], search: str = '', status: str = ALL) -> List[Experiment]:
    """Case-insensitive match on title or description, optionally narrowed to one status."""
    needle = (search or '').strip().lower()
    result = []
    for exp in experiments:
        matches_search = not needle or needle in exp.title.lower() or needle in exp.description.lower()
        matches_status = status == ALL or exp.status == status
        if matches_search and matches_status:
            result.append(exp)
    return result


def status_counts(experiments: List[Experiment]) -> Dict[str, int]:
    counts = {s: 0 for s in EXPERIMENT_STATUSES}
    for exp in experiments:
        counts[exp.status] = counts.get(exp.status, 0) + 1
    return counts


def count_using_protocol(experiments: List[Experiment], protocol_id: str) -> int:
    return sum(1 for exp in experiments if exp.protocol_id == protocol_id)
