"""
Aggregates for the dashboard page. Reads only; the page itself decides how to
render the numbers.
"""
from typing import Any, Dict

from . import experiments as experiment_svc, protocols as protocol_svc
from .backend import Backend


def get_overview(backend: Backend, user_id: str, recent_limit: int = 5) -> Dict[str, Any]:
    """Experiment counters, protocol count and the most recent experiments."""
    all_experiments = experiment_svc.list_experiments(backend, user_id)
    counts = experiment_svc.status_counts(all_experiments)
    protocols = protocol_svc.list_protocols(backend, user_id)
    recent = experiment_svc.list_experiments(backend, user_id, limit=recent_limit)
    return {
        'total': len(all_experiments),
        'in_progress': counts.get('in_progress', 0),
        'completed': counts.get('completed', 0),
        'protocols': len(protocols),
        'recent': recent,
    }
