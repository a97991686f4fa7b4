"""Measurement records of one experiment (the Data tab of the experiment detail)."""
import io
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
from loguru import logger

from domain.constants import ALL, DATA_TYPE_LABELS, DATA_TYPES, DATA_UNITS, ID_PREFIXES
from domain.models import ExperimentData, experiment_data_from_dict
from domain.validation import ValidationError, validate_experiment_data
from utils.dates import now_iso, safe_date
from utils.ids import create_id_with_prefix
from .backend import Backend


def list_data(backend: Backend, experiment_id: str) -> List[ExperimentData]:
    rows = backend.db.experiment_data.list(
        where={'experiment_id': experiment_id}, order_by={'timestamp': 'desc'})
    return [experiment_data_from_dict(r) for r in rows]


def save_data(backend: Backend, user_id: str, experiment_id: str, form: Dict[str, Any],
              existing: Optional[ExperimentData] = None) -> ExperimentData:
    validate_experiment_data(form)
    if form['data_type'] not in DATA_TYPES:
        raise ValidationError(f"Unknown data type: {form['data_type']}")
    timestamp = safe_date(form.get('timestamp'))
    payload = {
        'experiment_id': experiment_id,
        'data_type': form['data_type'],
        'data_value': str(form['data_value']),
        'measurement_unit': form.get('measurement_unit') or None,
        'timestamp': timestamp.isoformat().replace('+00:00', 'Z') if timestamp else now_iso(),
        'user_id': user_id,
    }
    if existing:
        saved = backend.db.experiment_data.update(existing.id, payload)
        logger.info("Updated data record {}", existing.id)
        return experiment_data_from_dict(saved)

    record = ExperimentData(
        id=create_id_with_prefix(ID_PREFIXES['experiment_data']),
        created_at=now_iso(),
        **payload,
    )
    backend.db.experiment_data.create(asdict(record))
    logger.info("Created data record {} on experiment {}", record.id, experiment_id)
    return record


def unit_choices(data_type: str, current: Optional[str] = None) -> Tuple[List[Optional[str]], int]:
    """Unit options for ``data_type`` (``None`` first, meaning no unit) and the index to preselect.

    A stored unit that is not in the table stays selectable so an edit never rewrites it.
    """
    options: List[Optional[str]] = [None] + DATA_UNITS.get(data_type, [])
    if current and current not in options:
        options.append(current)
    return options, options.index(current) if current else 0


def delete_data(backend: Backend, record_id: str):
    backend.db.experiment_data.delete(record_id)
    logger.info("Deleted data record {}", record_id)


def present_types(records: List[ExperimentData]) -> List[str]:
    """Data types that occur in ``records``, first-seen order."""
    return list(dict.fromkeys(r.data_type for r in records))


def filter_data(records: List[ExperimentData], data_type: str = ALL) -> List[ExperimentData]:
    if data_type == ALL:
        return list(records)
    return [r for r in records if r.data_type == data_type]


def data_stats(records: List[ExperimentData]) -> Dict[str, Any]:
    """Totals for the overview cards; records are expected newest first."""
    return {
        'total': len(records),
        'types': len(present_types(records)),
        'latest': records[0] if records else None,
    }


def to_dataframe(records: List[ExperimentData]) -> pd.DataFrame:
    columns = ['timestamp', 'data_type', 'data_value', 'measurement_unit']
    if not records:
        return pd.DataFrame(columns=['id'] + columns)
    df = pd.DataFrame([asdict(r) for r in records])
    df['data_type'] = df['data_type'].map(lambda t: DATA_TYPE_LABELS.get(t, t))
    return df[['id'] + columns]


def to_csv(records: List[ExperimentData]) -> str:
    buf = io.StringIO()
    to_dataframe(records).to_csv(buf, index=False)
    return buf.getvalue()


def numeric_series(records: List[ExperimentData]) -> pd.DataFrame:
    """Pivot numeric measurements into one column per data type, indexed by time.

    Values that do not parse as numbers (observations, free text) are skipped.
    """
    if not records:
        return pd.DataFrame()
    df = pd.DataFrame([asdict(r) for r in records])
    df['value'] = pd.to_numeric(df['data_value'], errors='coerce')
    df['time'] = pd.to_datetime(df['timestamp'], errors='coerce', utc=True, format='ISO8601')
    df = df.dropna(subset=['value', 'time'])
    if df.empty:
        return pd.DataFrame()
    df['series'] = df['data_type'].map(lambda t: DATA_TYPE_LABELS.get(t, t))
    return df.pivot_table(index='time', columns='series', values='value', aggfunc='mean').sort_index()
