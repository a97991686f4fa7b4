"""Form-level checks run before anything is sent to the store."""
from typing import Any, Dict, Iterable, Tuple

from utils.dates import safe_date


class ValidationError(ValueError):
    """A form is incomplete; the message is shown to the user as-is."""


def require_fields(form: Dict[str, Any], required: Iterable[Tuple[str, str]]):
    """Raise for the first ``(field, label)`` whose value is blank after trimming."""
    for key, label in required:
        value = form.get(key)
        if value is None or not str(value).strip():
            raise ValidationError(f"Please enter the {label}.")


def validate_experiment(form: Dict[str, Any]):
    require_fields(form, [('title', 'experiment title'),
                          ('description', 'experiment description')])
    start = safe_date(form.get('start_date'))
    if start is None:
        raise ValidationError("Please choose a valid start date.")
    end_raw = form.get('end_date')
    if end_raw:
        end = safe_date(end_raw)
        if end is None:
            raise ValidationError("The end date is not a valid date.")
        if end.date() < start.date():
            raise ValidationError("The end date cannot be before the start date.")


def validate_protocol(form: Dict[str, Any]):
    require_fields(form, [('title', 'protocol title'),
                          ('description', 'protocol description'),
                          ('content', 'protocol content')])


def validate_note(form: Dict[str, Any]):
    require_fields(form, [('title', 'note title'), ('content', 'note content')])


def validate_experiment_data(form: Dict[str, Any]):
    require_fields(form, [('data_type', 'data type'), ('data_value', 'data value')])
