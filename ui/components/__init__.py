"""
Reusable UI components for the Streamlit pages.

- `base`: CSS injection, badges, metric rows and the delete confirmation prompt.
- `cards`: one card/row renderer per record kind; each returns the action the
  user clicked (``'view'``, ``'edit'``, ``'delete'``...) or None.
- `tag_editor`: add/remove tags outside of a form.

Import from here (`from ui.components import experiment_card`) rather than the
submodules.
"""

from .base import (
    inject_base_css,
    badge,
    status_badge,
    category_badge,
    data_type_badge,
    render_badges,
    metric_row,
    confirm_delete_prompt,
)

from .cards import (
    experiment_card,
    protocol_card,
    card_note_card,
    data_row,
    note_row,
)

from .tag_editor import (
    tag_editor,
    reset_tag_editor,
)
