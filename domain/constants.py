"""
Centralized constants for the lab notebook: enum values, their display labels,
palettes and unit tables. Views and services read these so that a status or
category is spelled the same everywhere.
"""

# Experiment lifecycle
EXPERIMENT_STATUSES = ["planning", "in_progress", "completed", "paused"]
STATUS_LABELS = {
    "planning": "Planning",
    "in_progress": "In progress",
    "completed": "Completed",
    "paused": "Paused",
}
STATUS_ICONS = {
    "planning": "🗓️",
    "in_progress": "⏳",
    "completed": "✅",
    "paused": "⏸️",
}
DEFAULT_STATUS = "planning"

# Protocol categories
PROTOCOL_CATEGORIES = ["molecular", "cell", "protein", "analytical", "other"]
PROTOCOL_CATEGORY_LABELS = {
    "molecular": "Molecular biology",
    "cell": "Cell biology",
    "protein": "Protein",
    "analytical": "Analytical",
    "other": "Other",
}
DEFAULT_PROTOCOL_CATEGORY = "other"

# Measurement data types and the units offered for each
DATA_TYPES = ["temperature", "ph", "concentration", "volume", "weight",
              "time", "count", "percentage", "observation", "other"]
DATA_TYPE_LABELS = {
    "temperature": "Temperature",
    "ph": "pH",
    "concentration": "Concentration",
    "volume": "Volume",
    "weight": "Weight",
    "time": "Time",
    "count": "Count",
    "percentage": "Percentage",
    "observation": "Observation",
    "other": "Other",
}
DATA_UNITS = {
    "temperature": ["°C", "°F", "K"],
    "ph": ["pH"],
    "concentration": ["mol/L", "g/L", "mg/L", "μg/L", "%"],
    "volume": ["mL", "L", "μL"],
    "weight": ["g", "kg", "mg", "μg"],
    "time": ["s", "min", "h", "d"],
    "count": ["pcs", "times"],
    "percentage": ["%"],
    "observation": [],
    "other": [],
}

# Card notes
CARD_NOTE_CATEGORIES = ["general", "research", "ideas",
                        "references", "methods", "observations"]
CARD_NOTE_CATEGORY_LABELS = {
    "general": "General",
    "research": "Research",
    "ideas": "Ideas",
    "references": "References",
    "methods": "Methods",
    "observations": "Observations",
}
DEFAULT_CARD_NOTE_CATEGORY = "general"

CARD_NOTE_COLORS = {
    "#f59e0b": "Amber",
    "#ef4444": "Red",
    "#10b981": "Green",
    "#3b82f6": "Blue",
    "#8b5cf6": "Purple",
    "#f97316": "Orange",
    "#06b6d4": "Cyan",
    "#84cc16": "Lime",
}
DEFAULT_CARD_NOTE_COLOR = "#f59e0b"

# Filter sentinel shared by every list ("all statuses", "all categories", ...)
ALL = "all"

# Id prefixes per record kind
ID_PREFIXES = {
    "users": "user",
    "experiments": "exp",
    "protocols": "protocol",
    "notes": "note",
    "experiment_data": "data",
    "card_notes": "card",
}

SOP_REMINDERS = [
    "Make sure all instruments are calibrated and reagents are in date.",
    "Record experiment data as you go, not at the end of the day.",
    "Clean the bench and file your records before leaving.",
]
