import json
import os
import tempfile
from typing import List, Dict, Any

from loguru import logger

from config import settings

DATA_DIR = os.path.normpath(settings.data_dir)

TABLES = (
    'users',
    'experiments',
    'protocols',
    'notes',
    'experiment_data',
    'card_notes',
)


def _path(key: str) -> str:
    if key not in TABLES:
        raise KeyError(f"Unknown table: {key}")
    return os.path.join(DATA_DIR, f"{key}.json")


def load_list(key: str) -> List[Dict[str, Any]]:
    file_path = _path(key)
    if not os.path.exists(file_path):
        return []
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError):
        logger.exception("Could not read table {} from {}", key, file_path)
        return []
    if not isinstance(data, list):
        logger.warning("Table {} is not a JSON list; treating it as empty", key)
        return []
    return data


def atomic_write(key: str, data: List[Dict[str, Any]]):
    file_path = _path(key)
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    # temp file in the same directory so the final rename never crosses filesystems
    tmp_fd, tmp_path = tempfile.mkstemp(
        prefix='tmp_', suffix='.json', dir=os.path.dirname(file_path))
    try:
        with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, file_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def replace_all(key: str, items: List[Dict[str, Any]]):
    atomic_write(key, items)
