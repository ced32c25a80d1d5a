from pathlib import Path
from basket.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()
STORAGE_FILE = DATA_DIR / 'storage.json'

__all__ = ['DATA_DIR', 'STORAGE_FILE']
