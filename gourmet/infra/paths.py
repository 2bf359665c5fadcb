from pathlib import Path

from gourmet.utilities.config import CACHE_DIR

# Centralized paths for the local cache records (single source of truth)
DATA_DIR = Path(CACHE_DIR).resolve()
DISHES_FILE = 'dishes.json'
PLANS_FILE = 'plans.json'
CATEGORIES_FILE = 'categories.json'

__all__ = ['DATA_DIR', 'DISHES_FILE', 'PLANS_FILE', 'CATEGORIES_FILE']
