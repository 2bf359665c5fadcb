"""Configuration management for the MyGourmet application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Persistence backend (PHP/MySQL style endpoint script, ?endpoint=...)
BACKEND_URL: Final[str] = os.getenv('BACKEND_URL', 'http://localhost:8080/api.php')
BACKEND_ENABLED: Final[bool] = os.getenv('BACKEND_ENABLED', 'True').lower() == 'true'

# Outbound HTTP (backend calls, recipe pages, images)
HTTP_TIMEOUT: Final[float] = float(os.getenv('HTTP_TIMEOUT', '10'))
USER_AGENT: Final[str] = os.getenv(
    'USER_AGENT',
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
)

# Category edits are buffered and written after this many seconds of quiet
CATEGORY_SAVE_DELAY_SECONDS: Final[float] = float(os.getenv('CATEGORY_SAVE_DELAY_SECONDS', '2.0'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
CACHE_DIR: Final[Path] = Path(os.getenv('CACHE_DIR', str(BASE_DIR / 'data')))
