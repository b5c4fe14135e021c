"""Configuration management for the Smart Pantry application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Google Identity Services
GOOGLE_CLIENT_ID: Final[str] = os.getenv('GOOGLE_CLIENT_ID', 'YOUR_GOOGLE_CLIENT_ID.apps.googleusercontent.com')

# Reminder / consumption heuristics
EXPIRY_WINDOW_DAYS: Final[int] = int(os.getenv('EXPIRY_WINDOW_DAYS', '5'))
USE_DECREMENT: Final[int] = int(os.getenv('USE_DECREMENT', '1'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
STORAGE_DIR: Final[Path] = Path(os.getenv('PANTRY_STORAGE_DIR', str(DATA_DIR / 'storage')))
