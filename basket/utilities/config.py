"""Configuration management for the basket service."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# OpenAI-compatible endpoint
OPENAI_API_KEY: Final[Optional[str]] = os.getenv('OPENAI_API_KEY')
OPENAI_API_PROXY: Final[Optional[str]] = os.getenv('OPENAI_API_PROXY') or None
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('BASKET_DATA_DIR', str(BASE_DIR / 'data')))
