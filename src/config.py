"""
Content Page Editor - Configuration
All settings loaded from environment variables with sensible defaults.

The application holds no persistent state of its own.  Pages live behind
the remote content API (``CONTENT_API_BASE_URL``); this process only keeps
an in-memory cache of what it has fetched.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
_ = load_dotenv()

# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8000"))
APP_ENV = os.getenv("APP_ENV", "development")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "true").lower() == "true"

# Name shown in the sidebar header
SERVICE_NAME = os.getenv("SERVICE_NAME", "Service Name")

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

# ---------------------------------------------------------------------------
# Logging — stdout only
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# ---------------------------------------------------------------------------
# Remote content API
# ---------------------------------------------------------------------------
CONTENT_API_BASE_URL = os.getenv("CONTENT_API_BASE_URL", "http://localhost:3000")

# ---------------------------------------------------------------------------
# Page field limits
# ---------------------------------------------------------------------------
TITLE_MAX_LENGTH = 50
BODY_MIN_LENGTH = 10
BODY_MAX_LENGTH = 2000

# Title given to pages created from the sidebar
NEW_PAGE_TITLE = "新しいページ"
