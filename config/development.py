import os

from .config import db_config_from_env, env_flag

DB_CONFIG = db_config_from_env(default_password="workday")

DEBUG = True

# Check-in at or after this local time counts as late.
LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "10:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_DIR = os.getenv("LOG_DIR", ".local/logs")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
