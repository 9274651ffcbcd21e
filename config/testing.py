import os

from .config import db_config_from_env, env_flag

DB_CONFIG = db_config_from_env(default_password="")

DEBUG = False
TESTING = True

LATE_THRESHOLD = os.getenv("LATE_THRESHOLD", "10:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
LOG_DIR = None

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
