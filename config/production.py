import os

from .config import env_flag, env_positive_int, mongo_uri_from_env

MONGO_URI = mongo_uri_from_env()
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "rfid_access")

COOLDOWN_MS = env_positive_int("COOLDOWN_MS", 3000)

DEBUG = False
# 500 responses carry a generic message only
SHOW_ERROR_DETAILS = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DAILY_RESET_ENABLED = env_flag("DAILY_RESET_ENABLED", "1")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "0")
