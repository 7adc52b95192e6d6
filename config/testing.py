import os

# Tests always run against the in-memory store
MONGO_URI = None
MONGO_DB_NAME = "rfid_access_test"

COOLDOWN_MS = 3000

DEBUG = False
TESTING = True
SHOW_ERROR_DETAILS = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DAILY_RESET_ENABLED = False

AUTO_INIT_DB = False
