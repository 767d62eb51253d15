import os

SECRET_KEY = "test-secret"

SUPABASE_URL = os.getenv("SUPABASE_URL", "http://localhost:54321")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "test-anon-key")
STORE_TIMEOUT_SECONDS = 2.0

ATTENDANCE_LOOKBACK_DAYS = 0

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_FILE = None
