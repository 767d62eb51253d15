import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Hosted store (Supabase REST endpoint + anon key). Both are required.
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
STORE_TIMEOUT_SECONDS = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

# 0 loads the full attendance history
ATTENDANCE_LOOKBACK_DAYS = int(os.getenv("ATTENDANCE_LOOKBACK_DAYS", "0"))

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
