import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Attendance rules (plain values, not read from the environment)
MAX_ACCURACY_METERS = 30
SESSION_TIMEZONE = "Asia/Kolkata"
