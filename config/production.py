import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MAX_ACCURACY_METERS = 30
SESSION_TIMEZONE = "Asia/Kolkata"
