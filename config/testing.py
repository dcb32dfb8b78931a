SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

MAX_ACCURACY_METERS = 30
SESSION_TIMEZONE = "Asia/Kolkata"
